"""
Bitting List Gateway

Receives a JSON configuration string, finds a progression service that can
interpret it, generates the bitting list and returns the JSON results.
Transport is left to the caller.
"""

from __future__ import annotations

import logging

from .exceptions import GatewayError, ProgressionServiceError, ProgressionServiceProviderError
from .serialization import results_to_json
from .services.provider import ProgressionServiceProvider, create_service_provider

logger = logging.getLogger(__name__)


class BittingListGateway:
    """Request handler for bitting list generation."""

    def __init__(self, service_provider: ProgressionServiceProvider | None = None) -> None:
        self.service_provider = service_provider or create_service_provider()

    def handle_request(self, request: str | None, indent: int | None = None) -> str:
        logger.info("BittingListGateway got a request.")
        logger.debug("Request: %s", request)

        try:
            service = self.service_provider.find_service_for_configs(request)
            logger.debug("Progression Service: %s", service.name)
            results = service.generate_bitting_list(request)
        except ProgressionServiceProviderError as e:
            self._fail("The ProgressionServiceProvider failed to find a service to process the request.", e)
        except ProgressionServiceError as e:
            self._fail("The ProgressionService failed to generate a bitting list.", e)

        response = results_to_json(results, indent=indent)
        logger.debug("Results: %d characters.", len(response))
        return response

    @staticmethod
    def _fail(message: str, cause: Exception) -> None:
        logger.error("%s Cause: %s", message, cause)
        raise GatewayError(f"{message} {cause}") from cause


def create_gateway() -> BittingListGateway:
    """Create a gateway over every auto-registered service."""
    return BittingListGateway()
