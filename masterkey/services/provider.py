"""
Progression Service Provider

Holds a set of progression services and finds the one best suited to a
set of configurations.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..exceptions import ProgressionServiceProviderError
from ..interfaces import ProgressionService
from ..types import ProcessingCapability

logger = logging.getLogger(__name__)


class ProgressionServiceProvider:
    """Registers progression services and picks one per configuration."""

    def __init__(self, services: Iterable[ProgressionService] | None = None) -> None:
        self._services: list[ProgressionService] = []
        for service in services or ():
            self.register_service(service)

    def register_service(self, service: ProgressionService) -> None:
        if service not in self._services:
            self._services.append(service)

    def unregister_service(self, service: ProgressionService) -> None:
        if service in self._services:
            self._services.remove(service)

    @property
    def registered_services(self) -> list[ProgressionService]:
        return list(self._services)

    def find_service_for_configs(self, configs: str | None) -> ProgressionService:
        """
        Return the first service fully capable of processing the configs,
        else the first marginally capable one.
        """
        maybe_service: ProgressionService | None = None

        for service in self._services:
            capability = service.can_process_configs(configs)
            if capability is ProcessingCapability.YES:
                logger.debug("Selected %s.", service.name)
                return service
            if maybe_service is None and capability is ProcessingCapability.MAYBE:
                maybe_service = service

        if maybe_service is not None:
            logger.debug("Selected %s (marginal match).", maybe_service.name)
            return maybe_service

        message = "No suitable progression service could be found."
        logger.error(message)
        raise ProgressionServiceProviderError(message)


def create_service_provider(services: Iterable[ProgressionService] | None = None) -> ProgressionServiceProvider:
    """Create a provider; defaults to every auto-registered service."""
    if services is None:
        from .registry import discover_progression_services
        services = discover_progression_services()
    return ProgressionServiceProvider(services)
