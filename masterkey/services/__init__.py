"""
Progression service implementations.

Importing this package registers the built-in services with the registry.
"""

from .base_service import AbstractTotalPositionProgressionService
from .generic_service import GenericTotalPositionProgressionService
from .random_service import RandomGenericTotalPositionProgressionService
from .registry import SERVICE_REGISTRY, auto_register, discover_progression_services, list_services
from .provider import ProgressionServiceProvider, create_service_provider

__all__ = [
    "AbstractTotalPositionProgressionService",
    "GenericTotalPositionProgressionService",
    "RandomGenericTotalPositionProgressionService",
    "SERVICE_REGISTRY",
    "auto_register",
    "discover_progression_services",
    "list_services",
    "ProgressionServiceProvider",
    "create_service_provider",
]
