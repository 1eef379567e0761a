"""
Progression Service Registry

Services decorated with @auto_register are collected here at import time
and instantiated by discover_progression_services().
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# Service name -> class, in registration order
SERVICE_REGISTRY: dict[str, type] = {}


def auto_register(cls: type) -> type:
    """Class decorator that registers a progression service class."""
    SERVICE_REGISTRY[cls.__name__] = cls
    logger.debug("Registered progression service class %s.", cls.__name__)
    return cls


def list_services() -> list[str]:
    """List registered service class names."""
    return list(SERVICE_REGISTRY.keys())


def discover_progression_services() -> list[Any]:
    """Instantiate every auto-registered progression service."""
    logger.info("Discovering progression services.")
    services = []
    for class_name, cls in SERVICE_REGISTRY.items():
        services.append(cls())
        logger.debug("Added '%s' to the discovered services.", class_name)
    return services
