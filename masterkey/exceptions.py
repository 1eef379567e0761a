"""
Exception hierarchy for the bitting list generator.

- ValidationError: caller-supplied criteria broke an invariant (recoverable)
- PreconditionError: the engine was used without criteria (programming error)
- ProgressionServiceError / ProgressionServiceProviderError: config handling
- GatewayError: request handling failed at some stage
"""


class MasterKeyError(Exception):
    """Base class for all bitting list errors."""


class ValidationError(MasterKeyError, ValueError):
    """Raised when progression criteria fail validation."""


class PreconditionError(MasterKeyError, RuntimeError):
    """Raised when the progression engine is invoked without criteria."""


class ProgressionServiceError(MasterKeyError):
    """Raised by progression services."""


class ProgressionServiceProviderError(MasterKeyError):
    """Raised when no suitable progression service can be found."""


class GatewayError(MasterKeyError):
    """Raised when a bitting list request cannot be handled."""
