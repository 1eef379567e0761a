"""
Bitting List Generator Configuration

Default settings for the services and gateway. Values can be set here,
overridden via environment variables, or updated at runtime.
"""

import logging
import os


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return int(raw)


class MasterKeyConfig:
    """Configuration class for bitting list generation settings."""

    def __init__(self):
        self.log_level: str = os.getenv("MASTERKEY_LOG_LEVEL", "WARNING").upper()

        # Generation guard; trees grow as step_count ** cut_count
        self.max_tree_nodes: int = _env_int("MASTERKEY_MAX_TREE_NODES", 2_000_000)

        # Seed for random criteria when a request does not carry one
        self.random_seed: int | None = _env_int("MASTERKEY_RANDOM_SEED", None)

        self.debug: bool = os.getenv("MASTERKEY_DEBUG", "false").lower() == "true"

    def update(self, **kwargs) -> 'MasterKeyConfig':
        """Update configuration values at runtime."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration parameter: {key}")
        return self

    def validate(self) -> bool:
        """Validate the configuration values."""
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Invalid log level: {self.log_level}")
        if self.max_tree_nodes < 1:
            raise ValueError(f"max_tree_nodes must be positive: {self.max_tree_nodes}")
        return True

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


# Global configuration instance
config = MasterKeyConfig()


def set_masterkey_config(**kwargs) -> MasterKeyConfig:
    """Convenience function to update global configuration."""
    return config.update(**kwargs)


def get_masterkey_config() -> MasterKeyConfig:
    """Get the global configuration instance."""
    return config


def configure_logging(level: str | None = None) -> None:
    """Install a basic stderr handler at the configured level."""
    logging.basicConfig(
        level=(level or config.effective_log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
