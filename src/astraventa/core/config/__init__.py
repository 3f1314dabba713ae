"""Configuration package.

``get_config()`` builds the process-wide ``Config`` on first use, so that
importing this package never reads the environment. Tests and embedders may
build their own ``Config`` and pass it to ``create_app``.
"""

from functools import lru_cache

from astraventa.core.config.config import Config
from astraventa.core.config.validation import ConfigError


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Return the shared configuration; raises ConfigError on invalid values."""
    return Config()


__all__ = ["Config", "ConfigError", "get_config"]
