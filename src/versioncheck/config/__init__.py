"""Configuration loading, schema, and defaults."""

from versioncheck.config.loader import ConfigError, load_config
from versioncheck.config.schema import BEFORE_TAG, CheckConfig, GitHubContext, VersionCheckConfig

__all__ = [
    "BEFORE_TAG",
    "CheckConfig",
    "ConfigError",
    "GitHubContext",
    "VersionCheckConfig",
    "load_config",
]
