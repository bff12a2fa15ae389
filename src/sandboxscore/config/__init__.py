"""Configuration loading, schema, and defaults."""

from sandboxscore.config.loader import ConfigError, load_config
from sandboxscore.config.schema import OutputConfig, SandboxScoreConfig, ScanConfig

__all__ = [
    "ConfigError",
    "OutputConfig",
    "SandboxScoreConfig",
    "ScanConfig",
    "load_config",
]
