"""Configuration loading, schema, and defaults."""

from covgate.config.loader import ConfigError, load_config
from covgate.config.schema import CovGateConfig, ToleranceConfig

__all__ = [
    "ConfigError",
    "CovGateConfig",
    "ToleranceConfig",
    "load_config",
]
