"""Configuration module."""

from nagoyabae.config.loader import load_config
from nagoyabae.config.models import (
    ConfigError,
    GenerationConfig,
    NagoyaConfig,
    ProviderConfig,
    ScoringConfig,
    ServerConfig,
)
from nagoyabae.config.paths import get_config_path, get_home

__all__ = [
    "ConfigError",
    "GenerationConfig",
    "NagoyaConfig",
    "ProviderConfig",
    "ScoringConfig",
    "ServerConfig",
    "get_config_path",
    "get_home",
    "load_config",
]
