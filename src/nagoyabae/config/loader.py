"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr, ValidationError

from nagoyabae.config.models import ConfigError, NagoyaConfig
from nagoyabae.config.paths import get_config_path

logger = logging.getLogger(__name__)

# Later names are fallbacks for the same secret
PROVIDER_ENV_VARS: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "gemini": ("GOOGLE_AI_API_KEY", "GEMINI_API_KEY"),
}

ENVIRONMENT_ENV_VAR = "NAGOYABAE_ENV"


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.nagoyabae/config.toml (or NAGOYABAE_HOME)
    ]


def _set_secret_from_env(
    section: dict[str, Any], key: str, env_vars: tuple[str, ...]
) -> None:
    """Set a secret value from environment if not already set."""
    if section.get(key):
        return
    for env_var in env_vars:
        if value := os.environ.get(env_var):
            section[key] = SecretStr(value)
            return


def _resolve_env(config: dict[str, Any]) -> dict[str, Any]:
    """Fill API keys and environment from env vars where not set in config."""
    for provider, env_vars in PROVIDER_ENV_VARS.items():
        section = config.get(provider)
        if section is None:
            section = config[provider] = {}
        _set_secret_from_env(section, "api_key", env_vars)

    if env := os.environ.get(ENVIRONMENT_ENV_VAR):
        config["environment"] = env

    return config


def load_config(path: Path | None = None) -> NagoyaConfig:
    """Load configuration from a TOML file plus environment variables.

    Args:
        path: Explicit path to config file. If None, searches default
            locations and falls back to defaults when none exists.

    Returns:
        Validated NagoyaConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigError: If the config file is invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        logger.debug(f"Loading config from {config_path}")
        try:
            with config_path.open("rb") as f:
                raw_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    try:
        return NagoyaConfig.model_validate(_resolve_env(raw_config))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
