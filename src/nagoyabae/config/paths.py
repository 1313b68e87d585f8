"""Path management for nagoyabae.

The base directory defaults to ``~/.nagoyabae`` and can be overridden with the
NAGOYABAE_HOME environment variable.
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "NAGOYABAE_HOME"


@lru_cache(maxsize=1)
def get_home() -> Path:
    """Get the base directory for nagoyabae files.

    Resolution order:
    1. NAGOYABAE_HOME environment variable (if set)
    2. ~/.nagoyabae
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser()
    return Path.home() / ".nagoyabae"


def get_config_path() -> Path:
    """Get the path to the user config file."""
    return get_home() / "config.toml"
