"""User configuration for releasestate"""

import configparser
import logging
import os
import platform
from pathlib import Path
from typing import Any, Optional

from releasestate.git.ancestry import DEFAULT_ANCESTOR_SEARCH_DEPTH

APP_NAME = "releasestate"

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

default_cfg = {"resolver": {"ancestor_search_depth": str(DEFAULT_ANCESTOR_SEARCH_DEPTH)}}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path(f"~/Library/Application Support/{APP_NAME}").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file() -> Path:
    return config_dir / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    A dict-like accessor for configuration files.

    Missing sections or keys are handled gracefully.

    Usage:
        config = ConfigAccessor()
        value = config.get('resolver', 'ancestor_search_depth', default='50')
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        if config_path is None:
            self.config_path = get_config_file()
        else:
            self.config_path = Path(config_path)

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value, or ``default`` if the section or key doesn't exist.
        """
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default


def get_ancestor_search_depth(config: Optional[ConfigAccessor] = None) -> int:
    """
    Get the configured number of commits walked per side when resolving merges.

    Invalid values fall back to the default with a warning.
    """
    if config is None:
        config = ConfigAccessor()

    value = config.get(
        "resolver",
        "ancestor_search_depth",
        default_cfg["resolver"]["ancestor_search_depth"],
    )
    try:
        depth = int(value)
    except (TypeError, ValueError):
        depth = 0
    if depth < 1:
        logger.warning(
            f"Invalid ancestor_search_depth '{value}' in {config.config_path}, "
            f"using {DEFAULT_ANCESTOR_SEARCH_DEPTH}"
        )
        return DEFAULT_ANCESTOR_SEARCH_DEPTH
    return depth
