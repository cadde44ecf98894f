"""Configuration lookup for syncutil.

Settings are resolved from environment variables with fallbacks under
``~/.config/syncutil/``.
"""

import os
from pathlib import Path
from typing import Optional

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "syncutil"
RULES_FILE_NAME = "rules.conf"
DEFAULT_RSYNC = "rsync"

RULES_FILE_ENV = "SYNCUTIL_RULES_FILE"
CONFIG_DIR_ENV = "SYNCUTIL_CONFIG_DIR"
RSYNC_ENV = "SYNCUTIL_RSYNC"


class Config:
    """Resolves the locations and tools syncutil works with."""

    def get_config_dir(self) -> Path:
        """Get the configuration directory.

        Returns:
            ``$SYNCUTIL_CONFIG_DIR`` if set, otherwise ``~/.config/syncutil``
        """
        config_dir = os.environ.get(CONFIG_DIR_ENV)
        if config_dir:
            return Path(config_dir).expanduser()
        return DEFAULT_CONFIG_DIR

    def get_rules_path(self, override: Optional[str] = None) -> Path:
        """Get the path of the rules file.

        Args:
            override: Explicit path (e.g. from the command line), takes
                precedence over the environment

        Returns:
            Path to the rules file (which may not exist yet)
        """
        if override:
            return Path(override).expanduser()
        rules_file = os.environ.get(RULES_FILE_ENV)
        if rules_file:
            return Path(rules_file).expanduser()
        return self.get_config_dir() / RULES_FILE_NAME

    @property
    def rsync_executable(self) -> str:
        """Name or path of the rsync binary."""
        return os.environ.get(RSYNC_ENV) or DEFAULT_RSYNC


config = Config()
