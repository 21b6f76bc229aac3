"""
Configuration file access.

Settings live in ``conf/tide_harmonics.conf`` at the repository root (INI
format).  Set ``TIDE_HARMONICS_CONFIG`` to use another file.
"""
from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path

CONFIG_ENV_VAR = 'TIDE_HARMONICS_CONFIG'
_CONF_DIR = (Path(__file__).parent.parent.parent / 'conf').resolve()


class Utils:
    """Locate and read the project configuration files."""

    def __init__(self, config_file: str | Path | None = None):
        self._config_file = Path(config_file) if config_file else None

    def get_config_file(self) -> Path:
        """Return the path of the main configuration file."""
        if self._config_file is not None:
            return self._config_file
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override)
        return _CONF_DIR / 'tide_harmonics.conf'

    def get_log_config_file(self) -> Path:
        return _CONF_DIR / 'logging.conf'

    def read_config_section(
        self,
        section: str,
        logger: logging.Logger | None = None,
    ) -> dict[str, str]:
        """
        Return the key/value pairs of one configuration section.

        Raises
        ------
        FileNotFoundError
            If the configuration file does not exist.
        KeyError
            If the file has no such section.
        """
        _log = logger or logging.getLogger(__name__)

        config_file = self.get_config_file()
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file {config_file} not found.")

        parser = configparser.ConfigParser()
        parser.read(config_file)
        if not parser.has_section(section):
            raise KeyError(f"Section [{section}] missing from {config_file}.")

        _log.debug('Read section [%s] from %s.', section, config_file)
        return dict(parser.items(section))
