import os
import configparser

from .exceptions import ConfigError
from .util import *


class Configuration:
    """
    Simple configuration base class.
    """

    SETTINGS = {}

    def __init__(self, cfg_path):
        self.cfg_path = cfg_path
        self.settings = {}

        # Initialize all settings with their default values.
        for section, settings in self.SETTINGS.items():
            self.settings[section] = {}

            for setting, initial in settings.items():
                self.settings[section][setting] = initial

        self.load()

    def load(self):
        """
        Load config from disk if it exists.
        Settings missing from the file keep their default value.
        """
        if self.cfg_path is not None and os.path.exists(self.cfg_path):
            parser = configparser.ConfigParser()

            try:
                with open(self.cfg_path, "r", encoding="utf-8") as cfg_fp:
                    parser.read_file(cfg_fp)

            except (configparser.Error, OSError, UnicodeError) as exc:
                raise ConfigError(f"Failed to read {self.cfg_path}: {exc}")

            for section, settings in self.SETTINGS.items():
                for setting, initial in settings.items():
                    self.settings[section][setting] = parser.get(section, setting, fallback=initial)

    def __getitem__(self, section):
        """
        Get section.
        """
        return self.settings[section]


class AppConfig(Configuration):
    """
    Settings for slot generation.
    An empty baseline or labels path means we use the file bundled with the package.
    """

    SETTINGS = {

        "slots": {

            "baseline": "",
            "labels": "",
            "malformed_index": POLICY_ABORT,
            "schema": SCHEMA_NAMED,
        },
    }

    def __init__(self, paths, cfg_path=None):
        self.paths = paths
        self.paths.set_app_config(self)

        if cfg_path is None:
            cfg_path = paths.app_config_file

        Configuration.__init__(self, cfg_path)
        self.validate()

    def validate(self):
        """
        Make sure our choice settings hold one of their known values.
        """
        slots = self.settings["slots"]

        if slots["malformed_index"] not in MALFORMED_POLICIES:
            raise ConfigError(f"malformed_index must be one of {', '.join(MALFORMED_POLICIES)}, "
                              f"got {slots['malformed_index']!r}!")

        if slots["schema"] not in SCHEMAS:
            raise ConfigError(f"schema must be one of {', '.join(SCHEMAS)}, got {slots['schema']!r}!")
