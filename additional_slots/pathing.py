import os
import platform

from .util import *

APP_DIR_NAME = "additional_slots"


def get_data_dir():
    """
    Get most top-level meta data directory for the app.
    The app only reads from it so we never create it.
    """
    if platform.system().upper() == "WINDOWS":
        return os.path.join(os.environ["APPDATA"], APP_DIR_NAME)

    return os.path.join(os.path.expanduser("~"), "." + APP_DIR_NAME)


class Paths:
    """
    Object to manage the paths the app reads from and writes to.
    Mostly exists so we have a consistent pathing across all our code
    and can change the paths to certain datas in one place.
    """
    def __init__(self, mods_dir, data_dir=None):
        self.mods_dir = mods_dir
        self._data_dir = data_dir
        self.app_config = None

    def set_app_config(self, config):
        """
        Set reference to our AppConfig object.
        For use in the AppConfig constructor.
        """
        self.app_config = config

    @property
    def data_dir(self):
        """
        Resolve the user data directory lazily, the default one depends on the environment.
        """
        if self._data_dir is None:
            self._data_dir = get_data_dir()

        return self._data_dir

    @property
    def app_config_file(self):
        """
        Helper property to get the app config file path.
        """
        return os.path.join(self.data_dir, "app.conf")

    @property
    def bundled_baseline_file(self):
        """
        Helper property to get the ui_chara_db.prc shipped with the package.
        """
        return os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", BASELINE_FILE_NAME)

    @property
    def baseline_file(self):
        """
        Helper property to get the baseline ui_chara_db.prc, preferring a configured one over the bundled one.
        """
        configured = self.app_config["slots"]["baseline"] if self.app_config is not None else ""
        return configured or self.bundled_baseline_file

    @property
    def labels_file(self):
        """
        Helper property to get the configured param labels file, or None to use the built-in labels.
        """
        configured = self.app_config["slots"]["labels"] if self.app_config is not None else ""
        return configured or None

    @property
    def patch_dir(self):
        """
        Helper property to get the directory the prcxml patch is written to.
        """
        return os.path.join(self.mods_dir, *PATCH_PATH_COMPONENTS)

    @property
    def patch_file(self):
        """
        Helper property to get the prcxml patch full path.
        """
        return os.path.join(self.patch_dir, PATCH_FILE_NAME)
