import sys


class AppError(Exception):
    """
    Base exception for passing along a standard error to the user.
    Used to fast-fail for an error scenario that does not require viewing a traceback.
    """
    def __init__(self, title, message):
        Exception.__init__(self, message)
        self.message = message
        self.title = title

    def get_details(self):
        """
        Return a tuple of error details we can pass to the error reporter.
        """
        return self.title, self.message, "error"


class AppException(Exception):
    """
    Base exception for passing along information from another exception and display it to the user.
    Used to fast-fail for an error scenario where viewing a traceback would be useful for debugging.
    """
    def __init__(self, title, message):
        Exception.__init__(self, message)
        self.exc_info = sys.exc_info()
        self.message = message
        self.title = title

    def get_details(self):
        """
        Return a tuple of error details we can pass to the error reporter.
        """
        return self.title, self.message, self.exc_info


class ScanError(AppException):
    """
    Reading the mods directory tree failed. The whole scan is aborted.
    """
    def __init__(self, message):
        AppException.__init__(self, "Error Scanning Mods", message)


class MalformedCostumeError(ScanError):
    """
    A costume folder starts with "c" but the rest of its name is not a costume index.
    """
    def __init__(self, costume_path):
        self.costume_path = costume_path
        message = f"Invalid costume folder name {costume_path!r}, expected c<number>!"
        ScanError.__init__(self, message)


class BaselineError(AppException):
    """
    The baseline ui_chara_db.prc could not be found or parsed.
    """
    def __init__(self, message):
        AppException.__init__(self, "Error Loading Baseline", message)


class PatchWriteError(AppException):
    """
    The prcxml patch could not be written to the mods directory.
    """
    def __init__(self, message):
        AppException.__init__(self, "Error Writing Patch", message)


class ConfigError(AppError):
    """
    A setting holds a value the app does not understand.
    """
    def __init__(self, message):
        AppError.__init__(self, "Invalid Configuration", message)
