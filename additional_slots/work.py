import logging

from .exceptions import AppError, AppException

logger = logging.getLogger(__name__)


class Work:
    """
    Base class for jobs.
    Provides basic error handling so callers only have to inspect `error` and `exc` after `run()`.
    """
    def __init__(self):
        self.error = None
        self.exc = None

    def run(self):
        try:
            self.work()

        except AppError as error:
            self.error = error

        except AppException as exc:
            self.exc = exc

        except Exception:
            logger.debug("Unhandled error in %s", type(self).__name__, exc_info=True)
            self.exc = AppException("Unhandled Error", "Unhandled error occurred!")

        return self.error is None and self.exc is None

    def work(self):
        raise NotImplementedError
