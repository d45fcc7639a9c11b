"""Utility Functions"""
import logging


def get_logger(logname):
    """Create and return a logger object."""
    logger = logging.getLogger(logname)
    return logger


def log_method(method):
    """Generate method for logging"""

    def wrapped(self, *args, **kwargs):
        """Method that gets called for logging"""
        self.logger.info('Entering %s', method.__name__)
        return method(self, *args, **kwargs)

    return wrapped


class CycleTimerError(Exception):
    """Base class for errors raised by cycletimer."""
    pass


class InvalidConfigurationError(CycleTimerError):
    """Error for when a timer is configured with an unusable value."""
    pass


class AlreadyActiveError(CycleTimerError):
    """Error for when a time source is activated while already bound."""
    pass


class SchedulingError(CycleTimerError):
    """Error for when the scheduler refuses to register a job."""
    pass
