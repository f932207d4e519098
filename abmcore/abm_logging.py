"""Logging helpers for abmcore.

Built on the standard library `logging` module. All library loggers live below
the ``ABMCORE`` root logger, which only carries a ``NullHandler`` until a caller
attaches output with ``log_to_stderr`` or their own handlers.

"""

import inspect
import logging
from functools import wraps
from logging import DEBUG, INFO

__all__ = [
    "DEBUG",
    "INFO",
    "LOGGER_NAME",
    "create_module_logger",
    "function_logger",
    "get_module_logger",
    "get_rootlogger",
    "log_to_stderr",
    "method_logger",
]
LOGGER_NAME = "ABMCORE"
DEFAULT_FORMAT = "%(levelname)s - %(name)s - %(message)s"


def create_module_logger(name: str | None = None):
    """Create a module logger.

    Args:
        name: name of the module for which the logger is being created; when
            omitted, the name of the calling module is used.

    """
    if name is None:
        frm = inspect.stack()[1]
        mod = inspect.getmodule(frm[0])
        name = mod.__name__
    logger = logging.getLogger(f"{LOGGER_NAME}.{name}")

    _module_loggers[name] = logger
    return logger


def get_module_logger(name: str):
    """Return the logger for the given module, creating it if needed."""
    try:
        logger = _module_loggers[name]
    except KeyError:
        logger = create_module_logger(name)

    return logger


def method_logger(name: str):
    """Decorator for adding debug logging to a method.

    Args:
        name: name of the module in which the method resides

    """
    logger = get_module_logger(name)
    classname = inspect.getouterframes(inspect.currentframe())[1][3]

    def real_decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # the decorated callable is a method, so args[0] is the instance
            logger.debug(
                f"calling {classname}.{func.__name__} with {args[1::]} and {kwargs}"
            )
            return func(*args, **kwargs)

        return wrapper

    return real_decorator


def function_logger(name: str):
    """Decorator for adding debug logging to a function.

    Args:
        name: name of the module in which the function resides

    """
    logger = get_module_logger(name)

    def real_decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(f"calling {func.__name__} with {args} and {kwargs}")
            return func(*args, **kwargs)

        return wrapper

    return real_decorator


def get_rootlogger():
    """Return the root logger of abmcore."""
    return _rootlogger


def log_to_stderr(level: int | None = None, pass_root_logger_level: bool = False):
    """Log messages to stderr.

    Args:
        level: the level at which to log
        pass_root_logger_level: also set the level of the python root logger

    """
    logger = get_rootlogger()

    formatter = logging.Formatter(DEFAULT_FORMAT)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if level:
        logger.setLevel(level)
    if pass_root_logger_level:
        logging.getLogger().setLevel(level)
    logger.propagate = False

    return logger


_rootlogger = logging.getLogger(LOGGER_NAME)
_rootlogger.addHandler(logging.NullHandler())

_module_loggers = {}
_logger = get_module_logger(__name__)
