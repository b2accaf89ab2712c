from enum import Enum
from functools import wraps
import logging
import sys
from typing import Any, Callable
from itertools import chain

from loguru import logger
from returns.io import IOFailure, IOResult, IOSuccess
from returns.result import Failure, Result, Success
from returns.unsafe import unsafe_perform_io

_verbose: bool = False


def configure_logging(level: str = "INFO", *, verbose: bool = False) -> None:
    """
    Replace the default loguru sink with a single stderr sink at `level`.

    :param level: Minimum level that reaches the sink.
    :param verbose: Also log the call signature of every railway function.
    """
    global _verbose
    _verbose = verbose
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _debug_function_signature(func: Callable[..., Any], *args, **kwargs):
    """Print the function signature and return value."""
    signature = ", ".join(
        chain(
            (repr(arg) for arg in args),
            (f"{key}={repr(value)}" for key, value in kwargs.items()),
        )
    )
    logger.debug(f"Calling {func.__name__}({signature})")


class FailureLevel(Enum):
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


def _describe(error: object) -> str:
    if isinstance(error, BaseException):
        return f"{type(error).__name__}: {error}"
    return str(error)


def log_failure(failure_message: str, failure_level: FailureLevel, error: str) -> None:
    logger.debug(f"{failure_message}: {error}")
    match failure_level:
        case FailureLevel.WARNING:
            logger.warning(failure_message)
        case FailureLevel.ERROR:
            logger.error(failure_message)
        case FailureLevel.CRITICAL:
            logger.critical(failure_message)


def _log_io_container(
    result: IOResult,
    failure_message: str,
    success_message: str | None,
    failure_level: FailureLevel,
) -> None:
    match result:
        case IOSuccess():
            if success_message:
                logger.info(success_message)
        case IOFailure():
            error = unsafe_perform_io(result.failure())
            log_failure(failure_message, failure_level, _describe(error))


def _log_container(
    result: Result,
    failure_message: str,
    success_message: str | None,
    failure_level: FailureLevel,
) -> None:
    match result:
        case Success():
            if success_message:
                logger.info(success_message)
        case Failure(error):
            log_failure(failure_message, failure_level, _describe(error))


def log_railway_function(
    failure_message: str,
    success_message: str | None = None,
    failure_level: FailureLevel = FailureLevel.ERROR,
):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if _verbose:
                _debug_function_signature(func, *args, **kwargs)
            result = func(*args, **kwargs)
            match result:
                case IOResult():
                    _log_io_container(
                        result, failure_message, success_message, failure_level
                    )
                case Result():
                    _log_container(
                        result, failure_message, success_message, failure_level
                    )
            return result

        return wrapper

    return decorator
