"""
Railway-oriented programming pipeline utilities for the HTTP layer.

Endpoints compose loader and analysis functions that return `returns` containers
(`IOResultE`, `ResultE`). `run_pipeline` binds such functions together, unwraps the
final container and turns a failure into an `HTTPException`. It is the only place
where a failure leaves the railway and becomes a raised exception.

The HTTP status follows the kind of failure:

- `InputError` → 422, the grid is empty or ragged
- `LoadError` → 404, the grid file cannot be read
- `ProcessingError`, `EncodingError` and anything unexpected → 500

The exception detail carries the endpoint's error message followed by the message
of the failure itself.
"""

from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from fastapi import HTTPException
from loguru import logger
from returns.interfaces.container import ContainerN
from returns.io import IOFailure, IOResultE, IOSuccess
from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import Failure, ResultE, Success

from exceptions import EncodingError, GridLensError, InputError, LoadError, ProcessingError

ERROR_STATUS: dict[type[GridLensError], HTTPStatus] = {
    InputError: HTTPStatus.UNPROCESSABLE_ENTITY,
    LoadError: HTTPStatus.NOT_FOUND,
    ProcessingError: HTTPStatus.INTERNAL_SERVER_ERROR,
    EncodingError: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def _to_http_exception(error: object, error_message: str) -> HTTPException:
    if isinstance(error, GridLensError):
        status = next(
            (code for kind, code in ERROR_STATUS.items() if isinstance(error, kind)),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
        return HTTPException(status_code=status, detail=f"{error_message}: {error.message}")
    logger.error(f"Unexpected failure: {error!r}")
    return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=error_message)


def _capture_ioresult_value[T](result: IOResultE[T] | ResultE[T], error_message: str) -> T:
    match result:
        case IOSuccess(Success(value)) | Success(value):
            return value
        case IOFailure(Failure(error)) | Failure(error):
            raise _to_http_exception(error, error_message)
        case _:
            raise HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=error_message)


def _pipeline_flow[T](entry_value: Any | ContainerN, *pipeline: Callable[..., Any]) -> IOResultE[T] | ResultE[T]:
    first_function = None
    pipeline_tasks: Any = pipeline
    if not isinstance(entry_value, ContainerN):
        first_function, *pipeline_tasks = pipeline

    return flow(
        entry_value,
        *((first_function,) if first_function else ()),
        *[bind(task) for task in pipeline_tasks],
    )


def run_pipeline(entry_value: Any | ContainerN, *tasks: Callable[[Any], Any], error_message: str) -> Any:
    """
    Execute a series of tasks in a functional pipeline and return the final result.

    :param entry_value: The initial value to pass into the pipeline. This may be a
        raw value or a Container from the ``returns`` library (e.g. ``IOResultE``,
        ``ResultE``).
    :param tasks: Callables executed in order. Each one receives the output of the
        previous task and returns a Container.
    :param error_message: Prefix of the ``HTTPException`` detail when the pipeline fails.

    :returns: The unwrapped success value of the final pipeline result.

    :raises HTTPException: With the status from ``ERROR_STATUS`` if any task fails.

    :examples
    --------
    >>> run_pipeline(
    ...     [[0.0, 1.0], [2.0, 3.0]],
    ...     analyze_grid,
    ...     error_message="Failed to analyze grid",
    ... )
    >>> # Returns: {"Normalized": "data:image/png;base64,...", "Gaussian": ...}
    """
    return _capture_ioresult_value(
        _pipeline_flow(entry_value, *tasks),
        error_message,
    )
