from unwrapping._summary import log_current_exceptions, summarize_current_exceptions
from unwrapping._tasks import TaskFailedError, afetch, ajoin, fetch, join
from unwrapping._unwrap import (
    UnwrappedExceptionNotFoundError,
    has_wrapped_exception,
    is_wrapped_exception,
    unwrap_exception,
    unwrap_exception_to_root,
    unwrap_exception_until,
)

for _public in (
    summarize_current_exceptions,
    log_current_exceptions,
    TaskFailedError,
    fetch,
    afetch,
    join,
    ajoin,
    UnwrappedExceptionNotFoundError,
    has_wrapped_exception,
    is_wrapped_exception,
    unwrap_exception,
    unwrap_exception_to_root,
    unwrap_exception_until,
):
    _public.__module__ = __name__
del _public

__all__ = [
    "unwrap_exception",
    "is_wrapped_exception",
    "has_wrapped_exception",
    "unwrap_exception_until",
    "unwrap_exception_to_root",
    "UnwrappedExceptionNotFoundError",
    "summarize_current_exceptions",
    "log_current_exceptions",
    "TaskFailedError",
    "fetch",
    "afetch",
    "join",
    "ajoin",
]

__version__ = "1.0.0"
