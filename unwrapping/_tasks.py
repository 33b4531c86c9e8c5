import asyncio
from concurrent.futures import Future, wait
from typing import Awaitable, Iterable, List, Optional, TypeVar

from unwrapping._unwrap import unwrap_exception

T = TypeVar("T")


class TaskFailedError(Exception):
    """
    Raised in place of the exception of a failed unit of work when fetching its result, carrying it in ``exception``.
    """

    def __init__(self, exception: BaseException):
        super().__init__(repr(exception))
        self.exception = exception


@unwrap_exception.register
def _(exception: TaskFailedError) -> BaseException:
    return exception.exception


def fetch(future: "Future[T]", timeout: Optional[float] = None) -> T:
    """
    Waits for ``future`` and returns its result.

    Args:
        future (``Future[T]``): The future of a unit of work, e.g. submitted to an executor.
        timeout (``float | None``, optional): Seconds to wait for. (default: wait indefinitely)

    Returns:
        ``T``: The result of the unit of work.

    Raises:
        TaskFailedError: wrapping the exception the unit of work raised.
    """
    exception = future.exception(timeout)
    if exception is not None:
        raise TaskFailedError(exception)
    return future.result()


async def afetch(awaitable: Awaitable[T]) -> T:
    """
    Awaits ``awaitable`` and returns its result.

    Args:
        awaitable (``Awaitable[T]``): A coroutine, task or future.

    Returns:
        ``T``: The result of ``awaitable``.

    Raises:
        TaskFailedError: wrapping the exception raised by ``awaitable``. Cancellations are not wrapped.
    """
    try:
        return await awaitable
    except Exception as e:
        exception = e
    # raised outside of the except block so that the wrapped exception is not its context
    raise TaskFailedError(exception)


def join(futures: Iterable["Future[T]"]) -> List[T]:
    """
    Waits for all the ``futures`` and returns their results, in order.

    Raises:
        ExceptionGroup: of a ``TaskFailedError`` per failed unit of work, in order.
    """
    futures = list(futures)
    wait(futures)
    failures = [
        TaskFailedError(exception)
        for exception in map(Future.exception, futures)
        if exception is not None
    ]
    if failures:
        raise ExceptionGroup(f"{len(failures)} tasks failed", failures)
    return [future.result() for future in futures]


async def ajoin(awaitables: Iterable[Awaitable[T]]) -> List[T]:
    """
    Awaits all the ``awaitables`` concurrently and returns their results, in order.

    Raises:
        ExceptionGroup: of a ``TaskFailedError`` per failed awaitable, in order. Cancellations are not wrapped.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
    failures = [
        TaskFailedError(result) for result in results if isinstance(result, Exception)
    ]
    if failures:
        raise ExceptionGroup(f"{len(failures)} tasks failed", failures)
    return results
