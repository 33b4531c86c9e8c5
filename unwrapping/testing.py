from contextlib import contextmanager
from io import StringIO
from typing import Iterator, Optional, Union

import pytest

from unwrapping._summary import summarize_current_exceptions
from unwrapping._tools._validation import validate_expected_exception
from unwrapping._unwrap import (
    ExceptionType,
    has_wrapped_exception,
    unwrap_exception,
    unwrap_exception_until,
)


class WrappedExceptionInfo:
    """
    Populated by ``raises_wrapped`` once the expected exception has been raised.

    Attributes:
        value (``BaseException``): The expected exception, unwrapped.
        caught (``BaseException``): The exception actually raised, possibly a wrapper.
    """

    __slots__ = ("value", "caught")

    def __init__(self) -> None:
        self.value: Optional[BaseException] = None
        self.caught: Optional[BaseException] = None


def _matching_instance(
    exception: BaseException, expected: BaseException
) -> Optional[BaseException]:
    while True:
        if type(exception) is type(expected) and exception.args == expected.args:
            return exception
        unwrapped = unwrap_exception(exception)
        if unwrapped is exception:
            return None
        exception = unwrapped


@contextmanager
def raises_wrapped(
    expected: Union[ExceptionType, BaseException],
) -> Iterator[WrappedExceptionInfo]:
    """
    Like ``pytest.raises`` but sees through wrapper exceptions.

    .. code-block:: python

        with raises_wrapped(ZeroDivisionError):
            fetch(executor.submit(lambda: 1 / 0))

    Args:
        expected (``Type[BaseException] | Tuple[Type[BaseException], ...] | BaseException``): The expected exception type(s), or an exception instance that the raised one must equal (same type and ``args``) once unwrapped.

    Returns:
        ``WrappedExceptionInfo``: Populated with the matching exception when exiting the block.
    """
    __tracebackhide__ = True
    validate_expected_exception(expected, name="expected")
    info = WrappedExceptionInfo()
    try:
        yield info
    except BaseException as e:
        if isinstance(expected, BaseException):
            value = _matching_instance(e, expected)
        elif has_wrapped_exception(e, expected):
            value = unwrap_exception_until(e, expected)
        else:
            value = None
        if value is None:
            summary = StringIO()
            summarize_current_exceptions(summary, e)
            pytest.fail(
                f"expected {repr(expected)}, possibly wrapped, but got:\n{summary.getvalue()}"
            )
        info.value = value
        info.caught = e
    else:
        pytest.fail(f"DID NOT RAISE {repr(expected)}")
