from functools import singledispatch
from typing import Tuple, Type, Union

ExceptionType = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


class UnwrappedExceptionNotFoundError(LookupError):
    """
    Raised by ``unwrap_exception_until`` when no exception of the requested type is found in the chain.

    Args:
        requested_type (``Type[BaseException] | Tuple[Type[BaseException], ...]``): The type that was looked for.

        exception (``BaseException``): The root of the chain, i.e. the fully unwrapped exception.
    """

    def __init__(self, requested_type: ExceptionType, exception: BaseException) -> None:
        super().__init__(requested_type, exception)
        self.requested_type = requested_type
        self.exception = exception

    def __str__(self) -> str:
        return f"no {_type_name(self.requested_type)} found while unwrapping, root exception is {repr(self.exception)}"


def _type_name(exception_type: ExceptionType) -> str:
    if isinstance(exception_type, tuple):
        return f"({', '.join(map(_type_name, exception_type))})"
    return exception_type.__qualname__


@singledispatch
def unwrap_exception(exception: BaseException) -> BaseException:
    """
    Unwraps a wrapped exception by one level, non-wrapping exceptions are returned as is.

    New wrapper exception types participate by registering an implementation returning the exception they wrap:

    .. code-block:: python

        @unwrap_exception.register
        def _(exception: MyWrapperError) -> BaseException:
            return exception.wrapped

    Registered implementations must not create cycles: every chain of unwrapping must reach an exception that unwraps to itself.

    Args:
        exception (``BaseException``): The exception to unwrap.

    Returns:
        ``BaseException``: The wrapped exception, or ``exception`` itself if it is not a wrapper.
    """
    return exception


def is_wrapped_exception(exception: BaseException) -> bool:
    """
    Returns:
        ``bool``: Whether ``exception`` wraps another exception.
    """
    return unwrap_exception(exception) is not exception


def has_wrapped_exception(
    exception: BaseException, exception_type: ExceptionType
) -> bool:
    """
    Checks whether ``exception`` is, or wraps at any depth, an instance of ``exception_type``.

    Prefer it over ``isinstance(exception, exception_type)`` in ``except`` blocks, so that handling
    code does not break when a library starts running your code concurrently and wraps its failures:

    .. code-block:: python

        try:
            library_function()
        except Exception as e:
            if not has_wrapped_exception(e, KeyError):
                raise
            handle(unwrap_exception_until(e, KeyError))

    Args:
        exception (``BaseException``): The caught exception.
        exception_type (``Type[BaseException] | Tuple[Type[BaseException], ...]``): The type(s) to look for.

    Returns:
        ``bool``: True if an exception of ``exception_type`` is found in the chain.
    """
    while not isinstance(exception, exception_type):
        unwrapped = unwrap_exception(exception)
        if unwrapped is exception:
            return False
        exception = unwrapped
    return True


def unwrap_exception_until(
    exception: BaseException, exception_type: ExceptionType
) -> BaseException:
    """
    Unwraps ``exception`` until reaching an instance of ``exception_type``.

    Args:
        exception (``BaseException``): The caught exception.
        exception_type (``Type[BaseException] | Tuple[Type[BaseException], ...]``): The type(s) to look for.

    Returns:
        ``BaseException``: The first exception of the chain that is an instance of ``exception_type``.

    Raises:
        UnwrappedExceptionNotFoundError: if the chain does not contain any instance of ``exception_type``, carrying the root exception.
    """
    while not isinstance(exception, exception_type):
        unwrapped = unwrap_exception(exception)
        if unwrapped is exception:
            raise UnwrappedExceptionNotFoundError(exception_type, exception)
        exception = unwrapped
    return exception


def unwrap_exception_to_root(exception: BaseException) -> BaseException:
    """
    Unwraps ``exception`` down to its bottom layer.

    Returns:
        ``BaseException``: The innermost exception, the one that does not wrap any other.
    """
    unwrapped = unwrap_exception(exception)
    while unwrapped is not exception:
        exception = unwrapped
        unwrapped = unwrap_exception(exception)
    return exception
