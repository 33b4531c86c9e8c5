from typing import Any


def validate_exception_type(exception_type: Any, *, name: str) -> None:
    types = exception_type if isinstance(exception_type, tuple) else (exception_type,)
    if not types or not all(
        isinstance(type_, type) and issubclass(type_, BaseException) for type_ in types
    ):
        raise TypeError(
            f"`{name}` must be an exception type or a non-empty tuple of exception types but got {repr(exception_type)}"
        )


def validate_expected_exception(expected: Any, *, name: str) -> None:
    if not isinstance(expected, BaseException):
        validate_exception_type(expected, name=name)


def validate_int(integer: int, *, gte: int, name: str) -> None:
    if integer < gte:
        raise ValueError(f"`{name}` must be >= {gte} but got {integer}")
