import logging
import sys
from io import StringIO
from traceback import format_exception_only
from typing import FrozenSet, List, Optional, TextIO

from unwrapping._tools._frames import first_frame, format_frame
from unwrapping._tools._logging import get_logger
from unwrapping._tools._validation import validate_int
from unwrapping._unwrap import is_wrapped_exception, unwrap_exception

TITLE = "=== EXCEPTION SUMMARY ==="
# at the indent of the sub-exception blocks, i.e. the column their message text starts at
SEPARATOR = "--"
CAUSED_BY = "which caused:"
NO_STACKTRACE = "no stacktrace available"
AGGREGATE_HEADING = "aggregate failure ({} items):"
INDENT_LENGTH = 4


def summarize_current_exceptions(
    file: Optional[TextIO] = None, exception: Optional[BaseException] = None
) -> None:
    """
    Writes a summary of ``exception`` to ``file``: every exception involved, wrappers seen through,
    exception groups branched into, each with the first frame of its traceback.

    It is particularly helpful when tracebacks are long and exception groups with several
    sub-exceptions are involved.

    .. code-block:: text

        === EXCEPTION SUMMARY ===

        aggregate failure (2 items):
         1. KeyError: 'user'
                File "app.py", line 12, in load
            --
         2. ValueError: invalid literal for int() with base 10: 'x'
                File "app.py", line 20, in parse

    Args:
        file (``TextIO | None``, optional): Where to write the summary. (default: ``sys.stderr``)
        exception (``BaseException | None``, optional): The exception to summarize. (default: the exception currently being handled, if any)
    """
    if file is None:
        file = sys.stderr
    if exception is None:
        exception = sys.exception()
    file.write(f"{TITLE}\n\n")
    if exception is not None:
        _summarize_causal_chain(file, exception, 0, None, frozenset())


def log_current_exceptions(
    level: int = logging.ERROR,
    exception: Optional[BaseException] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Logs the summary of ``exception`` as a single record, see ``summarize_current_exceptions``.

    Args:
        level (``int``, optional): The logging level of the record. (default: ``logging.ERROR``)
        exception (``BaseException | None``, optional): The exception to summarize. (default: the exception currently being handled, if any)
        logger (``logging.Logger | None``, optional): The logger to emit the record with. (default: the ``"unwrapping"`` logger)
    """
    validate_int(level, gte=0, name="level")
    summary = StringIO()
    summarize_current_exceptions(summary, exception)
    (logger or get_logger()).log(level, summary.getvalue().rstrip("\n"))


def _indent_print(
    file: TextIO, text: str, indent: int, prefix: Optional[str] = None
) -> None:
    for i, line in enumerate(text.split("\n")):
        if i == 0 and prefix is not None:
            file.write(f"{' ' * max(0, indent - len(prefix))}{prefix}{line}\n")
        else:
            file.write(f"{' ' * indent}{line}\n")


def _predecessor(exception: BaseException) -> Optional[BaseException]:
    if exception.__cause__ is not None:
        return exception.__cause__
    if exception.__suppress_context__:
        return None
    return exception.__context__


def _causal_chain(
    exception: BaseException, ancestors: FrozenSet[int]
) -> List[BaseException]:
    """
    The exceptions that led to ``exception``, earliest first, ``exception`` last.
    The walk stops at any exception already being summarized.
    """
    chain = [exception]
    seen = {id(exception)}
    predecessor = _predecessor(exception)
    # a wrapper raised while handling the exception it wraps must not show it twice
    while (
        predecessor is not None
        and id(predecessor) not in seen
        and id(predecessor) not in ancestors
        and predecessor is not unwrap_exception(exception)
    ):
        chain.append(predecessor)
        seen.add(id(predecessor))
        exception = predecessor
        predecessor = _predecessor(exception)
    chain.reverse()
    return chain


def _summarize_causal_chain(
    file: TextIO,
    exception: BaseException,
    indent: int,
    prefix: Optional[str],
    ancestors: FrozenSet[int],
) -> None:
    chain = _causal_chain(exception, ancestors)
    ancestors = ancestors.union(map(id, chain))
    for i, exc in enumerate(chain):
        if i:
            file.write("\n")
            prefix = None
            _indent_print(file, CAUSED_BY, indent)
        _summarize_exception(file, exc, indent, prefix, ancestors)


def _summarize_exception(
    file: TextIO,
    exception: BaseException,
    indent: int,
    prefix: Optional[str],
    ancestors: FrozenSet[int],
) -> None:
    if is_wrapped_exception(exception):
        unwrapped = unwrap_exception(exception)
        if id(unwrapped) in ancestors:
            # re-raised out of its wrapper, the wrapped exception is shown on its own
            _summarize_leaf(file, exception, indent, prefix)
        else:
            _summarize_causal_chain(file, unwrapped, indent, prefix, ancestors)
    elif isinstance(exception, BaseExceptionGroup):
        _summarize_exception_group(file, exception, indent, prefix, ancestors)
    else:
        _summarize_leaf(file, exception, indent, prefix)


def _summarize_sub_exception(
    file: TextIO,
    exception: BaseException,
    indent: int,
    prefix: Optional[str],
    ancestors: FrozenSet[int],
) -> None:
    if id(exception) in ancestors:
        _summarize_leaf(file, exception, indent, prefix)
    else:
        _summarize_causal_chain(file, exception, indent, prefix, ancestors)


def _summarize_exception_group(
    file: TextIO,
    group: BaseExceptionGroup,
    indent: int,
    prefix: Optional[str],
    ancestors: FrozenSet[int],
) -> None:
    exceptions = group.exceptions
    if len(exceptions) == 1:
        _summarize_sub_exception(file, exceptions[0], indent, prefix, ancestors)
        return
    _indent_print(file, AGGREGATE_HEADING.format(len(exceptions)), indent, prefix)
    sub_indent = indent + INDENT_LENGTH
    for i, exception in enumerate(exceptions, start=1):
        _summarize_sub_exception(file, exception, sub_indent, f"{i}. ", ancestors)
        if i != len(exceptions):
            _indent_print(file, SEPARATOR, sub_indent)


def _summarize_leaf(
    file: TextIO, exception: BaseException, indent: int, prefix: Optional[str]
) -> None:
    message = "".join(format_exception_only(exception)).rstrip("\n")
    _indent_print(file, message, indent, prefix)
    # only the first frame is resolved, the rest of the traceback is left untouched
    frame = first_frame(exception.__traceback__)
    if frame is None:
        _indent_print(file, NO_STACKTRACE, indent + INDENT_LENGTH)
    else:
        _indent_print(file, format_frame(frame), indent + INDENT_LENGTH)
