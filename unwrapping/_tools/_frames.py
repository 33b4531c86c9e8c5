from traceback import FrameSummary, walk_tb
from types import FrameType, TracebackType
from typing import Iterator, Optional

FRAME_FORMAT = 'File "{filename}", line {lineno}, in {name}'


def _is_resolvable(frame: FrameType) -> bool:
    if frame.f_code.co_filename.startswith("<frozen "):
        return False
    # pytest's convention to hide helper frames from tracebacks
    hide = frame.f_locals.get(
        "__tracebackhide__", frame.f_globals.get("__tracebackhide__", False)
    )
    return not hide


def resolve_frames(traceback: Optional[TracebackType]) -> Iterator[FrameSummary]:
    """
    Resolves the frames of ``traceback``, innermost first, skipping the unresolvable ones.
    The traceback entries are all walked upfront, in time proportional to its depth, but frames are
    only resolved as they are consumed, and source lines are not looked up.
    """
    for frame, lineno in reversed(list(walk_tb(traceback))):
        if _is_resolvable(frame):
            yield FrameSummary(
                frame.f_code.co_filename,
                lineno,
                frame.f_code.co_name,
                lookup_line=False,
            )


def first_frame(traceback: Optional[TracebackType]) -> Optional[FrameSummary]:
    return next(resolve_frames(traceback), None)


def format_frame(frame: FrameSummary) -> str:
    return FRAME_FORMAT.format(
        filename=frame.filename, lineno=frame.lineno, name=frame.name
    )
