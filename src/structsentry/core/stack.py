"""Call-stack capture and trimming.

The stack attached to an error event is the stack of the write call that
carried the record, not the stack where the error was raised. Frames that
belong to structsentry itself and to the logging library are cut off so the
innermost remaining frame is the application code that emitted the log.
This is a best-effort heuristic: re-logged errors or deep logging pipelines
can leave a few frames too many or too few.
"""

import inspect
from collections.abc import Sequence

from structsentry.core.models import StackFrame

SELF_MODULE = "structsentry"
LOGGER_MODULE = "structlog"


def belongs_to(frame: StackFrame, module: str) -> bool:
    """Return True if the frame's module is ``module`` or one of its submodules."""
    return frame.module == module or frame.module.startswith(module + ".")


def capture_stack() -> list[StackFrame]:
    """Capture the current call stack, outermost frame first."""
    frames: list[StackFrame] = []
    current = inspect.currentframe()
    while current is not None:
        code = current.f_code
        frames.append(
            StackFrame(
                module=current.f_globals.get("__name__", ""),
                function=code.co_name,
                filename=code.co_filename,
                lineno=current.f_lineno,
            )
        )
        current = current.f_back
    frames.reverse()
    return frames


def trim_threshold(
    frames: Sequence[StackFrame],
    self_module: str = SELF_MODULE,
    logger_module: str = LOGGER_MODULE,
) -> int:
    """Compute the index of the last frame to keep.

    Args:
        frames: Stack ordered outermost first, capture point last.
        self_module: Module whose frames are dropped from the capture end.
        logger_module: Logging library whose frames are dropped next.

    Returns:
        Index of the innermost frame to keep; never below 0.
        Returns -1 for an empty stack.
    """
    threshold = len(frames) - 1
    while threshold > 0 and belongs_to(frames[threshold], self_module):
        threshold -= 1

    for i in range(threshold, 0, -1):
        if belongs_to(frames[i], logger_module):
            for j in range(i - 1, -1, -1):
                if not belongs_to(frames[j], logger_module):
                    threshold = j
                    break
            break

    return threshold


def trim_frames(
    frames: Sequence[StackFrame],
    self_module: str = SELF_MODULE,
    logger_module: str = LOGGER_MODULE,
) -> list[StackFrame]:
    """Drop adapter and logging-library frames from the capture end of a stack."""
    threshold = trim_threshold(frames, self_module, logger_module)
    return list(frames[: threshold + 1])


def new_stacktrace(logger_module: str = LOGGER_MODULE) -> tuple[StackFrame, ...]:
    """Capture the current stack and trim it to the application's frames."""
    return tuple(trim_frames(capture_stack(), SELF_MODULE, logger_module))
