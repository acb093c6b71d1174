"""Call-site snapshots attached to errors as their ``env`` field."""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from types import FrameType
from typing import Any

# Not every interpreter provides frame introspection.
_getframe = getattr(sys, "_getframe", None)


@dataclass(frozen=True)
class InvocationContext:
    """Where an error was created.

    ``function`` is a ``(qualified name, arity)`` pair, or ``None`` when the
    error was created at module level. ``stacktrace`` runs outermost first and
    ends at the creating frame.
    """

    module: str
    function: tuple[str, int] | None
    file: str
    line: int
    stacktrace: tuple[traceback.FrameSummary, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        return to_plain_map(self)

    def __reduce__(self):
        frames = None
        if self.stacktrace is not None:
            frames = tuple((fs.filename, fs.lineno, fs.name, fs.line) for fs in self.stacktrace)
        return _rebuild, (self.module, self.function, self.file, self.line, frames)


def _rebuild(module, function, file, line, frames) -> InvocationContext:
    stacktrace = None
    if frames is not None:
        stacktrace = tuple(traceback.StackSummary.from_list(list(frames)))
    return InvocationContext(module, function, file, line, stacktrace)


def _function_of(frame: FrameType) -> tuple[str, int] | None:
    code = frame.f_code
    if code.co_name == "<module>":
        return None
    name = getattr(code, "co_qualname", code.co_name)
    return name, code.co_argcount + code.co_kwonlyargcount


def _frame_at(stacklevel: int) -> FrameType | None:
    if _getframe is None:
        return None
    try:
        # +1 skips this helper as well as capture() itself.
        return _getframe(stacklevel + 1)
    except ValueError:
        return None


def from_frame(frame: FrameType, *, include_stacktrace: bool = False) -> InvocationContext:
    stacktrace = None
    if include_stacktrace:
        stacktrace = tuple(traceback.extract_stack(frame))
    return InvocationContext(
        module=frame.f_globals.get("__name__", "__main__"),
        function=_function_of(frame),
        file=frame.f_code.co_filename,
        line=frame.f_lineno,
        stacktrace=stacktrace,
    )


def capture(stacklevel: int = 1, *, include_stacktrace: bool = True) -> InvocationContext | None:
    """Snapshot the frame ``stacklevel`` levels above the caller of this function.

    ``stacklevel=1`` is the function calling ``capture``, as with
    ``warnings.warn``. Returns ``None`` when the interpreter cannot supply
    frames or the stack is too shallow.
    """
    frame = _frame_at(stacklevel)
    if frame is None:
        return None
    try:
        return from_frame(frame, include_stacktrace=include_stacktrace)
    finally:
        del frame


def format_function(ctx: InvocationContext) -> str | None:
    if ctx.function is None:
        return None
    name, arity = ctx.function
    return f"{ctx.module}.{name}/{arity}"


def to_plain_map(ctx: Any) -> dict[str, Any]:
    """Convert an env to a JSON-compatible map; the stack trace is left out."""
    if not isinstance(ctx, InvocationContext):
        return {}
    return {
        "module": ctx.module,
        "function": format_function(ctx),
        "file": ctx.file,
        "line": ctx.line,
        "file_line": f"{ctx.file}:{ctx.line}",
    }
