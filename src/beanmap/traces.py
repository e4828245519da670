"""Compact, Java-style rendering of exception traces for log output."""
from __future__ import annotations

import os
import traceback
from collections.abc import Sequence


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        chain.append(current)
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None
    return chain


def format_frames(frames: Sequence[traceback.FrameSummary], seen: set[tuple[str, int | None]] | None = None) -> list[str]:
    """Render ``frames`` innermost first, one `` at func(file:line)`` per frame.

    A frame already in ``seen`` ends the listing with `` ... N more``.
    """
    if seen is None:
        seen = set()
    lines: list[str] = []
    ordered = list(reversed(frames))
    for position, frame in enumerate(ordered):
        marker = (frame.filename, frame.lineno)
        if marker in seen:
            lines.append(f" ... {len(ordered) - position} more")
            break
        seen.add(marker)
        location = os.path.basename(frame.filename) if frame.filename else "Unknown Source"
        line = f":{frame.lineno}" if frame.lineno else ""
        lines.append(f" at {frame.name or '(main)'}({location}{line})")
    return lines


def format_exception_trace(exc: BaseException) -> str:
    seen: set[tuple[str, int | None]] = set()
    lines: list[str] = []
    for index, error in enumerate(_exception_chain(exc)):
        prefix = "Caused by: " if index else ""
        lines.append(f"{prefix}{type(error).__qualname__}: {error}")
        lines.extend(format_frames(traceback.extract_tb(error.__traceback__), seen))
    return "\n".join(lines)


def format_call_stack(skip: int = 1) -> str:
    """Render the current call stack, dropping the ``skip`` innermost frames."""
    frames = traceback.extract_stack()
    if skip > 0:
        frames = frames[:-skip]
    return "\n".join(format_frames(frames))


__all__ = ["format_call_stack", "format_exception_trace", "format_frames"]
