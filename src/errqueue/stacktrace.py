"""Call-stack snapshots attached to error queues.

A snapshot is taken once, when a queue is created, and rendered only on
demand (``ErrorQueue.verbose()``). Frames that belong to errqueue itself are
dropped so the first rendered frame is the caller that created the queue.
"""

import os
import sysconfig
import traceback
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DEPTH = 16

_PACKAGE_DIR = str(Path(__file__).resolve().parent)


def _path_prefixes() -> list[str]:
    """Collect interpreter install prefixes trimmed from rendered filenames."""
    paths = sysconfig.get_paths()
    prefixes = {paths.get(key) for key in ("purelib", "platlib", "stdlib", "platstdlib")}
    return sorted((p + os.sep for p in prefixes if p), key=len, reverse=True)


_PREFIXES = _path_prefixes()


def sanitize_filename(filename: str) -> str:
    """Trim site-packages and stdlib prefixes from a frame filename.

    Transforms:
        /usr/lib/python3.12/json/decoder.py -> json/decoder.py
    """
    for prefix in _PREFIXES:
        if filename.startswith(prefix):
            return filename[len(prefix) :]
    return filename


def sanitize_func_name(name: str) -> str:
    """Render a frame function name the way the snapshot prints it."""
    if not name:
        return "unknown()"
    return f"{name}()"


@dataclass(frozen=True)
class Frame:
    """A single captured stack frame."""

    filename: str
    lineno: int
    name: str

    def render(self) -> str:
        return f"\t{sanitize_filename(self.filename)}:{self.lineno} {sanitize_func_name(self.name)}\n"


@dataclass(frozen=True)
class Stacktrace:
    """Immutable call-stack snapshot, innermost frame first."""

    frames: tuple[Frame, ...] = field(default_factory=tuple)

    @classmethod
    def capture(cls, depth: int = DEFAULT_DEPTH) -> "Stacktrace":
        """Capture the current call stack.

        Args:
            depth: Maximum number of frames to keep

        Returns:
            Stacktrace with errqueue's own frames removed
        """
        frames: list[Frame] = []
        # extract_stack is outermost-first; walk it innermost-first.
        for summary in reversed(traceback.extract_stack()):
            if not frames and _is_internal(summary.filename):
                continue
            frames.append(Frame(summary.filename, summary.lineno or 0, summary.name))
            if len(frames) >= depth:
                break
        return cls(tuple(frames))

    @classmethod
    def empty(cls) -> "Stacktrace":
        """Return a snapshot with no frames (capture disabled)."""
        return cls()

    def render(self) -> str:
        """Render frames one per line, innermost first."""
        return "".join(frame.render() for frame in self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    def __str__(self) -> str:
        return self.render()


def _is_internal(filename: str) -> bool:
    try:
        return str(Path(filename).resolve().parent) == _PACKAGE_DIR
    except OSError:
        return False
