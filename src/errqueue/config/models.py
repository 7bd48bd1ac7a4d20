"""errqueue configuration data models."""

from dataclasses import dataclass
from enum import Enum

from errqueue.stacktrace import DEFAULT_DEPTH


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    def to_logging(self) -> int:
        """Map to the stdlib logging level number."""
        return {
            LogLevel.DEBUG: 10,
            LogLevel.INFO: 20,
            LogLevel.WARN: 30,
            LogLevel.ERROR: 40,
        }[self]


@dataclass(frozen=True)
class ErrQueueConfig:
    """Process-wide errqueue settings."""

    capture_stacktrace: bool = True
    stacktrace_depth: int = DEFAULT_DEPTH
    # None leaves the host application's logger level untouched.
    log_level: LogLevel | None = None
