"""Error queue - an ordered, flat collection of errors with context.

Members are stored root cause first; the most recently attached context is
the last element. Everything visible from outside (rendering, iteration,
matching) walks the queue in the opposite direction, outermost first, so
for appends A, B, C the queue renders as "C : B : A".

Queues are immutable. ``append``/``prepend`` return a new queue that shares
the call-stack snapshot of the queue they were derived from.
"""

import logging
from collections.abc import Iterable, Iterator

from errqueue.config import ErrQueueConfig, configure, get_config
from errqueue.exceptions import ConfigError
from errqueue.stacktrace import Stacktrace

logger = logging.getLogger(__name__)

# Joins messages as "outer error : inner error".
ERR_MSG_SEPARATOR = " : "


class Error(Exception):
    """A plain error carrying a single message. Handy for sentinels."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def _flatten(errors: Iterable[BaseException | None]) -> list[BaseException]:
    """Drop absent errors and splice nested queues in place, keeping order."""
    flat: list[BaseException] = []
    for err in errors:
        if err is None:
            continue
        if isinstance(err, ErrorQueue):
            flat.extend(err._errors)
        else:
            flat.append(err)
    return flat


def _capture() -> Stacktrace:
    try:
        config = get_config()
    except ConfigError as e:
        # A config failure must not replace the error being wrapped.
        logger.warning("errqueue configuration ignored, using defaults: %s", e)
        config = ErrQueueConfig()
        configure(config)
    if not config.capture_stacktrace:
        return Stacktrace.empty()
    return Stacktrace.capture(config.stacktrace_depth)


class ErrorQueue(Exception):
    """Application errors queued in the order they arose."""

    def __init__(
        self,
        *errors: BaseException | None,
        stacktrace: Stacktrace | None = None,
    ):
        """Create a queue.

        Args:
            *errors: Errors in causal order, root cause first
            stacktrace: Snapshot to attach; captured now if omitted
        """
        super().__init__()
        self._errors: tuple[BaseException, ...] = tuple(_flatten(errors))
        self._stacktrace = stacktrace if stacktrace is not None else _capture()

    @property
    def stacktrace(self) -> Stacktrace:
        """Call-stack snapshot taken when the queue was first created."""
        return self._stacktrace

    @property
    def members(self) -> tuple[BaseException, ...]:
        """Members in storage order, root cause first."""
        return self._errors

    def _derive(self, errors: list[BaseException]) -> "ErrorQueue":
        return ErrorQueue(*errors, stacktrace=self._stacktrace)

    def append(self, err: BaseException | None) -> "ErrorQueue":
        """Return a queue with err on top, as the outermost context."""
        return self.extend(after=[err])

    def prepend(self, err: BaseException | None) -> "ErrorQueue":
        """Return a queue with err at the bottom, on the root-cause side."""
        return self.extend(before=[err])

    def extend(
        self,
        before: Iterable[BaseException | None] = (),
        after: Iterable[BaseException | None] = (),
    ) -> "ErrorQueue":
        """Return a queue with errors placed below and above the current ones.

        Both iterables are in causal order (root cause first). Absent errors
        are skipped and nested queues are flattened.
        """
        head, tail = _flatten(before), _flatten(after)
        if not head and not tail:
            return self
        return self._derive(head + list(self._errors) + tail)

    def errors(self) -> list[BaseException]:
        """Return members outermost first."""
        return list(reversed(self._errors))

    def with_message(self, message: str, *args: object) -> "ErrorQueue":
        """Return the queue with a formatted message attached on top."""
        from errqueue.api import with_message

        return with_message(self, message, *args)

    def verbose(self) -> str:
        """Render the message followed by the creation stacktrace."""
        return f"{self}\n{self._stacktrace.render()}"

    def __iter__(self) -> Iterator[BaseException]:
        return reversed(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        # An empty queue is still an error, not absence.
        return True

    def __str__(self) -> str:
        return ERR_MSG_SEPARATOR.join(str(err) for err in reversed(self._errors))

    def __format__(self, spec: str) -> str:
        if spec == "+v":
            return self.verbose()
        return format(str(self), spec)

    def __repr__(self) -> str:
        members = ", ".join(repr(err) for err in self._errors)
        return f"ErrorQueue({members})"

    def __reduce__(self):
        return (_rebuild, (self._errors, self._stacktrace))


def _rebuild(errors: tuple[BaseException, ...], stacktrace: Stacktrace) -> ErrorQueue:
    return ErrorQueue(*errors, stacktrace=stacktrace)
