"""Error context wrappers.

Handle an error where it happens, or hand it to the layer above together with
the local context. Application code attaches context with wrap(),
with_message() or wrap_with_message(); each either starts a new ErrorQueue or
extends the one it is given. The layer that finally handles the error asks
fetch(), fetch_by_type() or fetch_all_by_type() whether a particular cause is
in there.
"""

from errqueue.matchers import MatcherChain
from errqueue.queue import Error, ErrorQueue


def _format(message: str, args: tuple[object, ...]) -> str:
    """%-format message, keeping mismatched args visible instead of raising."""
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError):
        extra = ", ".join(f"{type(arg).__name__}={arg!r}" for arg in args)
        return f"{message} %!(EXTRA {extra})"


def new(message: str, *args: object) -> ErrorQueue:
    """Return an error with the (optionally %-formatted) message and a stacktrace."""
    return ErrorQueue(Error(_format(message, args)))


def wrap(*errors: BaseException | None) -> ErrorQueue | None:
    """Wrap errors into an error queue, root cause first.

    None values are ignored; with nothing left, None is returned. When one
    of the errors is already a queue, the right-most such queue is extended:
    errors listed before it go below its members and errors listed after it
    go on top. Any other queues are flattened into the result. The queues
    passed in are never modified.

    Args:
        *errors: Errors in causal order, root cause first

    Returns:
        ErrorQueue, or None if every error was None
    """
    errs = [err for err in errors if err is not None]
    if not errs:
        return None

    for idx in range(len(errs) - 1, -1, -1):
        queue = errs[idx]
        if isinstance(queue, ErrorQueue):
            return queue.extend(before=errs[:idx], after=errs[idx + 1 :])

    return ErrorQueue(*errs)


def with_message(err: BaseException | None, message: str, *args: object) -> ErrorQueue | None:
    """Attach a formatted message to err as its outermost context.

    An empty message leaves the chain as is, but still returns an ErrorQueue.
    """
    if err is None:
        return None
    if not message:
        return wrap(err)
    return wrap(err, Error(_format(message, args)))


def wrap_with_message(
    err1: BaseException | None,
    err2: BaseException | None,
    message: str,
    *args: object,
) -> ErrorQueue | None:
    """Wrap two errors and attach a formatted message.

    Typical use is a 3rd-party error that needs both an application error and
    extra context on top of it.
    """
    return with_message(wrap(err1, err2), message, *args)


def fetch(err: BaseException | None, target: BaseException | None) -> BaseException | None:
    """Return target if err is, or contains, an error matching it.

    Matching is by identity or by equal message, so a sentinel rebuilt with
    the same text is found too. Queue members are checked outermost first.
    """
    if err is None or target is None:
        return None

    chain = MatcherChain.for_value(target)
    if not chain:
        return None
    if chain.matches(err):
        return target

    if isinstance(err, ErrorQueue):
        for member in err:
            if chain.matches(member):
                return target

    return None


to = fetch


def fetch_all_by_type(err: BaseException | None, specifier: object) -> list[BaseException]:
    """Return every error in err matching specifier, outermost first.

    specifier is an exception class, an interface class (ABC, runtime
    checkable Protocol, marker mixin) or an exception instance standing for
    its class. A plain error is treated as a queue of one.
    """
    if err is None or specifier is None:
        return []

    chain = MatcherChain.for_type(specifier)
    if not chain:
        return []

    members = err if isinstance(err, ErrorQueue) else (err,)
    return [member for member in members if chain.matches(member)]


def fetch_by_type(err: BaseException | None, specifier: object) -> BaseException | None:
    """Return the first error in err matching specifier, or None."""
    if err is None or specifier is None:
        return None

    chain = MatcherChain.for_type(specifier)
    if not chain:
        return None

    members = err if isinstance(err, ErrorQueue) else (err,)
    for member in members:
        if chain.matches(member):
            return member
    return None


cause = fetch_by_type
