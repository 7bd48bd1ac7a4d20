"""errqueue - Error context wrappers with cause lookup.

Attach context to an error as it travels up the call stack, then look for a
specific cause by value, type or interface where the error is handled.
"""

from logging import NullHandler, getLogger

from errqueue.api import (
    cause,
    fetch,
    fetch_all_by_type,
    fetch_by_type,
    new,
    to,
    with_message,
    wrap,
    wrap_with_message,
)
from errqueue.exceptions import ConfigError, ErrQueueError
from errqueue.matchers import MatcherChain, SpecifierKind, classify, error_matches
from errqueue.queue import Error, ErrorQueue
from errqueue.stacktrace import Stacktrace

getLogger(__name__).addHandler(NullHandler())

__version__ = "1.0.0"
__all__ = [
    "__version__",
    # Facade
    "new",
    "wrap",
    "with_message",
    "wrap_with_message",
    "fetch",
    "to",
    "fetch_by_type",
    "cause",
    "fetch_all_by_type",
    # Types
    "Error",
    "ErrorQueue",
    "Stacktrace",
    # Matching
    "MatcherChain",
    "SpecifierKind",
    "classify",
    "error_matches",
    # Failures
    "ErrQueueError",
    "ConfigError",
]
