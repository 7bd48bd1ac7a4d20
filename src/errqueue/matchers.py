"""Error matchers deciding whether a queued error matches a specifier.

A specifier is what a fetch is looking for:
    - an exception instance (sentinel)
    - an exception class
    - any other class (ABC, runtime-checkable Protocol, marker mixin)

Anything else is invalid and never matches. Specifiers are compiled once per
lookup into a MatcherChain, which is then applied to every member.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum

logger = logging.getLogger(__name__)


class SpecifierKind(str, Enum):
    """How a specifier is interpreted."""

    VALUE = "value"
    TYPE = "type"
    INTERFACE = "interface"
    INVALID = "invalid"


def classify(specifier: object) -> SpecifierKind:
    """Classify a fetch specifier.

    Args:
        specifier: Exception instance, exception class or interface class

    Returns:
        SpecifierKind of the specifier
    """
    if isinstance(specifier, BaseException):
        return SpecifierKind.VALUE
    if isinstance(specifier, type):
        if issubclass(specifier, BaseException):
            return SpecifierKind.TYPE
        return SpecifierKind.INTERFACE
    return SpecifierKind.INVALID


class ErrorMatcher(ABC):
    """Base class for error matchers."""

    @abstractmethod
    def matches(self, error: BaseException | None) -> bool:
        """Check if the error matches.

        Args:
            error: Candidate error

        Returns:
            True if the error matches
        """


class IdentityMatcher(ErrorMatcher):
    """Matches the very same error object, or one that compares equal to it."""

    def __init__(self, target: BaseException):
        self.target = target

    def matches(self, error: BaseException | None) -> bool:
        return error is self.target or (error is not None and error == self.target)


class MessageMatcher(ErrorMatcher):
    """Matches errors whose message equals the target's.

    Lets a sentinel rebuilt with the same text match the original.
    """

    def __init__(self, target: BaseException):
        self.message = str(target)

    def matches(self, error: BaseException | None) -> bool:
        return error is not None and str(error) == self.message


class InterfaceMatcher(ErrorMatcher):
    """Matches errors whose class satisfies an interface class."""

    def __init__(self, interface: type):
        self.interface = interface

    def matches(self, error: BaseException | None) -> bool:
        if error is None:
            return False
        try:
            return isinstance(error, self.interface)
        except TypeError:
            # Protocols without @runtime_checkable refuse isinstance().
            logger.debug("interface %r is not checkable at runtime", self.interface)
            return False


class TypeMatcher(ErrorMatcher):
    """Matches errors assignable to an exception class."""

    def __init__(self, error_type: type[BaseException]):
        self.error_type = error_type

    def matches(self, error: BaseException | None) -> bool:
        return isinstance(error, self.error_type)


class MatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self, matchers: list[ErrorMatcher] | None = None) -> None:
        self.matchers: list[ErrorMatcher] = matchers or []

    def matches(self, error: BaseException | None) -> bool:
        """Check the error against every matcher in order.

        Args:
            error: Candidate error

        Returns:
            True if any matcher accepts the error
        """
        return any(matcher.matches(error) for matcher in self.matchers)

    def __bool__(self) -> bool:
        return bool(self.matchers)

    @classmethod
    def for_value(cls, target: object) -> "MatcherChain":
        """Build the chain used by fetch: identity, then message equality.

        Args:
            target: Sentinel error to look for

        Returns:
            MatcherChain (empty for anything but an exception instance)
        """
        if classify(target) is not SpecifierKind.VALUE:
            return cls()
        assert isinstance(target, BaseException)
        return cls([IdentityMatcher(target), MessageMatcher(target)])

    @classmethod
    def for_type(cls, specifier: object) -> "MatcherChain":
        """Build the chain used by fetch_by_type.

        Order matters - identity, then interface, then type assignability.
        An exception instance stands for its own class.

        Args:
            specifier: Exception instance, exception class or interface class

        Returns:
            MatcherChain (empty for an invalid specifier)
        """
        kind = classify(specifier)
        if kind is SpecifierKind.VALUE:
            assert isinstance(specifier, BaseException)
            return cls([IdentityMatcher(specifier), TypeMatcher(type(specifier))])
        if kind is SpecifierKind.INTERFACE:
            assert isinstance(specifier, type)
            return cls([InterfaceMatcher(specifier)])
        if kind is SpecifierKind.TYPE:
            assert isinstance(specifier, type)
            return cls([TypeMatcher(specifier)])
        logger.debug("invalid error specifier %r", specifier)
        return cls()


def error_matches(error: BaseException | None, specifier: object) -> bool:
    """Return True if error matches specifier by type or interface.

    Specifier options:
        - error_instance
        - ErrorClass
        - InterfaceClass
    """
    if error is None:
        return False
    return MatcherChain.for_type(specifier).matches(error)
