"""Unit tests for error matchers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import pytest

from errqueue import Error
from errqueue.matchers import (
    IdentityMatcher,
    InterfaceMatcher,
    MatcherChain,
    MessageMatcher,
    SpecifierKind,
    TypeMatcher,
    classify,
    error_matches,
)


@runtime_checkable
class Messenger(Protocol):
    """Runtime-checkable interface satisfied by CustomError."""

    def get_message(self) -> str: ...


class Sender(Protocol):
    """Interface that cannot be checked at runtime."""

    def send(self) -> str: ...


class Temporary(ABC):
    """ABC marking temporary failures."""

    @abstractmethod
    def temporary(self) -> bool: ...


class CustomError(Exception):
    """Custom error satisfying Messenger."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg

    def get_message(self) -> str:
        return self.msg


class SubCustomError(CustomError):
    """Subclass of CustomError."""


@dataclass
class CodeError(Exception):
    """Error compared by value."""

    code: str

    def __str__(self) -> str:
        return self.code


class TimeoutFailure(Exception, Temporary):
    """Error implementing the Temporary ABC."""

    def temporary(self) -> bool:
        return True


class TestClassify:
    """Tests for specifier classification."""

    @pytest.mark.parametrize(
        ("specifier", "kind"),
        [
            (Error("1"), SpecifierKind.VALUE),
            (ValueError, SpecifierKind.TYPE),
            (CustomError, SpecifierKind.TYPE),
            (Messenger, SpecifierKind.INTERFACE),
            (Temporary, SpecifierKind.INTERFACE),
            (None, SpecifierKind.INVALID),
            ("string is too short", SpecifierKind.INVALID),
            (42, SpecifierKind.INVALID),
            (object(), SpecifierKind.INVALID),
        ],
    )
    def test_classify(self, specifier, kind):
        """Each specifier shape maps to its kind."""
        assert classify(specifier) is kind


class TestMatchers:
    """Tests for the individual matchers."""

    def test_identity(self):
        """IdentityMatcher only accepts the same object."""
        err = Error("1")
        matcher = IdentityMatcher(err)
        assert matcher.matches(err)
        assert not matcher.matches(Error("1"))

    def test_identity_accepts_equal_errors(self):
        """Errors defining value equality match an equal instance."""
        matcher = IdentityMatcher(CodeError("E1"))
        assert matcher.matches(CodeError("E1"))
        assert not matcher.matches(CodeError("E2"))
        assert not matcher.matches(None)

    def test_message(self):
        """MessageMatcher accepts equal messages regardless of identity."""
        matcher = MessageMatcher(Error("1"))
        assert matcher.matches(Error("1"))
        assert matcher.matches(ValueError("1"))
        assert not matcher.matches(Error("2"))
        assert not matcher.matches(None)

    def test_interface(self):
        """InterfaceMatcher checks interface satisfaction."""
        matcher = InterfaceMatcher(Messenger)
        assert matcher.matches(CustomError("1"))
        assert not matcher.matches(Error("1"))
        assert not matcher.matches(None)

    def test_interface_not_runtime_checkable(self):
        """A protocol that refuses isinstance() never matches."""
        assert not InterfaceMatcher(Sender).matches(CustomError("1"))

    def test_type(self):
        """TypeMatcher accepts instances and subclass instances."""
        matcher = TypeMatcher(CustomError)
        assert matcher.matches(CustomError("1"))
        assert matcher.matches(SubCustomError("1"))
        assert not matcher.matches(Error("1"))
        assert not matcher.matches(None)


class TestMatcherChain:
    """Tests for compiled matcher chains."""

    def test_empty_chain_is_falsy_and_never_matches(self):
        """An empty chain matches nothing."""
        chain = MatcherChain()
        assert not chain
        assert not chain.matches(Error("1"))

    def test_for_value_invalid(self):
        """Only exception instances compile for value lookups."""
        assert not MatcherChain.for_value(CustomError)
        assert not MatcherChain.for_value("1")
        assert not MatcherChain.for_value(None)

    def test_for_value_matches_identity_and_message(self):
        """Value chains match by identity or equal message."""
        sentinel = Error("not found")
        chain = MatcherChain.for_value(sentinel)
        assert chain.matches(sentinel)
        assert chain.matches(Error("not found"))
        assert not chain.matches(Error("found"))

    def test_for_type_invalid(self):
        """Invalid specifiers compile to an empty chain."""
        assert not MatcherChain.for_type(None)
        assert not MatcherChain.for_type("CustomError")


class TestErrorMatches:
    """Tests for error_matches()."""

    def test_nil_parameters(self):
        """Double None never matches."""
        assert not error_matches(None, None)

    def test_none_candidate(self):
        """A None candidate implements nothing."""
        assert not error_matches(None, Exception)
        assert not error_matches(None, Messenger)

    def test_same_errors(self):
        """An error matches itself."""
        err = Error("1")
        assert error_matches(err, err)

    def test_error_value_stands_for_its_type(self):
        """An exception instance specifier matches by its class."""
        assert error_matches(Error("1"), Error("2"))
        assert not error_matches(ValueError("1"), Error("1"))

    def test_custom_interface_not_satisfied(self):
        """A plain error does not satisfy an unrelated interface."""
        assert not error_matches(Error("1"), Messenger)

    def test_exception_base_class(self):
        """Every error satisfies the Exception base classes."""
        assert error_matches(Error("1"), Exception)
        assert error_matches(CustomError("1"), BaseException)

    def test_custom_error_and_custom_interface(self):
        """A custom error satisfies its interface."""
        assert error_matches(CustomError("msg"), Messenger)

    def test_custom_error_and_non_checkable_interface(self):
        """A protocol that cannot be checked degrades to no match."""
        assert not error_matches(CustomError("msg"), Sender)

    def test_custom_error_and_its_class(self):
        """A custom error matches its own class."""
        assert error_matches(CustomError("msg"), CustomError)

    def test_subclass_matches_base_class(self):
        """Subclass instances are assignable to the base class."""
        assert error_matches(SubCustomError("msg"), CustomError)
        assert not error_matches(CustomError("msg"), SubCustomError)

    def test_abc_interface(self):
        """ABC interfaces match their implementations."""
        assert error_matches(TimeoutFailure("slow"), Temporary)
        assert not error_matches(CustomError("msg"), Temporary)

    def test_invalid_specifier(self):
        """Non-class, non-exception specifiers never match."""
        assert not error_matches(CustomError("msg"), "msg")
        assert not error_matches(CustomError("msg"), None)
