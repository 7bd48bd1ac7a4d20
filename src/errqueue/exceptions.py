"""errqueue's own failure types.

Lookups never raise; these cover misuse of the package itself, such as an
unreadable or invalid configuration file.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class ErrQueueError(Exception):
    """Base exception for errqueue failures."""

    # Identity
    code: str  # e.g., "CONFIG_INVALID"

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logs.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }


class ConfigError(ErrQueueError):
    """Raised when errqueue configuration cannot be loaded or is invalid."""

    def __init__(self, detail: str | None = None, code: str = "CONFIG_INVALID"):
        super().__init__(code=code, message="Invalid errqueue configuration", detail=detail)
