"""User context for the request-scoped authenticated identity."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserContext:
    """
    Immutable context for the current authenticated user.

    Produced by the auth gate from a verified token and handed to gated
    handlers explicitly. It carries the token subject only; the user record
    is not loaded.
    """

    user_id: UUID

    @classmethod
    def from_values(cls, user_id: UUID) -> UserContext:
        return cls(user_id=user_id)

    def __str__(self) -> str:
        return f"UserContext({self.user_id})"
