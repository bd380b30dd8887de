"""
Caller identity handed to controllers.

An :class:`AuthContext` exists only after a bearer token has been verified
and its ``userId`` claim has been parsed as a UUID.
"""

from __future__ import annotations

from dataclasses import dataclass

from myfinance.core.ids import EntityId


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Authenticated caller.

    Attributes:
        user_id: Owner id taken from the token's ``userId`` claim.
        email: Email claim, as issued.
    """

    user_id: EntityId
    email: str
