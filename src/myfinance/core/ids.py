"""UUID identifiers.

``is_valid_uuid`` is a total predicate over the canonical textual grammar
(8-4-4-4-12 hex groups, case-insensitive).  ``EntityId`` wraps a string that
has passed that check; constructing one with anything else raises
:class:`~myfinance.core.errors.InvalidIdentifierError`.

    >>> is_valid_uuid("550e8400-e29b-41d4-a716-446655440000")
    True
    >>> is_valid_uuid("not-a-uuid")
    False
    >>> EntityId.parse("550E8400-E29B-41D4-A716-446655440000").value
    '550E8400-E29B-41D4-A716-446655440000'
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from typing import Any

from myfinance.core.errors import InvalidIdentifierError

_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_valid_uuid(value: Any) -> bool:
    """Return True if *value* is a string in 8-4-4-4-12 hex form."""
    return isinstance(value, str) and _UUID_RE.fullmatch(value) is not None


def generate_id() -> str:
    """Return a new random (version 4) UUID string."""
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class EntityId:
    """A string guaranteed to be UUID-shaped."""

    value: str

    def __post_init__(self) -> None:
        if not is_valid_uuid(self.value):
            raise InvalidIdentifierError(self.value)

    @classmethod
    def parse(cls, value: Any, *, field: str = "id") -> EntityId:
        """Validating factory; raises ``InvalidIdentifierError`` naming *field*."""
        if not is_valid_uuid(value):
            raise InvalidIdentifierError(value, field=field)
        return cls(value)

    @classmethod
    def generate(cls) -> EntityId:
        return cls(generate_id())

    def __str__(self) -> str:
        return self.value
