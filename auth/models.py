"""Auth-side types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Caller identity resolved from a verified bearer token."""

    email: str
    user_id: str
