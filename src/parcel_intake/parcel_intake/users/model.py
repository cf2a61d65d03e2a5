from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Domain entity: an operator allowed to register packages."""

    user_id: int
    email: str
    full_name: str
    password_hash: str
    is_active: bool = True
