from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    customer = "customer"
    assistant = "assistant"


@dataclass(frozen=True)
class Actor:
    """Authenticated user acting on a request, as supplied by the auth layer."""

    user_id: str
    role: Role
