"""
Identifier and lifetime types for the container registry.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias


def new_id() -> str:
    """Generate a collision-resistant identifier for containers and modules."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Token:
    """
    An opaque, globally-unique identifier.

    Two tokens created with the same description are distinct keys; only the
    token object itself (or an equal copy of it) resolves its bindings.
    """

    description: str = ""
    value: str = field(default_factory=new_id, repr=False)

    def __str__(self) -> str:
        return f"Token({self.description})"


Identifier: TypeAlias = str | Token


class Lifetime(str, Enum):
    """How often a binding's recipe is invoked."""

    SINGLETON = "singleton"
    TRANSIENT = "transient"

    def __str__(self) -> str:
        return self.value
