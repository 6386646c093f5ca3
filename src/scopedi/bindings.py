"""
Binding records stored by the container.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .keys import Identifier, Lifetime


class BindingKind(Enum):
    """Kinds of bindings supported."""

    CLASS = "class"
    FACTORY = "factory"
    DYNAMIC = "dynamic"
    CONSTANT = "constant"


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


UNSET: Any = _Unset()


@dataclass(eq=False)
class Binding:
    """
    One registered construction recipe for an identifier.

    Bindings are compared by identity: two bindings with the same recipe
    registered twice are still two entries.
    """

    lifetime: Lifetime
    kind: BindingKind = BindingKind.CONSTANT
    recipe: Any = None
    name: Identifier | None = None
    tag: Identifier | None = None
    owner_module: str | None = None
    _cache: Any = field(default=UNSET, repr=False, init=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, init=False)

    @property
    def is_pure(self) -> bool:
        """True if the binding carries neither a name nor a tag."""
        return self.name is None and self.tag is None

    @property
    def is_cached(self) -> bool:
        return self._cache is not UNSET

    @property
    def cached(self) -> Any:
        return self._cache

    def store(self, value: Any) -> None:
        """Cache a constructed singleton value; the first write wins."""
        if self._cache is UNSET:
            self._cache = value

    def matches_pure(self) -> bool:
        return self.is_pure

    def matches_named(self, name: Identifier) -> bool:
        return self.name == name and self.tag is None

    def matches_tagged(self, name: Identifier, tag: Identifier) -> bool:
        return self.name == name and self.tag == tag

    def __str__(self) -> str:
        recipe_name = getattr(self.recipe, "__name__", repr(self.recipe))
        qualifier = ""
        if self.name is not None:
            qualifier += f" @{self.name}"
        if self.tag is not None:
            qualifier += f" #{self.tag}"
        return f"{recipe_name}{qualifier} ({self.kind.value}, {self.lifetime.value})"


def is_class_binding(binding: Binding) -> bool:
    return binding.kind is BindingKind.CLASS


def is_factory_binding(binding: Binding) -> bool:
    return binding.kind is BindingKind.FACTORY


def is_dynamic_binding(binding: Binding) -> bool:
    return binding.kind is BindingKind.DYNAMIC


def is_constant_binding(binding: Binding) -> bool:
    return binding.kind is BindingKind.CONSTANT
