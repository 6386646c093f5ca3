"""
Container modules: reusable bundles of registration logic.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from .builders import BindingBuilder
from .keys import Identifier, new_id


class Binder(Protocol):
    """The bind capability handed to a module's registrar."""

    def bind(self, identifier: Identifier) -> BindingBuilder: ...


@dataclass(frozen=True, eq=False)
class ContainerModule:
    """
    A named group of bindings that can be loaded into and unloaded from a container.

    The module itself holds no bindings. Its registrar runs on every ``load``
    and every binding it creates is marked with the module's id, so ``unload``
    removes exactly those bindings.

    Example:
        ```python
        database = ContainerModule(
            lambda binder: binder.bind("db-url").to_constant("sqlite://")
        )
        container.load(database)
        container.unload(database)
        ```
    """

    registrar: Callable[[Binder], None]
    id: str = field(default_factory=new_id)

    @classmethod
    def define(cls, registrar: Callable[[Binder], None]) -> ContainerModule:
        """Decorator form: turn a registrar function into a module."""
        return cls(registrar)

    def __repr__(self) -> str:
        registrar_name = getattr(self.registrar, "__name__", "registrar")
        return f"ContainerModule({registrar_name}, id={self.id})"
