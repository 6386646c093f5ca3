"""
Fluent builders that fill in a binding record step by step.

The chain is: kind (``to_class`` / ``to_factory`` / ``to_function`` /
``to_constant``), then an optional qualifier (``named`` / ``tagged``), then an
optional lifetime (``singleton`` / ``transient``). Each step only exposes the
methods that may legally follow it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .bindings import Binding, BindingKind
from .keys import Identifier, Lifetime

if TYPE_CHECKING:
    from .container import Container


class LifetimeBuilder:
    """Final step: choose how often the recipe runs."""

    def __init__(self, binding: Binding):
        self._binding = binding

    def singleton(self) -> None:
        """Construct once on first resolution and reuse the result."""
        self._binding.lifetime = Lifetime.SINGLETON

    def transient(self) -> None:
        """Construct a fresh value on every resolution."""
        self._binding.lifetime = Lifetime.TRANSIENT


class QualifierBuilder:
    """Optional step: disambiguate a constant binding by name or name and tag."""

    def __init__(self, binding: Binding):
        self._binding = binding

    def named(self, name: Identifier) -> LifetimeBuilder:
        self._binding.name = name
        return LifetimeBuilder(self._binding)

    def tagged(self, name: Identifier, tag: Identifier) -> LifetimeBuilder:
        self._binding.name = name
        self._binding.tag = tag
        return LifetimeBuilder(self._binding)


class QualifiedLifetimeBuilder(QualifierBuilder, LifetimeBuilder):
    """Step after a constructing recipe: qualifier or lifetime."""


class BindingBuilder:
    """
    First step: choose what kind of recipe backs the binding.

    The binding is already registered in the container when the builder is
    created; a builder that is never completed leaves a constant binding to
    ``None`` in place.
    """

    def __init__(self, binding: Binding):
        self._binding = binding

    def _set(self, kind: BindingKind, recipe: Any) -> None:
        self._binding.kind = kind
        self._binding.recipe = recipe

    def to_class(self, cls: type[Any]) -> QualifiedLifetimeBuilder:
        """
        Bind to a class instantiated with the resolving container.

        Args:
            cls: A class whose constructor takes the container as its only argument

        Returns:
            The qualifier/lifetime step
        """
        self._set(BindingKind.CLASS, cls)
        return QualifiedLifetimeBuilder(self._binding)

    def to_factory(self, factory: Callable[[Container], Any]) -> QualifiedLifetimeBuilder:
        """Bind to a function that builds an object graph from the container."""
        self._set(BindingKind.FACTORY, factory)
        return QualifiedLifetimeBuilder(self._binding)

    def to_function(self, fn: Callable[[Container], Any]) -> QualifiedLifetimeBuilder:
        """Bind to a function that derives a value from the container."""
        self._set(BindingKind.DYNAMIC, fn)
        return QualifiedLifetimeBuilder(self._binding)

    def to_constant(self, value: Any) -> QualifierBuilder:
        """Bind to a value returned as-is."""
        self._set(BindingKind.CONSTANT, value)
        return QualifierBuilder(self._binding)
