"""
Exceptions raised by the container.

All lookup failures derive from ValueError so callers that treat a missing
dependency as a bad argument keep working.
"""

from __future__ import annotations

from typing import Any

from .keys import Identifier


class InjectionError(ValueError):
    """Base class for every error raised by the registry."""


class BindingNotFoundError(InjectionError):
    """No binding matched the requested identifier and qualifiers."""

    def __init__(
        self,
        message: str,
        identifier: Identifier,
        name: Identifier | None = None,
        tag: Identifier | None = None,
    ):
        super().__init__(message)
        self.identifier = identifier
        self.name = name
        self.tag = tag


class PureBindingNotFoundError(BindingNotFoundError):
    pass


class NamedBindingNotFoundError(BindingNotFoundError):
    pass


class TaggedBindingNotFoundError(BindingNotFoundError):
    pass


class AmbiguousBindingError(InjectionError):
    """More than one binding matched a single-result lookup."""

    def __init__(
        self,
        message: str,
        identifier: Identifier,
        name: Identifier | None = None,
        tag: Identifier | None = None,
    ):
        super().__init__(message)
        self.identifier = identifier
        self.name = name
        self.tag = tag


class AmbiguousPureBindingError(AmbiguousBindingError):
    pass


class AmbiguousNamedBindingError(AmbiguousBindingError):
    pass


class AmbiguousTaggedBindingError(AmbiguousBindingError):
    pass


class UnsupportedBindingKindError(InjectionError):
    """A binding carries a kind outside the known set."""

    def __init__(self, kind: Any):
        super().__init__(f"Unsupported binding kind: {kind}")
        self.kind = kind


class CircularDependencyError(InjectionError):
    """A recipe asked for a binding that is already being resolved."""

    def __init__(self, chain: list[str]):
        super().__init__(f"Circular dependency detected during resolution: {' -> '.join(chain)}")
        self.chain = chain
