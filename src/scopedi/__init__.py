"""
scopedi - a small dependency injection registry with scoped containers.

This package provides:
- A fluent DSL for registering class, factory, function and constant bindings
- Singleton and transient lifetimes
- Named and tagged bindings for several recipes under one identifier
- Parent/child containers with shadowing lookup
- Modules for grouped, reversible registration
"""

from .bindings import (
    Binding,
    BindingKind,
    is_class_binding,
    is_constant_binding,
    is_dynamic_binding,
    is_factory_binding,
)
from .builders import BindingBuilder, LifetimeBuilder, QualifiedLifetimeBuilder, QualifierBuilder
from .container import Container
from .errors import (
    AmbiguousBindingError,
    AmbiguousNamedBindingError,
    AmbiguousPureBindingError,
    AmbiguousTaggedBindingError,
    BindingNotFoundError,
    CircularDependencyError,
    InjectionError,
    NamedBindingNotFoundError,
    PureBindingNotFoundError,
    TaggedBindingNotFoundError,
    UnsupportedBindingKindError,
)
from .keys import Identifier, Lifetime, Token
from .module import Binder, ContainerModule

__all__ = [
    "Binder",
    "Binding",
    "BindingBuilder",
    "BindingKind",
    "Container",
    "ContainerModule",
    "Identifier",
    "Lifetime",
    "LifetimeBuilder",
    "QualifiedLifetimeBuilder",
    "QualifierBuilder",
    "Token",
    "is_class_binding",
    "is_constant_binding",
    "is_dynamic_binding",
    "is_factory_binding",
    "AmbiguousBindingError",
    "AmbiguousNamedBindingError",
    "AmbiguousPureBindingError",
    "AmbiguousTaggedBindingError",
    "BindingNotFoundError",
    "CircularDependencyError",
    "InjectionError",
    "NamedBindingNotFoundError",
    "PureBindingNotFoundError",
    "TaggedBindingNotFoundError",
    "UnsupportedBindingKindError",
]
