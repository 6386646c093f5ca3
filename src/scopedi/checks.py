"""
Assertions over lookup results.

Each check receives the container the lookup stopped at (or None) and the
filtered binding list. They raise when the result is unusable and otherwise
return the container that holds the matching bindings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

from .errors import (
    AmbiguousNamedBindingError,
    AmbiguousPureBindingError,
    AmbiguousTaggedBindingError,
    NamedBindingNotFoundError,
    PureBindingNotFoundError,
    TaggedBindingNotFoundError,
    UnsupportedBindingKindError,
)
from .keys import Identifier

if TYPE_CHECKING:
    from .bindings import Binding
    from .container import Container


def missing_pure_bindings(
    container: Container | None, bindings: list[Binding], identifier: Identifier
) -> Container:
    if container is not None and bindings:
        return container
    raise PureBindingNotFoundError(f"No pure bindings found for {identifier}", identifier)


def missing_named_bindings(
    container: Container | None,
    bindings: list[Binding],
    identifier: Identifier,
    name: Identifier,
) -> Container:
    if container is not None and bindings:
        return container
    raise NamedBindingNotFoundError(
        f"No named bindings found for {identifier} with name {name}", identifier, name
    )


def missing_tagged_bindings(
    container: Container | None,
    bindings: list[Binding],
    identifier: Identifier,
    name: Identifier,
    tag: Identifier,
) -> Container:
    if container is not None and bindings:
        return container
    raise TaggedBindingNotFoundError(
        f"No tagged bindings found for {identifier} with name {name} and tag {tag}",
        identifier,
        name,
        tag,
    )


def multiple_pure_bindings(
    container: Container | None, bindings: list[Binding], identifier: Identifier
) -> Container:
    found = missing_pure_bindings(container, bindings, identifier)
    if len(bindings) > 1:
        raise AmbiguousPureBindingError(f"Multiple pure bindings found for {identifier}", identifier)
    return found


def multiple_named_bindings(
    container: Container | None,
    bindings: list[Binding],
    identifier: Identifier,
    name: Identifier,
) -> Container:
    found = missing_named_bindings(container, bindings, identifier, name)
    if len(bindings) > 1:
        raise AmbiguousNamedBindingError(
            f"Multiple named bindings found for {identifier} with name {name}", identifier, name
        )
    return found


def multiple_tagged_bindings(
    container: Container | None,
    bindings: list[Binding],
    identifier: Identifier,
    name: Identifier,
    tag: Identifier,
) -> Container:
    found = missing_tagged_bindings(container, bindings, identifier, name, tag)
    if len(bindings) > 1:
        raise AmbiguousTaggedBindingError(
            f"Multiple tagged bindings found for {identifier} with name {name} and tag {tag}",
            identifier,
            name,
            tag,
        )
    return found


def unsupported_binding_kind(kind: Any) -> NoReturn:
    raise UnsupportedBindingKindError(kind)
