"""
Container - the binding registry and resolution engine.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeAlias

from . import checks
from .bindings import Binding, BindingKind
from .builders import BindingBuilder
from .errors import CircularDependencyError
from .keys import Identifier, Lifetime, new_id
from .module import ContainerModule

logger = logging.getLogger(__name__)

BindingFilter: TypeAlias = Callable[[Binding], bool]

_ResolutionKey: TypeAlias = tuple[str, Identifier, Identifier | None, Identifier | None]


class _ResolutionStack(threading.local):
    """Keys currently being resolved on this thread, across all containers."""

    def __init__(self) -> None:
        self.keys: list[_ResolutionKey] = []


_stack = _ResolutionStack()


def _describe(key: _ResolutionKey) -> str:
    _, identifier, name, tag = key
    text = str(identifier)
    if name is not None:
        text += f" @{name}"
    if tag is not None:
        text += f" #{tag}"
    return text


class _ModuleBinder:
    """Bind capability handed to a module registrar; marks bindings with the module id."""

    def __init__(self, container: Container, module_id: str):
        self._container = container
        self._module_id = module_id

    def bind(self, identifier: Identifier) -> BindingBuilder:
        return self._container._create_bind(identifier, self._module_id)


class Container:
    """
    A registry of bindings with hierarchical lookup.

    Bindings are stored per identifier in registration order. Lookup walks
    from this container up through its parents and stops at the first
    container that holds any binding for the identifier; name and tag filters
    are applied to that container's bindings only, so a local binding for an
    identifier shadows every ancestor binding for it.

    Resolution may run on several threads at once: each singleton binding
    holds a lock so its recipe runs at most once. Registration is not
    synchronised; hosts that bind while other threads resolve must serialise
    those calls themselves.
    """

    def __init__(
        self,
        parent: Container | None = None,
        default_lifetime: Lifetime | str = Lifetime.SINGLETON,
    ):
        """
        Create a new Container.

        Args:
            parent: Optional parent consulted for identifiers this container does
                    not bind. The parent is not owned and must outlive the child.
            default_lifetime: Lifetime given to bindings that do not choose one
        """
        self.parent = parent
        self.default_lifetime = Lifetime(default_lifetime)
        self.id: str = new_id()
        self._bindings: dict[Identifier, list[Binding]] = {}
        self._module_identifiers: dict[str, list[Identifier]] = {}

    def create_child(self, default_lifetime: Lifetime | str | None = None) -> Container:
        """
        Create a child container with this container as parent.

        Args:
            default_lifetime: Lifetime for the child; inherits this container's default if omitted

        Returns:
            A new, empty child container
        """
        return Container(
            parent=self,
            default_lifetime=self.default_lifetime if default_lifetime is None else default_lifetime,
        )

    # Registration

    def bind(self, identifier: Identifier) -> BindingBuilder:
        """
        Register a new binding for the identifier.

        The binding is added immediately as a constant ``None`` with the default
        lifetime; the returned builder fills in the recipe.
        """
        return self._create_bind(identifier)

    def bind_once(self, identifier: Identifier) -> BindingBuilder | None:
        """Like ``bind``, but do nothing and return None if the identifier already resolves."""
        if self.exists(identifier):
            logger.debug("Skipping bind of %s: already bound", identifier)
            return None
        return self.bind(identifier)

    def rebind(self, identifier: Identifier) -> BindingBuilder:
        """Replace every local binding for the identifier with a new one."""
        if self.has(identifier):
            self.unbind(identifier)
        return self.bind(identifier)

    def unbind(self, identifier: Identifier) -> None:
        """Remove every local binding for the identifier."""
        if self._bindings.pop(identifier, None) is not None:
            logger.debug("Unbound %s from container %s", identifier, self.id)

    def unbind_all(self) -> None:
        """Remove every binding and all module tracking from this container."""
        self._bindings.clear()
        self._module_identifiers.clear()
        logger.debug("Cleared container %s", self.id)

    def load(self, *modules: ContainerModule) -> None:
        """Run each module's registrar against this container."""
        for module in modules:
            logger.debug("Loading module %r into container %s", module, self.id)
            module.registrar(_ModuleBinder(self, module.id))

    def unload(self, *modules: ContainerModule) -> None:
        """Remove the bindings each module registered; other bindings are kept."""
        for module in modules:
            identifiers = self._module_identifiers.pop(module.id, None)
            if identifiers is None:
                continue

            removed = 0
            for identifier in identifiers:
                bindings = self._bindings.get(identifier)
                if bindings is None:
                    continue

                kept = [binding for binding in bindings if binding.owner_module != module.id]
                removed += len(bindings) - len(kept)
                if kept:
                    self._bindings[identifier] = kept
                else:
                    del self._bindings[identifier]

            logger.debug("Unloaded module %r: removed %d binding(s)", module, removed)

    # Queries

    def has(self, identifier: Identifier) -> bool:
        """Check if this container itself (not its parents) binds the identifier."""
        return bool(self._bindings.get(identifier))

    def exists(self, identifier: Identifier) -> bool:
        """Check if this container or any of its parents binds the identifier."""
        container, _ = self._lookup(identifier)
        return container is not None

    def bindings(self, identifier: Identifier) -> tuple[Binding, ...]:
        """Return this container's own bindings for the identifier, in registration order."""
        return tuple(self._bindings.get(identifier, ()))

    # Resolution

    def get(self, identifier: Identifier) -> Any:
        """
        Resolve the single binding for the identifier that has no name or tag.

        Raises:
            PureBindingNotFoundError: If no such binding exists
            AmbiguousPureBindingError: If more than one such binding exists
        """
        with self._resolving(identifier):
            container, bindings = self._lookup(identifier, Binding.matches_pure)
            owner = checks.multiple_pure_bindings(container, bindings, identifier)
            return owner._resolve(bindings[0])

    def get_named(self, identifier: Identifier, name: Identifier) -> Any:
        """Resolve the single binding for the identifier with the given name and no tag."""
        with self._resolving(identifier, name):
            container, bindings = self._lookup(identifier, lambda b: b.matches_named(name))
            owner = checks.multiple_named_bindings(container, bindings, identifier, name)
            return owner._resolve(bindings[0])

    def get_tagged(self, identifier: Identifier, name: Identifier, tag: Identifier) -> Any:
        """Resolve the single binding for the identifier with the given name and tag."""
        with self._resolving(identifier, name, tag):
            container, bindings = self._lookup(identifier, lambda b: b.matches_tagged(name, tag))
            owner = checks.multiple_tagged_bindings(container, bindings, identifier, name, tag)
            return owner._resolve(bindings[0])

    def get_all(self, identifier: Identifier) -> list[Any]:
        """Resolve every pure binding for the identifier, in registration order."""
        with self._resolving(identifier):
            container, bindings = self._lookup(identifier, Binding.matches_pure)
            owner = checks.missing_pure_bindings(container, bindings, identifier)
            return [owner._resolve(binding) for binding in bindings]

    def get_all_named(self, identifier: Identifier, name: Identifier) -> list[Any]:
        with self._resolving(identifier, name):
            container, bindings = self._lookup(identifier, lambda b: b.matches_named(name))
            owner = checks.missing_named_bindings(container, bindings, identifier, name)
            return [owner._resolve(binding) for binding in bindings]

    def get_all_tagged(self, identifier: Identifier, name: Identifier, tag: Identifier) -> list[Any]:
        with self._resolving(identifier, name, tag):
            container, bindings = self._lookup(identifier, lambda b: b.matches_tagged(name, tag))
            owner = checks.missing_tagged_bindings(container, bindings, identifier, name, tag)
            return [owner._resolve(binding) for binding in bindings]

    def get_last(self, identifier: Identifier) -> Any:
        """Resolve the most recently registered pure binding for the identifier."""
        with self._resolving(identifier):
            container, bindings = self._lookup(identifier, Binding.matches_pure)
            owner = checks.missing_pure_bindings(container, bindings, identifier)
            return owner._resolve(bindings[-1])

    def get_last_named(self, identifier: Identifier, name: Identifier) -> Any:
        with self._resolving(identifier, name):
            container, bindings = self._lookup(identifier, lambda b: b.matches_named(name))
            owner = checks.missing_named_bindings(container, bindings, identifier, name)
            return owner._resolve(bindings[-1])

    def get_last_tagged(self, identifier: Identifier, name: Identifier, tag: Identifier) -> Any:
        with self._resolving(identifier, name, tag):
            container, bindings = self._lookup(identifier, lambda b: b.matches_tagged(name, tag))
            owner = checks.missing_tagged_bindings(container, bindings, identifier, name, tag)
            return owner._resolve(bindings[-1])

    # Internals

    def _create_bind(self, identifier: Identifier, module_id: str | None = None) -> BindingBuilder:
        binding = Binding(lifetime=self.default_lifetime, owner_module=module_id)
        self._bindings.setdefault(identifier, []).append(binding)

        if module_id is not None:
            identifiers = self._module_identifiers.setdefault(module_id, [])
            if identifier not in identifiers:
                identifiers.append(identifier)

        logger.debug("Bound %s in container %s", identifier, self.id)
        return BindingBuilder(binding)

    def _lookup(
        self, identifier: Identifier, matches: BindingFilter | None = None
    ) -> tuple[Container | None, list[Binding]]:
        """
        Find the nearest container holding bindings for the identifier.

        The filter is applied to that container's bindings only; ancestors are
        never consulted once a container with any binding for the identifier
        has been found.
        """
        container: Container | None = self
        while container is not None and not container._bindings.get(identifier):
            container = container.parent

        if container is None:
            return None, []

        bindings = container._bindings[identifier]
        if matches is not None:
            bindings = [binding for binding in bindings if matches(binding)]
        return container, bindings

    def _resolve(self, binding: Binding) -> Any:
        """Produce a value for a binding held by this container, honouring its lifetime."""
        if binding.lifetime is Lifetime.TRANSIENT:
            return self._invoke(binding)

        if not binding.is_cached:
            with binding.lock:
                if not binding.is_cached:
                    binding.store(self._invoke(binding))
                    logger.debug("Constructed singleton %s in container %s", binding, self.id)
        return binding.cached

    def _invoke(self, binding: Binding) -> Any:
        match binding.kind:
            case BindingKind.CLASS | BindingKind.FACTORY | BindingKind.DYNAMIC:
                return binding.recipe(self)
            case BindingKind.CONSTANT:
                return binding.recipe
            case _:
                checks.unsupported_binding_kind(binding.kind)

    @contextmanager
    def _resolving(
        self,
        identifier: Identifier,
        name: Identifier | None = None,
        tag: Identifier | None = None,
    ) -> Iterator[None]:
        """Track a resolution request and fail fast if it is already in progress."""
        key: _ResolutionKey = (self.id, identifier, name, tag)
        if key in _stack.keys:
            start = _stack.keys.index(key)
            chain = [_describe(k) for k in _stack.keys[start:]] + [_describe(key)]
            raise CircularDependencyError(chain)

        _stack.keys.append(key)
        try:
            yield
        finally:
            _stack.keys.pop()

    def __repr__(self) -> str:
        parent_id = self.parent.id if self.parent is not None else None
        return f"Container(id={self.id}, identifiers={len(self._bindings)}, parent={parent_id})"
