"""
Tests for binding records, the builder chain and the lookup checks.
"""

import pytest

from scopedi import (
    Binding,
    BindingKind,
    Container,
    Lifetime,
    LifetimeBuilder,
    QualifiedLifetimeBuilder,
    QualifierBuilder,
    UnsupportedBindingKindError,
    checks,
    is_class_binding,
    is_constant_binding,
    is_dynamic_binding,
    is_factory_binding,
)
from scopedi.errors import AmbiguousPureBindingError, PureBindingNotFoundError


class Widget:
    def __init__(self, container: Container):
        self.container = container


def make_widget(container: Container) -> Widget:
    return Widget(container)


def test_builder_steps_expose_only_legal_methods():
    container = Container()

    constant_step = container.bind("a").to_constant(1)
    assert isinstance(constant_step, QualifierBuilder)
    assert not hasattr(constant_step, "singleton")

    class_step = container.bind("b").to_class(Widget)
    assert isinstance(class_step, QualifiedLifetimeBuilder)
    assert hasattr(class_step, "named")
    assert hasattr(class_step, "transient")

    lifetime_step = container.bind("c").to_factory(make_widget).named("n")
    assert type(lifetime_step) is LifetimeBuilder
    assert not hasattr(lifetime_step, "named")
    assert lifetime_step.transient() is None


@pytest.mark.parametrize(
    ("register", "kind"),
    [
        (lambda b: b.to_class(Widget), BindingKind.CLASS),
        (lambda b: b.to_factory(make_widget), BindingKind.FACTORY),
        (lambda b: b.to_function(make_widget), BindingKind.DYNAMIC),
        (lambda b: b.to_constant("value"), BindingKind.CONSTANT),
    ],
)
def test_kind_step_sets_kind(register, kind):
    container = Container()
    register(container.bind("x"))

    (binding,) = container.bindings("x")
    assert binding.kind is kind
    assert binding.lifetime is Lifetime.SINGLETON
    assert binding.owner_module is None


def test_kind_predicates():
    container = Container()
    container.bind("x").to_class(Widget)
    container.bind("x").to_factory(make_widget)
    container.bind("x").to_function(make_widget)
    container.bind("x").to_constant(1)

    class_binding, factory_binding, dynamic_binding, constant_binding = container.bindings("x")
    assert is_class_binding(class_binding)
    assert is_factory_binding(factory_binding)
    assert is_dynamic_binding(dynamic_binding)
    assert is_constant_binding(constant_binding)
    assert not is_class_binding(constant_binding)


def test_qualifiers_recorded_on_binding():
    container = Container()
    container.bind("x").to_constant(1).named("n")
    container.bind("x").to_class(Widget).tagged("n", "t").transient()

    named, tagged = container.bindings("x")
    assert (named.name, named.tag, named.is_pure) == ("n", None, False)
    assert (tagged.name, tagged.tag, tagged.lifetime) == ("n", "t", Lifetime.TRANSIENT)


def test_singleton_cache_written_once():
    container = Container()
    container.bind("w").to_class(Widget)
    (binding,) = container.bindings("w")

    assert not binding.is_cached
    widget = container.get("w")
    assert binding.is_cached
    assert binding.cached is widget

    binding.store(object())
    assert binding.cached is widget


def test_transient_never_cached():
    container = Container()
    container.bind("w").to_class(Widget).transient()
    (binding,) = container.bindings("w")

    container.get("w")
    assert not binding.is_cached


def test_binding_str():
    binding = Binding(
        lifetime=Lifetime.TRANSIENT, kind=BindingKind.CLASS, recipe=Widget, name="n", tag="t"
    )

    assert str(binding) == "Widget @n #t (class, transient)"


def test_unsupported_kind_is_rejected():
    container = Container()
    container.bind("x").to_constant(1)
    (binding,) = container.bindings("x")
    binding.kind = "bogus"

    with pytest.raises(UnsupportedBindingKindError, match="Unsupported binding kind: bogus"):
        container.get("x")


def test_multiple_check_runs_missing_check_first():
    with pytest.raises(PureBindingNotFoundError):
        checks.multiple_pure_bindings(None, [], "x")


def test_missing_check_requires_container():
    binding = Binding(lifetime=Lifetime.SINGLETON)

    with pytest.raises(PureBindingNotFoundError):
        checks.missing_pure_bindings(None, [binding], "x")
    container = Container()
    assert checks.missing_pure_bindings(container, [binding], "x") is container


def test_multiple_check_accepts_single_binding():
    container = Container()
    binding = Binding(lifetime=Lifetime.SINGLETON)

    assert checks.multiple_named_bindings(container, [binding], "x", "n") is container
    with pytest.raises(AmbiguousPureBindingError):
        checks.multiple_pure_bindings(container, [binding, binding], "x")


def test_bindings_accessor_is_local_and_read_only():
    parent = Container()
    parent.bind("x").to_constant(1)
    child = parent.create_child()
    child.bind("y").to_constant(2)
    child.bind("y").to_constant(3).named("n")

    assert child.bindings("x") == ()
    assert [b.recipe for b in child.bindings("y")] == [2, 3]
    assert isinstance(child.bindings("y"), tuple)
    assert child.bindings("missing") == ()
