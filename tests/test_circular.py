#!/usr/bin/env python3
"""
Unit tests for circular dependency detection during resolution.
"""

import threading
import time
import unittest

from scopedi import CircularDependencyError, Container, InjectionError


class TestCircularDependencies(unittest.TestCase):
    """Test that cycles fail fast instead of recursing."""

    def test_self_dependency(self):
        """Test that a recipe resolving its own identifier is detected."""
        container = Container()
        container.bind("loop").to_factory(lambda c: c.get("loop"))

        with self.assertRaises(CircularDependencyError) as ctx:
            container.get("loop")

        self.assertEqual(ctx.exception.chain, ["loop", "loop"])
        self.assertIsInstance(ctx.exception, InjectionError)

    def test_mutual_dependency(self):
        """Test that two bindings depending on each other are detected."""
        container = Container()
        container.bind("a").to_factory(lambda c: ("a", c.get("b")))
        container.bind("b").to_factory(lambda c: ("b", c.get("a")))

        with self.assertRaises(CircularDependencyError) as ctx:
            container.get("a")

        self.assertEqual(ctx.exception.chain, ["a", "b", "a"])
        self.assertIn("a -> b -> a", str(ctx.exception))

    def test_cycle_through_named_binding(self):
        """Test that the chain shows names and tags."""
        container = Container()
        container.bind("a").to_factory(lambda c: c.get_tagged("b", "n", "t"))
        container.bind("b").to_function(lambda c: c.get_all("a")).tagged("n", "t")

        with self.assertRaises(CircularDependencyError) as ctx:
            container.get("a")

        self.assertEqual(ctx.exception.chain, ["a", "b @n #t", "a"])

    def test_cycle_across_containers(self):
        """Test that a cycle crossing a parent/child boundary is detected."""
        parent = Container()
        parent.bind("a").to_factory(lambda c: c.get("b"))
        parent.bind("b").to_factory(lambda c: c.get("a"))
        child = parent.create_child()

        with self.assertRaises(CircularDependencyError):
            child.get("a")

    def test_same_identifier_in_different_containers_is_not_a_cycle(self):
        """Test that a child override may depend on the parent's binding of the same identifier."""
        parent = Container()
        parent.bind("config").to_constant({"debug": False})
        child = parent.create_child()
        child.bind("config").to_function(lambda c: {**parent.get("config"), "debug": True})

        self.assertEqual(child.get("config"), {"debug": True})

    def test_stack_unwinds_after_failure(self):
        """Test that a detected cycle leaves no stale resolution state."""
        container = Container()
        container.bind("loop").to_factory(lambda c: c.get("loop"))

        with self.assertRaises(CircularDependencyError):
            container.get("loop")

        container.rebind("loop").to_constant("fixed")
        self.assertEqual(container.get("loop"), "fixed")

    def test_repeated_resolution_is_not_a_cycle(self):
        """Test that resolving the same dependency twice in one recipe is allowed."""
        container = Container()
        container.bind("leaf").to_constant(1)
        container.bind("pair").to_factory(lambda c: (c.get("leaf"), c.get("leaf")))

        self.assertEqual(container.get("pair"), (1, 1))

    def test_resolution_state_is_per_thread(self):
        """Test that another thread resolving the same identifier is not a cycle."""
        container = Container()
        calls = []
        entered = threading.Event()
        release = threading.Event()

        def slow(_: Container) -> str:
            calls.append(threading.current_thread().name)
            if len(calls) == 1:
                entered.set()
                release.wait(timeout=5)
            return "slow"

        container.bind("slow").to_factory(slow).transient()

        results = []
        worker = threading.Thread(target=lambda: results.append(container.get("slow")))
        worker.start()
        self.assertTrue(entered.wait(timeout=5))
        try:
            results.append(container.get("slow"))
        finally:
            release.set()
            worker.join(timeout=5)

        self.assertEqual(results, ["slow", "slow"])
        self.assertEqual(len(calls), 2)

    def test_concurrent_singleton_constructed_once(self):
        """Test that threads racing on an uncached singleton run its recipe once."""
        container = Container()
        calls = []
        entered = threading.Event()
        release = threading.Event()

        class Connection:
            pass

        def connect(_: Container) -> Connection:
            calls.append(threading.current_thread().name)
            entered.set()
            release.wait(timeout=5)
            return Connection()

        container.bind("connection").to_factory(connect)

        results = []
        first = threading.Thread(target=lambda: results.append(container.get("connection")))
        second = threading.Thread(target=lambda: results.append(container.get("connection")))
        first.start()
        self.assertTrue(entered.wait(timeout=5))
        second.start()
        try:
            time.sleep(0.05)
        finally:
            release.set()
            first.join(timeout=5)
            second.join(timeout=5)

        self.assertEqual(len(calls), 1)
        self.assertEqual(len(results), 2)
        self.assertIs(results[0], results[1])


if __name__ == "__main__":
    unittest.main()
