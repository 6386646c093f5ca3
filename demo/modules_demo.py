#!/usr/bin/env python3
"""
Demo of grouped registration with container modules.

Modules bundle the bindings of one feature so the feature can be switched on
and off at runtime. The registry logs its bookkeeping at DEBUG level.
"""

import logging

from scopedi import Binder, Container, ContainerModule


class MessageQueue:
    def __init__(self, container: Container):
        self.url = container.get("mq-url")
        self.sent: list[str] = []

    def send(self, message: str) -> None:
        self.sent.append(message)
        print(f"[MQ {self.url}] Sending: {message}")


@ContainerModule.define
def messaging(binder: Binder) -> None:
    binder.bind("mq-url").to_constant("amqp://localhost")
    binder.bind("mq").to_class(MessageQueue)
    binder.bind("notifier").to_function(lambda c: c.get("mq").send).named("mq")


@ContainerModule.define
def console(binder: Binder) -> None:
    binder.bind("notifier").to_constant(print).named("console")


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("=== Container Modules Demo ===\n")

    container = Container()
    container.bind("notifier").to_constant(lambda message: None).named("null")

    print("1. Loading modules...")
    container.load(messaging, console)
    container.get_named("notifier", "mq")("user created")
    container.get_named("notifier", "console")("[console] user created")

    print("\n2. Unloading messaging...")
    container.unload(messaging)
    print(f"Messaging still bound: {container.exists('mq')}")
    print(f"Notifiers left: {len(container.get_all_named('notifier', 'console'))} console")

    print("\n3. Unloading console...")
    container.unload(console)
    print(f"Null notifier survives: {container.get_named('notifier', 'null')('ignored') is None}")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
