#!/usr/bin/env python3
"""
Demonstration of scopedi - a dependency injection registry with scoped containers.

This demo shows:
1. Class, factory, function and constant bindings
2. Singleton and transient lifetimes
3. Named and tagged bindings
4. Collecting several bindings with get_all
5. Circular dependency detection
6. Missing binding errors
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from scopedi import Container, InjectionError, Token

# Example domain: A simple web service with different components

CONFIG = Token("config")
DATABASE = Token("database")
LOGGER = Token("logger")
USER_SERVICE = Token("user-service")
COMMAND = Token("command")


class Database(ABC):
    """Abstract database interface."""

    @abstractmethod
    def query(self, sql: str) -> str:
        pass


class PostgresDB(Database):
    """PostgreSQL implementation."""

    def __init__(self, container: Container):
        self.connection_string = container.get_named("database-url", "primary")

    def query(self, sql: str) -> str:
        return f"PostgreSQL[{self.connection_string}]: {sql}"


class InMemoryDB(Database):
    """In-memory database for testing."""

    def __init__(self, container: Container):
        pass

    def query(self, sql: str) -> str:
        return f"InMemoryDB: {sql}"


@dataclass
class Config:
    """Application configuration."""

    app_name: str
    debug: bool = False


class Logger:
    """Simple logger."""

    def __init__(self, container: Container):
        self.config: Config = container.get(CONFIG)

    def log(self, message: str) -> None:
        prefix = f"[{self.config.app_name}]"
        if self.config.debug:
            prefix += "[DEBUG]"
        print(f"{prefix} {message}")


class UserService:
    """Service for managing users."""

    def __init__(self, container: Container):
        self.database: Database = container.get(DATABASE)
        self.logger: Logger = container.get(LOGGER)

    def create_user(self, username: str) -> str:
        self.logger.log(f"Creating user: {username}")
        return self.database.query(f"INSERT INTO users (name) VALUES ('{username}')")


class StartCommand:
    def __init__(self, container: Container):
        self.logger: Logger = container.get(LOGGER)

    def execute(self) -> str:
        self.logger.log("Starting application...")
        return "Application started"


class StatusCommand:
    def __init__(self, container: Container):
        self.logger: Logger = container.get(LOGGER)

    def execute(self) -> str:
        self.logger.log("Checking status...")
        return "Application is running"


def create_connection_string(container: Container) -> str:
    """Derive the database connection string from configuration."""
    config: Config = container.get(CONFIG)
    if config.debug:
        return "postgresql://localhost:5432/testdb"
    return "postgresql://prod-server:5432/proddb"


def main() -> None:
    """Main demo function."""
    print("=== scopedi Demo ===\n")

    app = Container()
    app.bind(CONFIG).to_constant(Config("ProductionApp", debug=False))
    app.bind("database-url").to_function(create_connection_string).named("primary")
    app.bind(DATABASE).to_class(PostgresDB)
    app.bind(LOGGER).to_class(Logger)
    app.bind(USER_SERVICE).to_class(UserService).transient()
    app.bind(COMMAND).to_class(StartCommand)
    app.bind(COMMAND).to_class(StatusCommand)

    print("1. Production Container:")
    print("-" * 30)

    user_service = app.get(USER_SERVICE)
    print(f"Result: {user_service.create_user('alice')}")
    print(f"Same database singleton: {user_service.database is app.get(USER_SERVICE).database}")
    print(f"Fresh transient service: {user_service is not app.get(USER_SERVICE)}")

    for command in app.get_all(COMMAND):
        print(f"Command result: {command.execute()}")

    print("\n2. Test Scope:")
    print("-" * 30)

    test = app.create_child()
    test.bind(DATABASE).to_class(InMemoryDB)
    test.bind(DATABASE).to_class(InMemoryDB).tagged("replica", "eu")

    print(f"Config from parent: {test.get(CONFIG)}")
    print(f"Test DB result: {test.get(DATABASE).query('SELECT * FROM users')}")
    print(f"Tagged DB result: {test.get_tagged(DATABASE, 'replica', 'eu').query('SELECT 1')}")
    print(f"Parent DB unchanged: {app.get(DATABASE).query('SELECT 1')}")

    print("\n3. Circular Dependency Detection:")
    print("-" * 30)

    circular = Container()
    circular.bind("a").to_factory(lambda c: ("a", c.get("b")))
    circular.bind("b").to_factory(lambda c: ("b", c.get("a")))

    try:
        circular.get("a")
        print("This shouldn't print - circular dependency should be caught during resolution")
    except InjectionError as e:
        print(f"Caught expected circular dependency: {e}")

    print("\n4. Missing Binding Detection:")
    print("-" * 30)

    try:
        test.get_named(DATABASE, "archive")
        print("This shouldn't print - missing binding should be reported")
    except InjectionError as e:
        print(f"Caught expected missing binding: {e}")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
