#!/usr/bin/env python3
"""
Development scripts for the scopedi project.

Each command shells out through uv so the project's dev dependency group is used.
"""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and return True if it exited successfully."""
    print(f"\n🔄 {description}...")
    print(f"Running: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed with exit code {e.returncode}")
        return False
    except FileNotFoundError:
        print(f"❌ Command not found: {cmd[0]}")
        return False

    print(f"✅ {description} passed")
    return True


def run_all(checks: list[tuple[list[str], str]]) -> int:
    results = [run_command(cmd, description) for cmd, description in checks]
    return 0 if all(results) else 1


def run_tests() -> int:
    return run_all([(["uv", "run", "pytest", "-v"], "Tests")])


def run_lint() -> int:
    status = run_all(
        [
            (["uv", "run", "ruff", "check", "."], "Ruff linting"),
            (["uv", "run", "ruff", "format", "--check", "."], "Ruff formatting"),
        ]
    )
    if status:
        print("\n💡 To auto-fix, run: uv run ruff format . && uv run ruff check --fix .")
    return status


def run_typecheck() -> int:
    return run_all(
        [
            (["uv", "run", "mypy", "src/scopedi/"], "MyPy type checking"),
            (["uv", "run", "pyright", "src/scopedi/"], "Pyright type checking"),
        ]
    )


def run_demos() -> int:
    """Run every script in demo/ and fail if any of them fails."""
    demo_files = sorted(p for p in Path("demo").glob("*.py") if not p.name.startswith("_"))
    if not demo_files:
        print("⚠️  No demo files found in demo directory")
        return 0
    return run_all([(["uv", "run", "python", str(p)], f"Demo: {p.name}") for p in demo_files])


def run_readme_validation() -> int:
    """Turn README.md code blocks into a pytest module with phmdoctest and run it."""
    readme_path = Path("README.md")
    if not readme_path.exists():
        print("❌ README.md not found")
        return 1

    test_file = Path("test_readme.py")
    test_file.unlink(missing_ok=True)
    try:
        generate = ["uv", "run", "phmdoctest", str(readme_path), "--outfile", str(test_file)]
        if not run_command(generate, "Generating README tests"):
            return 1
        return run_all([(["uv", "run", "pytest", str(test_file), "-v"], "README code examples")])
    finally:
        test_file.unlink(missing_ok=True)


COMMANDS: dict[str, Callable[[], int]] = {
    "test": run_tests,
    "lint": run_lint,
    "typecheck": run_typecheck,
    "demos": run_demos,
    "readme": run_readme_validation,
}


def check_all() -> int:
    """Run every command and print a summary."""
    print("🚀 Running all checks for scopedi")
    results = {name: func() == 0 for name, func in COMMANDS.items()}

    print(f"\n{'=' * 20} SUMMARY {'=' * 20}")
    for name, passed in results.items():
        print(f"{name:<15} {'✅ PASS' if passed else '❌ FAIL'}")

    if all(results.values()):
        print("\n🎉 All checks passed!")
        return 0
    print("\n💥 Some checks failed. Please fix the issues above.")
    return 1


if __name__ == "__main__":
    commands = {**COMMANDS, "check": check_all}
    if len(sys.argv) != 2 or sys.argv[1] not in commands:
        print(f"Available commands: {', '.join(commands)}")
        print("Usage: python scripts.py <command>")
        sys.exit(1)
    sys.exit(commands[sys.argv[1]]())
