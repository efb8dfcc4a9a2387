#!/usr/bin/env python3
"""
Task runner for the pyreplace project.

Usage:
    python scripts/tasks.py <command> [options]

Commands:
    test      Run the pytest suite (optionally with coverage or a marker filter)
    lint      Run ruff, black --check and mypy
    format    Auto-format with black and ruff --fix
    clean     Remove caches and build output

Examples:
    python scripts/tasks.py test -m unit
    python scripts/tasks.py test --coverage
    python scripts/tasks.py lint --skip-mypy
"""

from __future__ import annotations

import argparse
import shutil
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

CLEAN_DIRS = [
    "build",
    "dist",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    "htmlcov",
]
CLEAN_FILES = [".coverage", "coverage.xml"]


def info(msg: str) -> None:
    print(f"INFO  {msg}")


def error(msg: str) -> None:
    print(f"ERR   {msg}", file=sys.stderr)


def run(cmd: list[str], *, check: bool = True) -> subprocess.CompletedProcess[str]:
    info(f"Running: {' '.join(cmd)}")
    return subprocess.run(cmd, cwd=PROJECT_ROOT, check=check, text=True)


def cmd_test(args: argparse.Namespace) -> None:
    cmd = [sys.executable, "-m", "pytest"]
    if args.coverage:
        cmd.extend(["--cov=src/pyreplace", "--cov-report=term-missing"])
    if args.markers:
        cmd.extend(["-m", args.markers])
    if args.keyword:
        cmd.extend(["-k", args.keyword])
    if args.failfast:
        cmd.append("-x")
    cmd.extend(args.extra)

    result = run(cmd, check=False)
    if result.returncode != 0:
        error("Tests failed")
        sys.exit(result.returncode)


def cmd_lint(args: argparse.Namespace) -> None:
    checks = [
        ("ruff", [sys.executable, "-m", "ruff", "check", "."]),
        ("black", [sys.executable, "-m", "black", "--check", "."]),
    ]
    if not args.skip_mypy:
        checks.append(("mypy", [sys.executable, "-m", "mypy"]))

    failed = [name for name, cmd in checks if run(cmd, check=False).returncode != 0]
    if failed:
        error(f"Checks failed: {', '.join(failed)}")
        sys.exit(1)


def cmd_format(args: argparse.Namespace) -> None:
    run([sys.executable, "-m", "black", "."])
    run([sys.executable, "-m", "ruff", "check", ".", "--fix"])


def cmd_clean(args: argparse.Namespace) -> None:
    removed = 0
    for dirname in CLEAN_DIRS:
        path = PROJECT_ROOT / dirname
        if path.is_dir():
            shutil.rmtree(path)
            removed += 1
    for filename in CLEAN_FILES:
        path = PROJECT_ROOT / filename
        if path.exists():
            path.unlink()
            removed += 1
    for path in [*PROJECT_ROOT.rglob("__pycache__"), *PROJECT_ROOT.glob("src/*.egg-info")]:
        if path.is_dir():
            shutil.rmtree(path)
            removed += 1
    info(f"Cleaned {removed} items")


COMMANDS = {
    "test": cmd_test,
    "lint": cmd_lint,
    "format": cmd_format,
    "clean": cmd_clean,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasks",
        description="Task runner for pyreplace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command")

    p = subparsers.add_parser("test", help="Run tests")
    p.add_argument("--coverage", action="store_true", help="Enable coverage reporting")
    p.add_argument("--markers", "-m", help="Run tests matching marker expression")
    p.add_argument("--keyword", "-k", help="Run tests matching keyword expression")
    p.add_argument("--failfast", "-x", action="store_true", help="Stop on first failure")
    p.add_argument("extra", nargs="*", help="Extra arguments passed to pytest")

    p = subparsers.add_parser("lint", help="Run linting checks")
    p.add_argument("--skip-mypy", action="store_true", help="Skip mypy type checking")

    subparsers.add_parser("format", help="Auto-format code")
    subparsers.add_parser("clean", help="Clean build/cache artifacts")

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(0 if args.command is None else 1)

    try:
        handler(args)
    except subprocess.CalledProcessError as e:
        error(f"Command failed with exit code {e.returncode}")
        sys.exit(e.returncode)


if __name__ == "__main__":
    main()
