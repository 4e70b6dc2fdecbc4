"""Boilerplate command: copy the Playwright test stubs into a project."""

from __future__ import annotations

import shutil
import tomllib
from pathlib import Path
from typing import Any

import typer
from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name
from rich.console import Console

PLAYWRIGHT_PACKAGES = ("playwright",)
PATH_CANDIDATES = ("e2e", "tests/e2e", "playwright", "tests/playwright")
STUBS_DIR = Path(__file__).resolve().parent.parent / "stubs"
NOTABLE_FILES = ("conftest.py", "test_bridge_examples.py")

INSTALL_HINT = """
Playwright not found. Please install it and try again.

pip install playwright pytest
playwright install chromium

The generated tests drive Playwright's async API through their own
event loop, so pytest-playwright is not needed.
"""

_console = Console()


class PreconditionError(Exception):
    """Raised when the project does not declare Playwright."""


def read_manifest(base_path: Path) -> dict[str, Any]:
    manifest = base_path / "pyproject.toml"
    try:
        return tomllib.loads(manifest.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PreconditionError(f"No pyproject.toml found in {base_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise PreconditionError(f"Could not parse {manifest}: {exc}") from exc


def _declared_names(requirements: list[str]) -> set[str]:
    names: set[str] = set()
    for raw in requirements:
        try:
            names.add(canonicalize_name(Requirement(raw).name))
        except InvalidRequirement:
            continue
    return names


def is_playwright_installed(base_path: Path) -> bool:
    """Check `[project].dependencies` and every optional-dependencies group."""

    project = read_manifest(base_path).get("project", {})
    declared = _declared_names(project.get("dependencies", []))
    for group in project.get("optional-dependencies", {}).values():
        declared |= _declared_names(group)

    return any(canonicalize_name(name) in declared for name in PLAYWRIGHT_PACKAGES)


def default_playwright_path(base_path: Path) -> str:
    for candidate in PATH_CANDIDATES:
        if (base_path / candidate).exists():
            return candidate
    return PATH_CANDIDATES[0]


def normalize_path(answer: str) -> str:
    return answer.strip().lower().strip("/")


def copy_stubs(base_path: Path, playwright_path: str) -> list[str]:
    """Copy the stubs and return the notable files written, relative to the project."""

    shutil.copytree(
        STUBS_DIR,
        base_path / playwright_path,
        dirs_exist_ok=True,
        ignore=shutil.ignore_patterns("__pycache__", "*.pyc"),
    )
    return [f"{playwright_path}/{name}" for name in NOTABLE_FILES]


def status(kind: str, file: str) -> None:
    _console.print(f"[green]{kind}[/green] [yellow]{file}[/yellow]")


def boilerplate(base_path: Path) -> None:
    """Generate useful Playwright boilerplate."""

    base_path = base_path.resolve()

    try:
        installed = is_playwright_installed(base_path)
    except PreconditionError as exc:
        _console.print(f"[dim]{exc}[/dim]")
        installed = False

    if not installed:
        _console.print(f"[yellow]{INSTALL_HINT}[/yellow]")
        return

    answer = typer.prompt(
        "Where should we put the playwright directory? "
        "It should be the directory your Playwright tests live in",
        default=default_playwright_path(base_path),
    )
    playwright_path = normalize_path(answer)
    if not playwright_path:
        _console.print("[red]Error:[/red] the playwright directory cannot be the project root.")
        raise typer.Exit(code=1)

    try:
        written = copy_stubs(base_path, playwright_path)
    except OSError as exc:
        _console.print(f"[red]Error:[/red] could not copy the stubs: {exc}")
        raise typer.Exit(code=1) from exc

    for file in written:
        status("Writing", file)
    _console.print("")
