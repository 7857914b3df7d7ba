"""Tests for parity between package imports and declared runtime dependencies."""

from __future__ import annotations

import ast
import re
import sys
import tomllib
from pathlib import Path

# Import name -> distribution name where the two differ.
DISTRIBUTION_NAMES = {"tomli_w": "tomli-w"}


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _requirement_name(requirement: str) -> str:
    match = re.match(r"[A-Za-z0-9_.-]+", requirement)
    assert match is not None
    return match.group(0).lower().replace("_", "-")


def _third_party_imports(package_dir: Path) -> set[str]:
    names: set[str] = set()
    for source in package_dir.rglob("*.py"):
        tree = ast.parse(source.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names.add(node.module.split(".")[0])
    return {
        name
        for name in names
        if name not in sys.stdlib_module_names and name not in ("textsearcher", "__future__")
    }


def test_pyproject_declares_every_runtime_import() -> None:
    """Every third-party package imported by textsearcher must be a runtime dependency."""
    repo_root = _repo_root()

    pyproject_data = tomllib.loads((repo_root / "pyproject.toml").read_text(encoding="utf-8"))
    dependency_names = {
        _requirement_name(requirement)
        for requirement in pyproject_data["project"]["dependencies"]
    }

    for import_name in sorted(_third_party_imports(repo_root / "textsearcher")):
        dist = DISTRIBUTION_NAMES.get(import_name, import_name).lower()
        assert dist in dependency_names, (
            f"'{import_name}' is imported by textsearcher but '{dist}' is missing "
            "from pyproject.toml dependencies."
        )


def test_no_unused_runtime_dependencies() -> None:
    repo_root = _repo_root()

    pyproject_data = tomllib.loads((repo_root / "pyproject.toml").read_text(encoding="utf-8"))
    imported = {
        DISTRIBUTION_NAMES.get(name, name).lower()
        for name in _third_party_imports(repo_root / "textsearcher")
    }
    for requirement in pyproject_data["project"]["dependencies"]:
        assert _requirement_name(requirement) in imported, requirement
