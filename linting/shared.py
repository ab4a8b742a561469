"""Shared helpers for the structural linters.

Path constants come from ``linting/policy.toml``; every rule returns a
list of violation strings and reports them through ``report()``.
"""

from __future__ import annotations

import ast
import sys
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

_POLICY_PATH = ROOT / "linting" / "policy.toml"


def _load_policy() -> dict[str, object]:
    if not _POLICY_PATH.exists():
        return {}
    return tomllib.loads(_POLICY_PATH.read_text(encoding="utf-8"))


_POLICY = _load_policy()
_PATHS = _POLICY.get("paths") if isinstance(_POLICY.get("paths"), dict) else {}
_LIMITS = _POLICY.get("limits") if isinstance(_POLICY.get("limits"), dict) else {}

SRC_DIR: Path = ROOT / str(_PATHS.get("src", "browser_proxy"))
CONFIG_DIR: Path = ROOT / str(_PATHS.get("config", "browser_proxy/config"))
TESTS_DIR: Path = ROOT / str(_PATHS.get("tests", "tests"))
SRC_FILE_LINES: int = int(_LIMITS.get("src_file_lines", 300))


def rel(path: Path) -> str:
    """Return *path* relative to the project root."""
    try:
        return str(path.relative_to(ROOT))
    except ValueError:
        return str(path)


def iter_python_files(*dirs: Path) -> list[Path]:
    """Sorted .py files under *dirs*, skipping ``__pycache__``."""
    files: list[Path] = []
    for directory in dirs:
        if not directory.is_dir():
            continue
        files.extend(py for py in sorted(directory.rglob("*.py")) if "__pycache__" not in py.parts)
    return files


def parse_module(path: Path) -> ast.Module | None:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return None


def report(header: str, violations: list[str]) -> int:
    """Print *violations* to stderr under *header* and return an exit code."""
    if not violations:
        return 0
    print(f"{header}:", file=sys.stderr)
    for violation in violations:
        print(violation, file=sys.stderr)
    return 1


__all__ = [
    "ROOT",
    "SRC_DIR",
    "CONFIG_DIR",
    "TESTS_DIR",
    "SRC_FILE_LINES",
    "rel",
    "iter_python_files",
    "parse_module",
    "report",
]
