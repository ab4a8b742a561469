"""Source and test layout rules.

- unit test modules live in ``tests/unit/<domain>/`` and never use the
  ``test_`` prefix (tests/conftest.py collects them by location)
- only ``tests/conftest.py`` may exist
- source modules stay under the configured line limit
"""

from __future__ import annotations

from .shared import SRC_DIR, TESTS_DIR, SRC_FILE_LINES, rel, iter_python_files


def find_prefixed_test_files() -> list[str]:
    return [
        f"  {rel(path)}: filename must not use test_ prefix"
        for path in iter_python_files(TESTS_DIR / "unit")
        if path.name.startswith("test_")
    ]


def find_flat_unit_tests() -> list[str]:
    unit_dir = TESTS_DIR / "unit"
    if not unit_dir.is_dir():
        return []
    return [
        f"  {rel(child)}: must be inside a domain subfolder (tests/unit/<domain>/)"
        for child in sorted(unit_dir.iterdir())
        if child.is_file() and child.suffix == ".py" and child.name != "__init__.py"
    ]


def find_nested_conftests() -> list[str]:
    allowed = TESTS_DIR / "conftest.py"
    return [
        f"  {rel(path)}: conftest.py only allowed at tests/conftest.py"
        for path in sorted(TESTS_DIR.rglob("conftest.py"))
        if path != allowed
    ]


def find_long_source_files() -> list[str]:
    violations: list[str] = []
    for path in iter_python_files(SRC_DIR):
        with path.open(encoding="utf-8") as handle:
            count = sum(1 for _ in handle)
        if count > SRC_FILE_LINES:
            violations.append(f"  {rel(path)}: {count} lines (limit {SRC_FILE_LINES})")
    return violations


__all__ = [
    "find_prefixed_test_files",
    "find_flat_unit_tests",
    "find_nested_conftests",
    "find_long_source_files",
]
