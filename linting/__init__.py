"""Structural lint checks for the browser proxy.

Run every rule with ``python -m linting``.

shared.py        Path constants from policy.toml, file iteration, reporting.
config_rules.py  Config modules stay declarative and do not import siblings.
layout_rules.py  Unit test placement and naming, single conftest, file length.
"""

from __future__ import annotations

from collections.abc import Callable

from .shared import report
from .config_rules import find_config_functions, find_config_cross_imports
from .layout_rules import (
    find_flat_unit_tests,
    find_nested_conftests,
    find_long_source_files,
    find_prefixed_test_files,
)

RULES: tuple[tuple[str, Callable[[], list[str]]], ...] = (
    ("No-config-functions violations (config/ must be declarative)", find_config_functions),
    ("No-config-cross-imports violations (config/ must not import siblings)", find_config_cross_imports),
    ("No-test-file-prefix violations (use plain names, not test_*)", find_prefixed_test_files),
    ("Unit-test-domain-folders violations", find_flat_unit_tests),
    ("No-conftest-in-subfolders violations", find_nested_conftests),
    ("File-length violations", find_long_source_files),
)


def run_all() -> int:
    """Run every rule; return 1 if any reported violations."""
    status = 0
    for header, rule in RULES:
        status |= report(header, rule())
    return status


__all__ = ["RULES", "run_all"]
