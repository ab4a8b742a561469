"""Config-module purity rules.

Modules under browser_proxy/config/ hold constants and env reads only:

- no function definitions (helpers live in browser_proxy/helpers/)
- no imports from sibling config modules (each reads its own env vars)
"""

from __future__ import annotations

import ast

from .shared import CONFIG_DIR, rel, parse_module


def _config_modules():
    if not CONFIG_DIR.is_dir():
        return []
    return [path for path in sorted(CONFIG_DIR.glob("*.py")) if path.name != "__init__.py"]


def find_config_functions() -> list[str]:
    violations: list[str] = []
    for path in _config_modules():
        tree = parse_module(path)
        if tree is None:
            continue
        for node in tree.body:
            if isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
                violations.append(f"  {rel(path)}: def {node.name}() (line {node.lineno})")
    return violations


def find_config_cross_imports() -> list[str]:
    modules = _config_modules()
    siblings = {path.stem for path in modules}
    violations: list[str] = []
    for path in modules:
        tree = parse_module(path)
        if tree is None:
            continue
        for node in tree.body:
            if isinstance(node, ast.ImportFrom) and node.level == 1 and (node.module or "") in siblings:
                violations.append(f"  {rel(path)}: from .{node.module} import ... (line {node.lineno})")
    return violations


__all__ = ["find_config_functions", "find_config_cross_imports"]
