"""依存境界（core/export/api/cli）の破りを検出するテスト。"""

from __future__ import annotations

import ast
from pathlib import Path

_SRC_ROOT = Path(__file__).resolve().parents[2] / "src" / "qrsvg"


def _imported_modules(path: Path) -> set[str]:
    """ファイル内の絶対 import のモジュール名を返す。"""
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            assert node.level == 0, f"相対 import は使わない: {path.name}"
            if node.module is not None:
                modules.add(node.module)
    return modules


def _violations(package: str, forbidden_prefixes: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for path in sorted((_SRC_ROOT / package).rglob("*.py")):
        bad = sorted(m for m in _imported_modules(path) if m.startswith(forbidden_prefixes))
        if bad:
            out.append(f"{path.relative_to(_SRC_ROOT)}: {', '.join(bad)}")
    return out


def test_core_does_not_depend_on_export_api_or_cli() -> None:
    assert _violations("core", ("qrsvg.export", "qrsvg.api", "qrsvg.cli")) == []


def test_export_does_not_depend_on_api_cli_or_runtime_config() -> None:
    # 描画経路は config.yaml を読まない（既定値は呼び出しごとに解決する）。
    forbidden = ("qrsvg.api", "qrsvg.cli", "qrsvg.core.runtime_config", "yaml")
    assert _violations("export", forbidden) == []


def test_api_does_not_depend_on_cli_or_runtime_config() -> None:
    assert _violations("api", ("qrsvg.cli", "qrsvg.core.runtime_config", "yaml")) == []
