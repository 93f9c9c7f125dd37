# どこで: `src/qrsvg/api/__init__.py`。
# 何を: 公開 API として render と export_svg を再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from qrsvg.api.render import render
from qrsvg.export.svg import export_svg

__all__ = ["export_svg", "render"]
