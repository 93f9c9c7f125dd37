# どこで: `src/qrsvg/__init__.py`。
# 何を: ルート `qrsvg` パッケージを定義する。
# なぜ: import 起点を `qrsvg` に統一するため。

from __future__ import annotations

from qrsvg.api import export_svg, render
from qrsvg.core.errors import InvalidWidthError, MalformedMatrixError
from qrsvg.core.matrix import Matrix, load_matrix, pad_quiet_zone, parse_matrix_text
from qrsvg.core.options import RenderOptions

__all__ = [
    "InvalidWidthError",
    "MalformedMatrixError",
    "Matrix",
    "RenderOptions",
    "export_svg",
    "load_matrix",
    "pad_quiet_zone",
    "parse_matrix_text",
    "render",
]
