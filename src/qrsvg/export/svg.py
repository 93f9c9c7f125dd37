"""
どこで: `src/qrsvg/export/svg.py`。
何を: 圧縮済み頂点列を 1 本の polyline を持つ SVG 文書に組み立て、文字列またはファイルとして出力する。
なぜ: モジュール数ではなく色の切り替わり数に比例する、自己完結した SVG を得るため。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np

from qrsvg.core.compactor import compact_matrix
from qrsvg.core.errors import MalformedMatrixError
from qrsvg.core.matrix import Matrix
from qrsvg.core.options import RenderOptions, ResolvedSvgOptions, as_render_options, resolve_svg_options

_logger = logging.getLogger(__name__)

_XML_DECLARATION = '<?xml version="1.0" standalone="yes"?>'
_SVG_NS = "http://www.w3.org/2000/svg"
_XLINK_NS = "http://www.w3.org/1999/xlink"
_EV_NS = "http://www.w3.org/2001/xml-events"


def _fmt(value: float) -> str:
    """寸法を丸めずに文字列化する。整数値は `20.0` ではなく `20` とする。"""
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    f = float(value)
    if f.is_integer():
        return str(int(f))
    return repr(f)


def format_points(points: np.ndarray) -> str:
    """頂点列（shape (N, 2)）を polyline の points 属性値 `x1,y1 x2,y2 ...` にして返す。"""
    pts = np.asarray(points, dtype=np.int64)
    return " ".join(f"{x},{y}" for x, y in pts.tolist())


def assemble_svg(
    resolved: ResolvedSvgOptions,
    points: np.ndarray,
    *,
    viewbox: bool = False,
) -> str:
    """解決済みオプションと頂点列から SVG 文書を組み立てて返す。

    Parameters
    ----------
    resolved : ResolvedSvgOptions
        既定値適用済みのオプション。
    points : np.ndarray
        compact_matrix が返す頂点列。
    viewbox : bool, default False
        True なら viewBox のみ、False なら width/height と viewBox の両方を出す。

    Returns
    -------
    str
        改行区切りの SVG 文書（末尾改行なし）。

    Notes
    -----
    色文字列は検証せずそのまま出力する。
    """
    size = int(resolved.size)
    viewbox_attr = f'viewBox="0 0 {size} {size}"'
    if viewbox:
        dimension_attrs = viewbox_attr
    else:
        dimension = _fmt(resolved.dimension)
        dimension_attrs = f'width="{dimension}" height="{dimension}" {viewbox_attr}'

    open_tag = (
        f'<svg version="1.1" xmlns="{_SVG_NS}" xmlns:xlink="{_XLINK_NS}" xmlns:ev="{_EV_NS}" '
        f'{dimension_attrs} shape-rendering="crispEdges" '
        f'style="background-color: {resolved.background_color}">'
    )
    polyline = f'<polyline points="{format_points(points)}" fill="{resolved.color}" />'
    return "\n".join([_XML_DECLARATION, open_tag, polyline, "</svg>"])


def _coerce_matrix(matrix: Matrix | Any, size: int | None) -> Matrix:
    m = matrix if isinstance(matrix, Matrix) else Matrix.from_rows(matrix)
    if size is not None and int(size) != m.size:
        raise MalformedMatrixError(f"size が行列の 1 辺と一致しない: size={size} matrix={m.size}")
    return m


def render_svg(
    matrix: Matrix | Any,
    options: RenderOptions | Mapping[str, Any] | None = None,
    *,
    size: int | None = None,
) -> str:
    """行列を SVG 文書文字列に変換して返す。

    Raises
    ------
    InvalidWidthError
        width が正の整数として解釈できない場合。
    MalformedMatrixError
        行列が正方・二値でない場合、または size が一致しない場合。
    """
    m = _coerce_matrix(matrix, size)
    opts = as_render_options(options)
    # 頂点計算の前にオプションを解決し、失敗時は何も組み立てない。
    resolved = resolve_svg_options(opts, m.size)
    _logger.debug(
        "resolved svg options: size=%d module_size=%s dimension=%s viewbox=%s",
        resolved.size,
        resolved.module_size,
        resolved.dimension,
        bool(opts.viewbox),
    )
    points = compact_matrix(m)
    return assemble_svg(resolved, points, viewbox=bool(opts.viewbox))


def export_svg(
    matrix: Matrix | Any,
    path: str | Path,
    options: RenderOptions | Mapping[str, Any] | None = None,
    *,
    size: int | None = None,
) -> Path:
    """行列を SVG として保存する。

    Parameters
    ----------
    matrix : Matrix or array-like
        正方二値のモジュール行列。
    path : str or Path
        出力先パス。親ディレクトリは作成する。
    options : RenderOptions or Mapping or None, optional
        描画オプション。
    size : int or None, optional
        行列の 1 辺。指定時は行列と一致する必要がある。

    Returns
    -------
    Path
        保存先パス。
    """
    _path = Path(path)
    document = render_svg(matrix, options, size=size)

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(document + "\n")

    _logger.debug("wrote svg: path=%s bytes=%d", _path, len(document) + 1)
    return _path


__all__ = ["assemble_svg", "export_svg", "format_points", "render_svg"]
