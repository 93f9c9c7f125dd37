# どこで: `src/qrsvg/api/render.py`。
# 何を: 公開描画関数 `render` を提供する。
# なぜ: オプションを mapping / RenderOptions / キーワード引数のどれでも渡せる入口を 1 つにするため。

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from qrsvg.core.matrix import Matrix
from qrsvg.core.options import RenderOptions, as_render_options
from qrsvg.export.svg import render_svg


def render(
    matrix: Matrix | Any,
    options: RenderOptions | Mapping[str, Any] | None = None,
    *,
    size: int | None = None,
    **overrides: Any,
) -> str:
    """QR コード行列を SVG 文書文字列として返す。

    Parameters
    ----------
    matrix : Matrix or array-like
        正方二値のモジュール行列（ネストしたシーケンスや 2 次元 numpy 配列も可）。
    options : RenderOptions or Mapping or None, optional
        描画オプション。入力は変更しない。
    size : int or None, optional
        行列の 1 辺。指定時は行列と一致する必要がある。
    **overrides : Any
        `color="#c60"`, `width=300` のような個別オプション。options より優先する。

    Returns
    -------
    str
        polyline を 1 本だけ持つ SVG 文書。
    """

    opts = as_render_options(options)
    if overrides:
        opts = opts.merged(RenderOptions.from_mapping(overrides))
    return render_svg(matrix, opts, size=size)
