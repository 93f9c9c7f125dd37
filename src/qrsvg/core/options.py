"""
どこで: `src/qrsvg/core/options.py`。
何を: 描画オプション `RenderOptions` と、既定値を適用した `ResolvedSvgOptions` を定義する。
なぜ: 既定値の適用とモジュール寸法の算出を 1 箇所に閉じ込め、描画呼び出しごとに純粋に解決するため。
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from qrsvg.core.errors import InvalidWidthError

DEFAULT_COLOR = "#000"
DEFAULT_BACKGROUND_COLOR = "#FFF"
DEFAULT_MODULE_SIZE = 11
TRANSPARENT = "transparent"
_INT_TEXT = re.compile(r"-?[0-9]+")

# mapping で受け付けるキー名（別名 -> フィールド名）。
_OPTION_KEYS = {
    "color": "color",
    "background_color": "background_color",
    "backgroundColor": "background_color",
    "width": "width",
    "viewbox": "viewbox",
}


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """呼び出し側が指定する描画オプション。

    Parameters
    ----------
    color : str or None, optional
        前景色。None の場合は `#000`。
    background_color : str or None, optional
        背景色（`"transparent"` を含む）。None の場合は `#FFF`。
    width : int or str or None, optional
        出力の目標ピクセル幅。None の場合はモジュール 1 個あたり 11px。
    viewbox : bool or None, optional
        None は False 扱い。True なら width/height を出さず viewBox のみで寸法を表す。
    """

    color: str | None = None
    background_color: str | None = None
    width: int | str | None = None
    viewbox: bool | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> RenderOptions:
        """mapping からオプションを組み立てる。未知のキーは無視する。"""
        fields: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_KEYS.get(str(key))
            if name is None:
                continue
            fields[name] = value
        if "viewbox" in fields:
            fields["viewbox"] = bool(fields["viewbox"])
        return cls(**fields)

    def merged(self, overrides: RenderOptions | Mapping[str, Any] | None) -> RenderOptions:
        """overrides 側で指定された（None でない）値を優先して合成した新しいオプションを返す。"""
        if overrides is None:
            return self
        other = as_render_options(overrides)
        changes: dict[str, Any] = {}
        for name in ("color", "background_color", "width", "viewbox"):
            value = getattr(other, name)
            if value is not None:
                changes[name] = value
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class ResolvedSvgOptions:
    """既定値を欠損なく適用した SVG 出力オプション。"""

    background_color: str
    color: str
    module_size: float
    size: int
    dimension: float


def as_render_options(value: RenderOptions | Mapping[str, Any] | None) -> RenderOptions:
    """RenderOptions / mapping / None を RenderOptions に正規化する。"""
    if value is None:
        return RenderOptions()
    if isinstance(value, RenderOptions):
        return value
    if isinstance(value, Mapping):
        return RenderOptions.from_mapping(value)
    raise TypeError(f"options は RenderOptions か mapping である必要がある: got={type(value).__name__}")


def parse_width(width: Any) -> int:
    """width オプションを正の整数ピクセル幅として解釈して返す。

    Raises
    ------
    InvalidWidthError
        整数でも整数文字列でもない場合、または 0 以下の場合。
    """
    if isinstance(width, bool):
        raise InvalidWidthError(f"width は整数である必要がある: got={width!r}")
    if isinstance(width, numbers.Integral):
        value = int(width)
    elif isinstance(width, str):
        # int() が受け付ける空白・符号・区切り・非 ASCII 数字は許さない。
        if _INT_TEXT.fullmatch(width) is None:
            raise InvalidWidthError(f"width は整数文字列である必要がある: got={width!r}")
        value = int(width)
    else:
        raise InvalidWidthError(f"width は整数である必要がある: got={width!r}")

    if value <= 0:
        raise InvalidWidthError(f"width は正の値である必要がある: got={width!r}")
    return value


def resolve_svg_options(
    options: RenderOptions | Mapping[str, Any] | None,
    matrix_size: int,
) -> ResolvedSvgOptions:
    """オプションに既定値を適用し、モジュール寸法と文書寸法を算出して返す。

    Parameters
    ----------
    options : RenderOptions or Mapping or None
        呼び出し側オプション。入力は変更しない。
    matrix_size : int
        行列の 1 辺のモジュール数。

    Returns
    -------
    ResolvedSvgOptions
        解決済みオプション。

    Notes
    -----
    width 指定時の module_size は `width / matrix_size`（実数除算）。端数は丸めない。
    """
    n = int(matrix_size)
    if n < 1:
        raise ValueError(f"matrix_size は 1 以上である必要がある: got={matrix_size!r}")

    opts = as_render_options(options)
    color = opts.color if opts.color is not None else DEFAULT_COLOR
    background_color = (
        opts.background_color if opts.background_color is not None else DEFAULT_BACKGROUND_COLOR
    )

    if opts.width is None:
        module_size: float = DEFAULT_MODULE_SIZE
    else:
        module_size = parse_width(opts.width) / n

    return ResolvedSvgOptions(
        background_color=str(background_color),
        color=str(color),
        module_size=module_size,
        size=n,
        dimension=n * module_size,
    )


__all__ = [
    "DEFAULT_BACKGROUND_COLOR",
    "DEFAULT_COLOR",
    "DEFAULT_MODULE_SIZE",
    "RenderOptions",
    "ResolvedSvgOptions",
    "TRANSPARENT",
    "as_render_options",
    "parse_width",
    "resolve_svg_options",
]
