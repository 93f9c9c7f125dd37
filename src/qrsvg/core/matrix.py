"""
どこで: `src/qrsvg/core/matrix.py`。
何を: 正方二値のモジュール行列 `Matrix` と、そのロード/整形ユーティリティを定義する。
なぜ: 上流（QR エンコーダ）から受け取った行列を、不変かつ検証済みの形で描画へ渡すため。
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from qrsvg.core.errors import MalformedMatrixError

_DARK_CHARS = frozenset("1#Xx")
_LIGHT_CHARS = frozenset("0._-")


@dataclass(frozen=True, slots=True, eq=False)
class Matrix:
    """QR コードのモジュール行列を表現する。

    Parameters
    ----------
    modules : np.ndarray
        uint8 型 shape (n, n) の配列。値は 0（明）または 1（暗）。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で保持する。
    正方・非空・二値の検証はコンストラクタ内で行い、違反は MalformedMatrixError とする。
    """

    modules: np.ndarray

    def __post_init__(self) -> None:
        """配列を検証し、uint8 の読み取り専用配列に固定する。"""
        modules = _as_module_array(self.modules)

        if modules.ndim != 2:
            raise MalformedMatrixError(f"行列は 2 次元である必要がある: ndim={modules.ndim}")
        rows, cols = modules.shape
        if rows == 0 or cols == 0:
            raise MalformedMatrixError("行列は少なくとも 1x1 である必要がある")
        if rows != cols:
            raise MalformedMatrixError(f"行列は正方である必要がある: shape=({rows}, {cols})")

        # _as_module_array は常に新しい配列を返すので、そのまま凍結してよい。
        modules.setflags(write=False)
        object.__setattr__(self, "modules", modules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self.modules, other.modules))

    def __hash__(self) -> int:
        return hash((self.modules.shape, self.modules.tobytes()))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]] | np.ndarray) -> Matrix:
        """行の列（ネストしたシーケンス）から Matrix を生成する。"""
        return cls(modules=rows)  # type: ignore[arg-type]

    @property
    def size(self) -> int:
        """1 辺のモジュール数 n を返す。"""
        return int(self.modules.shape[0])

    def rows(self) -> list[np.ndarray]:
        """上から順に各行（shape (n,)）を返す。"""
        return [self.modules[i] for i in range(self.size)]


def _as_module_array(value: Any) -> np.ndarray:
    """入力を uint8 の 0/1 配列へ変換して返す。変換できなければ MalformedMatrixError。"""
    try:
        arr = np.asarray(value)
    except ValueError as exc:
        # 行長が揃わない入力は numpy 側で拒否される。
        raise MalformedMatrixError(f"行の長さが揃っていない: {exc}") from exc

    kind = arr.dtype.kind
    if kind == "b":
        return arr.astype(np.uint8)
    if kind not in "iuf":
        raise MalformedMatrixError(f"モジュール値は 0/1 の数値である必要がある: dtype={arr.dtype}")
    if arr.size and not bool(np.all((arr == 0) | (arr == 1))):
        bad = np.unique(arr[(arr != 0) & (arr != 1)])
        raise MalformedMatrixError(f"モジュール値は 0/1 である必要がある: got={bad[:5].tolist()}")
    return arr.astype(np.uint8)


def parse_matrix_text(text: str) -> Matrix:
    """テキスト表現の行列を解析して Matrix を返す。

    1 行が行列の 1 行に対応する。暗モジュールは `1 # X x`、明モジュールは `0 . _ -`。
    セル間の空白と空行は無視する。
    """
    rows: list[list[int]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        cells = [ch for ch in line if not ch.isspace()]
        if not cells:
            continue
        row: list[int] = []
        for ch in cells:
            if ch in _DARK_CHARS:
                row.append(1)
            elif ch in _LIGHT_CHARS:
                row.append(0)
            else:
                raise MalformedMatrixError(f"未対応のモジュール文字: line={lineno} char={ch!r}")
        rows.append(row)

    if not rows:
        raise MalformedMatrixError("行列テキストが空")
    widths = {len(r) for r in rows}
    if len(widths) != 1:
        raise MalformedMatrixError(f"行の長さが揃っていない: widths={sorted(widths)}")
    return Matrix.from_rows(rows)


def load_matrix(path: str | Path) -> Matrix:
    """ファイルから Matrix をロードする。`.json` はネストした配列、それ以外はテキスト表現。"""
    _path = Path(path)
    text = _path.read_text(encoding="utf-8")
    if _path.suffix.lower() == ".json":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedMatrixError(f"行列 JSON の読み込みに失敗: path={_path}") from exc
        if not isinstance(payload, list):
            raise MalformedMatrixError(f"行列 JSON は配列である必要がある: path={_path}")
        return Matrix.from_rows(payload)
    return parse_matrix_text(text)


def pad_quiet_zone(matrix: Matrix, width: int = 4) -> Matrix:
    """行列の周囲に明モジュールの余白（quiet zone）を width 分だけ付けて返す。"""
    w = int(width)
    if w < 0:
        raise ValueError(f"quiet zone の幅は 0 以上である必要がある: got={width!r}")
    if w == 0:
        return matrix
    padded = np.pad(matrix.modules, w, mode="constant", constant_values=0)
    return Matrix(modules=padded)


__all__ = ["Matrix", "load_matrix", "pad_quiet_zone", "parse_matrix_text"]
