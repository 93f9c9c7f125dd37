"""
どこで: `src/qrsvg/core/compactor.py`。
何を: 行列の各行をランレングス解析し、1 本の塗りつぶし polyline の頂点列へ変換する。
なぜ: 暗モジュールごとに矩形を出す代わりに、色の切り替わり数に比例する大きさの SVG にするため。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from qrsvg.core.matrix import Matrix

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RowRun:
    """1 行内で同じ値が連続する最大区間。"""

    value: int
    length: int


def _as_row(row: Sequence[int] | np.ndarray) -> np.ndarray:
    arr = np.asarray(row, dtype=np.int64)
    if arr.ndim != 1 or arr.size == 0:
        raise ValueError("row は 1 要素以上の 1 次元配列である必要がある")
    return arr


def _run_starts(row: np.ndarray) -> np.ndarray:
    """各ランの開始インデックス（先頭 0 を含む）を返す。"""
    changes = np.flatnonzero(row[1:] != row[:-1]) + 1
    return np.concatenate([np.zeros((1,), dtype=np.int64), changes.astype(np.int64)])


def row_runs(row: Sequence[int] | np.ndarray) -> list[RowRun]:
    """行を左から走査し、最大ランの列 `(value, length)` を返す。"""
    arr = _as_row(row)
    starts = _run_starts(arr)
    stops = np.append(starts[1:], arr.size)
    return [
        RowRun(value=int(arr[s]), length=int(e - s))
        for s, e in zip(starts.tolist(), stops.tolist())
    ]


def run_boundaries(runs: Sequence[RowRun]) -> np.ndarray:
    """ランの境界 x 座標 `B_0=0, B_i=B_{i-1}+length_i` を返す（要素数は ラン数+1）。"""
    lengths = np.asarray([r.length for r in runs], dtype=np.int64)
    return np.concatenate([np.zeros((1,), dtype=np.int64), np.cumsum(lengths)])


def compact_row(row: Sequence[int] | np.ndarray, row_index: int) -> np.ndarray:
    """1 行分の skyline 頂点列を返す。

    Parameters
    ----------
    row : Sequence[int] or np.ndarray
        0/1 の行。
    row_index : int
        0 始まりの行番号。表示上の行 y は `row_index + 1`。

    Returns
    -------
    np.ndarray
        int64 型 shape (2k+1, 2) の頂点配列（k はラン数）。

    Notes
    -----
    ラン i ごとに `(start_i, y - value_i)`, `(stop_i, y - value_i)` を出す。
    暗ランは基線より 1 上、明ランは基線上をなぞる。最後に終端点 `(0, y)` を置き、
    次の行のトレースへ途切れずにつなぐ。この 2 つの規則を変えると塗り領域が黙って壊れる。
    """
    arr = _as_row(row)
    y = int(row_index) + 1

    starts = _run_starts(arr)
    stops = np.append(starts[1:], arr.size)
    heights = y - arr[starts]

    k = int(starts.size)
    points = np.empty((2 * k + 1, 2), dtype=np.int64)
    points[0 : 2 * k : 2, 0] = starts
    points[1 : 2 * k : 2, 0] = stops
    points[0 : 2 * k : 2, 1] = heights
    points[1 : 2 * k : 2, 1] = heights
    points[-1] = (0, y)
    return points


def compact_matrix(matrix: Matrix) -> np.ndarray:
    """全行の頂点列を行順に連結して返す（ソート・重複除去はしない）。"""
    parts = [compact_row(row, i) for i, row in enumerate(matrix.rows())]
    points = np.concatenate(parts, axis=0)
    _logger.debug(
        "compacted %dx%d matrix into %d points (%d runs)",
        matrix.size,
        matrix.size,
        int(points.shape[0]),
        (int(points.shape[0]) - matrix.size) // 2,
    )
    return points


__all__ = ["RowRun", "compact_matrix", "compact_row", "row_runs", "run_boundaries"]
