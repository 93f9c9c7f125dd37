"""
どこで: `src/qrsvg/core/coverage.py`。
何を: 閉じた polyline を nonzero 規則で塗った領域を、モジュール中心でサンプリングしてマスク化する。
なぜ: skyline トレースの塗り領域が元の行列と一致することを幾何的に確かめるため。
"""

from __future__ import annotations

import numpy as np

from qrsvg.core.compactor import compact_matrix
from qrsvg.core.matrix import Matrix


def _closed_edges(points: np.ndarray) -> np.ndarray:
    """頂点列を閉じた辺配列 [x1, y1, x2, y2]（shape (N, 4)）にして返す。"""
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError("points は shape (N,2) の配列である必要がある")
    nxt = np.roll(pts, -1, axis=0)
    return np.concatenate([pts, nxt], axis=1)


def fill_mask(points: np.ndarray, size: int) -> np.ndarray:
    """polyline の塗り領域をモジュール中心 `(c + 0.5, r + 0.5)` で評価した bool マスクを返す。

    Parameters
    ----------
    points : np.ndarray
        shape (N, 2) の頂点列。SVG と同様に終点から始点へ暗黙に閉じる。
    size : int
        行列の 1 辺のモジュール数。

    Returns
    -------
    np.ndarray
        bool 型 shape (size, size)。塗られるモジュールが True。
    """
    n = int(size)
    if n < 1:
        raise ValueError(f"size は 1 以上である必要がある: got={size!r}")

    mask = np.zeros((n, n), dtype=bool)
    edges = _closed_edges(points)
    if edges.shape[0] < 3:
        return mask

    ex1 = edges[:, 0]
    ey1 = edges[:, 1]
    ex2 = edges[:, 2]
    ey2 = edges[:, 3]
    edy = ey2 - ey1
    edx = ex2 - ex1
    centers_x = np.arange(n, dtype=np.float64) + 0.5

    for r in range(n):
        yy = float(r) + 0.5
        # 半開区間で交差判定し、頂点での二重カウントを抑える。水平辺は edy == 0 で落ちる。
        down = (ey1 <= yy) & (yy < ey2)
        up = (ey2 <= yy) & (yy < ey1)
        crossing = down | up
        if not np.any(crossing):
            continue

        xs = ex1[crossing] + (yy - ey1[crossing]) * edx[crossing] / edy[crossing]
        direction = np.where(down[crossing], 1, -1)

        # 中心の右側にある交差の向きを合計したものが winding number。
        right_of = xs[None, :] > centers_x[:, None]
        winding = (right_of * direction[None, :]).sum(axis=1)
        mask[r] = winding != 0
    return mask


def covers_matrix(matrix: Matrix) -> bool:
    """compact_matrix の塗り領域が行列の暗モジュール集合と一致すれば True を返す。"""
    mask = fill_mask(compact_matrix(matrix), matrix.size)
    return bool(np.array_equal(mask, matrix.modules.astype(bool)))


__all__ = ["covers_matrix", "fill_mask"]
