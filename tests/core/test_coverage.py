"""skyline polyline の塗り領域（nonzero 規則）が行列と一致することのテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from qrsvg.core.compactor import compact_matrix
from qrsvg.core.coverage import covers_matrix, fill_mask
from qrsvg.core.matrix import Matrix, pad_quiet_zone


def _finder_pattern() -> Matrix:
    rows = [
        [1, 1, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 1, 1, 1, 1, 1, 1],
    ]
    return Matrix.from_rows(rows)


def test_fill_mask_reproduces_finder_pattern_with_quiet_zone() -> None:
    m = pad_quiet_zone(_finder_pattern(), 4)
    mask = fill_mask(compact_matrix(m), m.size)
    assert np.array_equal(mask, m.modules.astype(bool))


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_random_matrices_with_light_last_column_are_covered(seed: int) -> None:
    rng = np.random.default_rng(seed)
    modules = rng.integers(0, 2, size=(21, 21))
    modules[:, -1] = 0
    assert covers_matrix(Matrix(modules=modules))


def test_dark_first_column_is_covered() -> None:
    m = Matrix.from_rows([[1, 0, 0], [1, 1, 0], [0, 1, 0]])
    assert covers_matrix(m)


def test_all_light_matrix_fills_nothing() -> None:
    m = Matrix.from_rows([[0, 0], [0, 0]])
    assert not fill_mask(compact_matrix(m), m.size).any()
    assert covers_matrix(m)


def test_fill_mask_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        fill_mask(np.zeros((3, 3)), 2)
    with pytest.raises(ValueError):
        fill_mask(np.zeros((3, 2)), 0)
