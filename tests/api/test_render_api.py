"""公開 API `qrsvg.render` のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import numpy as np
import pytest

import qrsvg
from qrsvg import InvalidWidthError, Matrix, RenderOptions, render


def test_package_exports() -> None:
    for name in qrsvg.__all__:
        assert hasattr(qrsvg, name)


def test_render_accepts_matrix_lists_and_arrays() -> None:
    rows = [[0, 1], [1, 0]]
    expected = render(Matrix.from_rows(rows))
    assert render(rows) == expected
    assert render(np.array(rows, dtype=bool)) == expected


def test_render_keyword_overrides_win_over_options() -> None:
    text = render([[1]], {"color": "#111", "width": 10}, color="#cc6600")
    root = ET.fromstring(text)
    polyline = root.find("{http://www.w3.org/2000/svg}polyline")

    assert polyline is not None
    assert polyline.attrib["fill"] == "#cc6600"
    assert root.attrib["width"] == "10"


def test_render_keyword_viewbox_false_overrides_options() -> None:
    text = render([[1]], RenderOptions(viewbox=True), viewbox=False)
    assert 'width="11" height="11" viewBox="0 0 1 1"' in text


def test_render_does_not_mutate_options() -> None:
    options = {"width": "30", "backgroundColor": "transparent", "unknown": 1}
    render([[0, 1], [1, 0]], options, color="#abc")
    assert options == {"width": "30", "backgroundColor": "transparent", "unknown": 1}


def test_render_is_idempotent() -> None:
    rng = np.random.default_rng(11)
    modules = rng.integers(0, 2, size=(33, 33))
    assert render(modules, width=330) == render(modules, width=330)


def test_render_invalid_width() -> None:
    with pytest.raises(InvalidWidthError):
        render([[1]], width="abc")
