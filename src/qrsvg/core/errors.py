# どこで: `src/qrsvg/core/errors.py`。
# 何を: レンダリング入力の検証で送出する例外型を定義する。
# なぜ: 呼び出し側が ValueError 全般ではなく原因別に捕捉できるようにするため。

from __future__ import annotations


class InvalidWidthError(ValueError):
    """`width` オプションが正の整数（または整数文字列）でない。"""


class MalformedMatrixError(ValueError):
    """モジュール行列が正方・二値・非空の契約を満たさない。"""


__all__ = ["InvalidWidthError", "MalformedMatrixError"]
