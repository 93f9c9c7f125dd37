"""
どこで: `src/qrsvg/cli.py`。
何を: テキスト/JSON の行列ファイルを SVG に変換するコマンドライン入口 `qrsvg` を提供する。
なぜ: 上流のエンコーダが出した行列を、スクリプトを書かずに SVG 化できるようにするため。
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from qrsvg.core.errors import InvalidWidthError, MalformedMatrixError
from qrsvg.core.matrix import Matrix, load_matrix, pad_quiet_zone, parse_matrix_text
from qrsvg.core.options import RenderOptions
from qrsvg.core.runtime_config import output_root_dir, runtime_config, set_config_path
from qrsvg.export.svg import export_svg, render_svg

_logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="qrsvg", description="QR コード行列を SVG に変換する")
    p.add_argument("input", help="行列ファイル（テキストまたは .json）。`-` なら標準入力")
    p.add_argument("--out", default="", help="出力先 SVG。省略時は標準出力。ファイル名のみなら output_dir 配下")
    p.add_argument("--color", default=None, help="前景色（例: #000）")
    p.add_argument("--background-color", default=None, help="背景色（例: #FFF, transparent）")
    p.add_argument("--width", default=None, help="出力のピクセル幅（整数）")
    p.add_argument(
        "--viewbox",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="width/height を出さず viewBox のみで寸法を表す（--no-viewbox で config の指定を打ち消す）",
    )
    p.add_argument("--quiet-zone", type=int, default=None, help="行列の周囲に付ける明モジュール幅")
    p.add_argument("--config", default=None, help="config.yaml のパス")
    p.add_argument("-v", "--verbose", action="store_true", help="debug ログを出す")
    return p.parse_args(argv)


def _read_matrix(source: str) -> Matrix:
    if source == "-":
        return parse_matrix_text(sys.stdin.read())
    return load_matrix(Path(source))


def _resolve_out_path(out: str) -> Path:
    """ディレクトリ成分を持たない出力名は output_dir 配下に置く。"""
    path = Path(out)
    if path.parent == Path("."):
        return output_root_dir() / path
    return path


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            set_config_path(args.config)
        cfg = runtime_config()

        options = cfg.render_defaults.merged(
            RenderOptions(
                color=args.color,
                background_color=args.background_color,
                width=args.width,
                viewbox=args.viewbox,
            )
        )
        quiet_zone = cfg.quiet_zone if args.quiet_zone is None else int(args.quiet_zone)

        matrix = pad_quiet_zone(_read_matrix(args.input), quiet_zone)
        _logger.debug("loaded matrix: size=%d quiet_zone=%d", matrix.size, quiet_zone)

        if args.out:
            path = export_svg(matrix, _resolve_out_path(args.out), options)
            print(str(path))
        else:
            sys.stdout.write(render_svg(matrix, options) + "\n")
    except (InvalidWidthError, MalformedMatrixError, RuntimeError, ValueError, OSError) as exc:
        print(f"qrsvg: error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
