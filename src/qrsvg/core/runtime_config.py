# どこで: `src/qrsvg/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: CLI の既定色・既定幅・出力先をユーザーが指定できるようにするため。描画コア自体はこれを読まない。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from qrsvg.core.options import RenderOptions, parse_width


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """qrsvg の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    render_defaults: RenderOptions
    quiet_zone: int


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".qrsvg" / "config.yaml",
        home / ".config" / "qrsvg" / "config.yaml",
    )


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_optional_str(value: Any, *, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise RuntimeError(f"{key} は文字列である必要があります: got={value!r}")
    return value


def _as_optional_bool(value: Any, *, key: str) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise RuntimeError(f"{key} は bool である必要があります: got={value!r}")
    return value


def _merge_section(base: dict[str, Any], override: dict[str, Any], *, key: str) -> None:
    """トップレベルの section を 1 段だけ深くマージする。"""
    if key not in override:
        return
    merged = _as_mapping(base.get(key), key=key)
    merged.update(_as_mapping(override[key], key=key))
    base[key] = merged


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        resource = resources.files("qrsvg") / "resource" / "default_config.yaml"
        blob = resource.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="qrsvg/resource/default_config.yaml")


def _apply(payload: dict[str, Any], override: dict[str, Any]) -> None:
    for key, value in override.items():
        if key in ("paths", "render"):
            _merge_section(payload, override, key=key)
        else:
            payload[key] = value


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.qrsvg/config.yaml` / `~/.config/qrsvg/config.yaml`
    3) `set_config_path(...)` で指定した config
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        _apply(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        _apply(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _as_optional_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError(
            "paths.output_dir が未設定です（同梱 default_config.yaml を確認してください）"
        )

    render = _as_mapping(payload.get("render"), key="render")
    width = render.get("width")
    if width is not None:
        # 不正な width は描画時ではなくロード時に弾く。
        parse_width(width)
    defaults = RenderOptions(
        color=_as_optional_str(render.get("color"), key="render.color"),
        background_color=_as_optional_str(
            render.get("background_color"), key="render.background_color"
        ),
        width=width,
        viewbox=bool(_as_optional_bool(render.get("viewbox"), key="render.viewbox")),
    )

    quiet_zone_raw = render.get("quiet_zone", 0)
    try:
        quiet_zone = int(quiet_zone_raw)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(
            f"render.quiet_zone は整数である必要があります: got={quiet_zone_raw!r}"
        ) from exc
    if quiet_zone < 0:
        raise ValueError(f"render.quiet_zone は 0 以上である必要があります: got={quiet_zone}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        render_defaults=defaults,
        quiet_zone=quiet_zone,
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return Path(runtime_config().output_dir)


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
