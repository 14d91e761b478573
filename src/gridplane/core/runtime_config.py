# どこで: `src/gridplane/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: ホストがコードを変えずにグリッドの既定パラメータを差し替えられるようにするため。

"""実行時設定（`config.yaml`）の探索・ロード・キャッシュを担当する。

このモジュールは、以下を提供する:

- `config.yaml` を「同梱デフォルト → ユーザー設定（任意）」の順に適用して `RuntimeConfig` を構築
- 探索パス（CWD / HOME）と、明示指定（`set_config_path()`）の両方に対応
- 1 回ロードした結果をプロセス内でキャッシュ（設定を切り替える場合は `set_config_path()` で破棄）

入出力 / 副作用
----------------
- 入力: 同梱 `gridplane/resource/default_config.yaml`、任意でユーザーの `config.yaml`
- 出力: `RuntimeConfig`（不変データ）
- 副作用: ファイル読み取り、YAML パース、モジュールグローバルへのキャッシュ保存

実装メモ
--------
- ユーザー設定の適用は `dict.update()`（トップレベルの浅い上書き）で行う。
  `grid:` を上書きすると、同梱デフォルトの `grid:` は部分マージされず丸ごと置換される。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from gridplane.core.grid_config import GridConfig

logger = logging.getLogger(__name__)

_GRID_KEYS = (
    "axis",
    "size",
    "spacing",
    "axis_color_x",
    "axis_color_y",
    "axis_color_z",
    "minor_line_color",
    "major_line_color",
)


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """gridplane の実行時設定。

    Attributes
    ----------
    config_path:
        実際に採用されたユーザー設定ファイルのパス。
        ユーザー設定が無い場合は None（同梱デフォルトのみで動作）。
    grid:
        `grid:` セクションから構築した既定の GridConfig。
    """

    config_path: Path | None
    grid: GridConfig


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Parameters
    ----------
    path:
        `config.yaml` のパス。None の場合は明示指定を解除する。

    Notes
    -----
    - `path` は `~` と環境変数を展開して保持する。
    - 設定が変わるため、`runtime_config()` のキャッシュを破棄する。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(_expand_path_text(str(path)))


def _default_config_candidates() -> tuple[Path, ...]:
    """既定の `config.yaml` 探索候補を返す。

    探索順（先勝ち）:
    - `./.gridplane/config.yaml`
    - `~/.config/gridplane/config.yaml`
    """

    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".gridplane" / "config.yaml",
        home / ".config" / "gridplane" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    """パス文字列内の `~` と環境変数を展開して返す。"""

    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    """任意値を mapping として解釈し、dict に正規化して返す。"""

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを読み、トップレベル mapping を dict として返す。

    空（`null`）なら `{}` を返す。
    """

    try:
        import yaml  # type: ignore[import-untyped]
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(f"PyYAML を import できません: {exc}") from exc

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
    """UTF-8 の YAML ファイルを読み、dict を返す。"""

    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("gridplane")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="gridplane/resource/default_config.yaml")


def grid_config_from_mapping(grid: dict[str, Any], *, key: str = "grid") -> GridConfig:
    """`grid:` セクションの mapping から GridConfig を構築する。

    Raises
    ------
    RuntimeError
        必須キーの不足、または未知キーがある場合。
    ValueError
        値が GridConfig の検証を通らない場合。
    """

    unknown = sorted(str(k) for k in grid.keys() if k not in _GRID_KEYS)
    if unknown:
        raise RuntimeError(f"{key} に未知のキーがあります: unknown={unknown}")

    missing = [k for k in _GRID_KEYS if k not in grid]
    if missing:
        raise RuntimeError(
            f"{key} の必須キーが不足しています"
            "（config.yaml はトップレベル浅い上書きのため、grid: を上書きする場合は"
            " 同梱 default_config.yaml の grid: をすべて含めてください）"
            f": missing={missing}"
        )

    try:
        return GridConfig(**{k: grid[k] for k in _GRID_KEYS})
    except ValueError as exc:
        raise ValueError(f"{key} の設定が不正です: {exc}") from exc


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    読み込み元の優先順位（後勝ち）:
    1) 同梱 `gridplane/resource/default_config.yaml`
    2) 探索で見つかった `config.yaml`（任意）
    3) `set_config_path()` で明示指定された `config.yaml`（任意）
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
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload.update(_load_yaml_config(explicit_path))

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

    grid = grid_config_from_mapping(_as_mapping(payload.get("grid"), key="grid"))

    config_path = explicit_path or discovered_path
    logger.debug("runtime config loaded: config_path=%s", config_path)

    cfg = RuntimeConfig(config_path=config_path, grid=grid)
    _CONFIG_CACHE = cfg
    return cfg


__all__ = [
    "RuntimeConfig",
    "grid_config_from_mapping",
    "runtime_config",
    "set_config_path",
]
