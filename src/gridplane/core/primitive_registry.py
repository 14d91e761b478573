# src/gridplane/core/primitive_registry.py
# GridConfig から LineMesh を生成する primitive のレジストリ。
# op 名から生成関数・引数メタ情報・既定 GridConfig を引けるようにする。

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from gridplane.core.grid_config import GridConfig
from gridplane.core.line_mesh import LineMesh, empty_line_mesh
from gridplane.core.parameters.meta import ParamMeta

PrimitiveFunc = Callable[[tuple[tuple[str, Any], ...]], LineMesh]
BuildFunc = Callable[[GridConfig], LineMesh]

_GRID_CONFIG_FIELDS: tuple[str, ...] = tuple(f.name for f in dataclasses.fields(GridConfig))


@dataclass(frozen=True, slots=True)
class PrimitiveEntry:
    """登録済み primitive 1 件分の情報。

    Attributes
    ----------
    build : BuildFunc
        検証済み GridConfig を受けて LineMesh を返す生成関数。
    meta : Mapping[str, ParamMeta]
        ホストへ公開する GridConfig フィールド名 -> ParamMeta（`activate` は含まない）。
    defaults : GridConfig
        引数が省略されたフィールドに使う既定値。
    """

    build: BuildFunc
    meta: Mapping[str, ParamMeta]
    defaults: GridConfig

    def config_from_args(self, params: Mapping[str, Any]) -> GridConfig:
        """引数辞書を既定値に重ね、GridConfig を 1 度だけ組み立てる。"""
        unknown = set(params) - set(self.meta)
        if unknown:
            names = ", ".join(sorted(str(k) for k in unknown))
            raise ValueError(f"primitive に未知の引数があります: {names}")
        return dataclasses.replace(self.defaults, **params)

    def __call__(self, args: tuple[tuple[str, Any], ...]) -> LineMesh:
        params: dict[str, Any] = dict(args)
        if not bool(params.pop("activate", True)):
            return empty_line_mesh()
        out = self.build(self.config_from_args(params))
        if not isinstance(out, LineMesh):
            raise TypeError(
                f"@primitive {self.build.__module__}.{self.build.__name__}: "
                f"期待する戻り値は LineMesh です: {type(out)!r}"
            )
        return out


def _host_value(value: Any) -> Any:
    # GridAxis などの Enum はホスト側では値（"zx" 等）で扱う。
    if isinstance(value, Enum):
        return value.value
    return value


class PrimitiveRegistry:
    """primitive の op 名と PrimitiveEntry を対応付けるレジストリ。

    `registry[name]` は ``func(args: tuple[tuple[str, Any], ...]) -> LineMesh`` を返す。
    args は `(引数名, 値)` の正規化済みタプル列で、予約引数 `activate` を含められる。
    """

    def __init__(self) -> None:
        self._entries: dict[str, PrimitiveEntry] = {}

    def _register(self, name: str, entry: PrimitiveEntry) -> None:
        """primitive を登録する（内部用、同名は上書き）。"""
        self._entries[name] = entry

    def get(self, name: str) -> PrimitiveFunc:
        """op 名に対応する primitive を取得する。

        Raises
        ------
        KeyError
            未登録の op 名が指定された場合。
        """
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> PrimitiveFunc:
        return self.get(name)

    def get_meta(self, name: str) -> dict[str, ParamMeta]:
        """op 名に対応する ParamMeta 辞書（先頭に `activate`）を返す。"""
        entry = self._entries[name]
        return {"activate": ParamMeta(kind="bool"), **entry.meta}

    def get_defaults(self, name: str) -> dict[str, Any]:
        """op 名に対応する既定引数辞書を返す。"""
        entry = self._entries[name]
        defaults: dict[str, Any] = {"activate": True}
        for arg in entry.meta:
            defaults[arg] = _host_value(getattr(entry.defaults, arg))
        return defaults

    def get_param_order(self, name: str) -> tuple[str, ...]:
        """op 名に対応する UI 用の引数順序を返す。"""
        return ("activate", *self._entries[name].meta)


primitive_registry = PrimitiveRegistry()
"""グローバルな primitive レジストリインスタンス。"""


def primitive(
    *,
    meta: Mapping[str, ParamMeta],
    defaults: GridConfig | None = None,
) -> Callable[[BuildFunc], BuildFunc]:
    """グローバル primitive レジストリ用デコレータ。

    関数名をそのまま op 名として登録する。デコレート対象は GridConfig を受けて
    LineMesh を返す関数で、引数辞書から GridConfig への変換はレジストリ側で行う。

    Parameters
    ----------
    meta : Mapping[str, ParamMeta]
        公開する GridConfig フィールド名 -> ParamMeta。並び順が UI の引数順になる。
    defaults : GridConfig, optional
        既定値。省略時は `GridConfig()`。

    Notes
    -----
    予約引数 `activate`（bool）を受け付け、False の場合は空の LineMesh を返す。

    Examples
    --------
    @primitive(meta={"size": ParamMeta(kind="int")})
    def grid_plane(config):
        return build_grid_mesh(config)
    """

    meta_norm: dict[str, ParamMeta] = {}
    for arg, spec in meta.items():
        if arg == "activate":
            raise ValueError("primitive の予約引数 'activate' は meta に含められない")
        if arg not in _GRID_CONFIG_FIELDS:
            raise ValueError(f"meta 引数が GridConfig のフィールドに存在しない: {arg!r}")
        if not isinstance(spec, ParamMeta):
            raise TypeError(f"meta の値は ParamMeta である必要があります: {arg!r}")
        meta_norm[arg] = spec
    if not meta_norm:
        raise ValueError("primitive の meta は空にできない")
    base = GridConfig() if defaults is None else defaults

    def decorator(f: BuildFunc) -> BuildFunc:
        primitive_registry._register(
            f.__name__, PrimitiveEntry(build=f, meta=meta_norm, defaults=base)
        )
        return f

    return decorator


__all__ = [
    "BuildFunc",
    "PrimitiveEntry",
    "PrimitiveFunc",
    "PrimitiveRegistry",
    "primitive",
    "primitive_registry",
]
