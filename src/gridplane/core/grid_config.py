"""
どこで: `src/gridplane/core/grid_config.py`。
何を: グリッド平面の向き（GridAxis）と生成パラメータ（GridConfig）を定義する。
なぜ: メッシュ生成関数へ渡す入力を、検証済みの不変値として 1 か所で組み立てるため。
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gridplane.core.color import RGBA, coerce_rgba, hsla


class GridAxis(str, Enum):
    """グリッドを置く平面。残り 1 軸の座標は 0 に固定される。"""

    XY = "xy"
    YZ = "yz"
    ZX = "zx"

    @classmethod
    def coerce(cls, value: GridAxis | str) -> GridAxis:
        """GridAxis または "xy"/"yz"/"zx"（大小文字無視）を GridAxis に変換する。"""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            names = ", ".join(repr(a.value) for a in cls)
            raise ValueError(f"axis は {names} のいずれかである必要があります: got={value!r}") from exc


DEFAULT_AXIS_COLOR_X: RGBA = hsla(0.0, 1.0, 0.45)
DEFAULT_AXIS_COLOR_Y: RGBA = hsla(137.0, 1.0, 0.45)
DEFAULT_AXIS_COLOR_Z: RGBA = hsla(213.0, 1.0, 0.45)
DEFAULT_MINOR_LINE_COLOR: RGBA = (0.05, 0.05, 0.05, 1.0)
DEFAULT_MAJOR_LINE_COLOR: RGBA = (0.2, 0.2, 0.2, 1.0)

_COLOR_FIELDS = (
    "axis_color_x",
    "axis_color_y",
    "axis_color_z",
    "minor_line_color",
    "major_line_color",
)


@dataclass(frozen=True, slots=True)
class GridConfig:
    """グリッドメッシュの生成パラメータ。

    Parameters
    ----------
    axis : GridAxis | str
        グリッドを置く平面。既定は ZX（Y=0 の地面）。
    size : int
        1 辺あたりのセル数。線は各方向に `size + 1` 本引かれる。
    spacing : float
        隣り合う線の間隔（ワールド単位）。
    axis_color_x, axis_color_y, axis_color_z
        各ワールド軸に沿う中心線の色。
    minor_line_color
        通常の線の色。
    major_line_color
        10 本ごとの線の色。

    Notes
    -----
    - 色は `coerce_rgba()` が受理する任意の形で渡せ、RGBA タプルへ正規化して保持する。
    - `size` が負、または整数でない場合は ValueError（0 へのクランプはしない）。
    - `spacing` は有限値であれば受理する。0 以下は退化した（潰れた/反転した）
      メッシュになるが、形式としては正しいメッシュが生成される。
    """

    axis: GridAxis = GridAxis.ZX
    size: int = 100
    spacing: float = 1.0
    axis_color_x: RGBA = field(default=DEFAULT_AXIS_COLOR_X)
    axis_color_y: RGBA = field(default=DEFAULT_AXIS_COLOR_Y)
    axis_color_z: RGBA = field(default=DEFAULT_AXIS_COLOR_Z)
    minor_line_color: RGBA = field(default=DEFAULT_MINOR_LINE_COLOR)
    major_line_color: RGBA = field(default=DEFAULT_MAJOR_LINE_COLOR)

    def __post_init__(self) -> None:
        """各フィールドを検証し、正規化した値で固定する。"""
        object.__setattr__(self, "axis", GridAxis.coerce(self.axis))
        object.__setattr__(self, "size", _as_size(self.size))
        object.__setattr__(self, "spacing", _as_spacing(self.spacing))
        for name in _COLOR_FIELDS:
            object.__setattr__(self, name, coerce_rgba(getattr(self, name), key=name))

    @property
    def half_extent(self) -> float:
        """原点から外周の線までの距離 `size * spacing / 2`。"""
        return self.size * 0.5 * self.spacing

    @property
    def line_count(self) -> int:
        """生成される線分の総数 `2 * (size + 1)`。"""
        return 2 * (self.size + 1)


def _as_size(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"size は整数である必要があります: got={value!r}")
    if isinstance(value, numbers.Integral):
        size = int(value)
    else:
        # 整数値の float（3.0 など）だけを受理する。
        try:
            f = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"size は整数である必要があります: got={value!r}") from exc
        if not f.is_integer():
            raise ValueError(f"size は整数である必要があります: got={value!r}")
        size = int(f)
    if size < 0:
        raise ValueError(f"size は 0 以上である必要があります: got={value!r}")
    return size


def _as_spacing(value: Any) -> float:
    try:
        spacing = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"spacing は数値である必要があります: got={value!r}") from exc
    if not math.isfinite(spacing):
        raise ValueError(f"spacing は有限値である必要があります: got={value!r}")
    return spacing


__all__ = [
    "DEFAULT_AXIS_COLOR_X",
    "DEFAULT_AXIS_COLOR_Y",
    "DEFAULT_AXIS_COLOR_Z",
    "DEFAULT_MAJOR_LINE_COLOR",
    "DEFAULT_MINOR_LINE_COLOR",
    "GridAxis",
    "GridConfig",
]
