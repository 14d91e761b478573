"""
どこで: `src/gridplane/core/grid_mesh.py`。グリッド平面メッシュの実体生成。
何を: GridConfig から線分の端点・頂点カラー・line-list インデックスを構築する。
なぜ: 描画ホストがそのまま GPU バッファへ転送できる、決定的で副作用のない入口を提供するため。

概要
----
線は 2 つの族（horizontal / vertical）に分かれ、各族は `i = 0..size` の `size + 1` 本からなる。
平面（GridAxis）ごとの違いは「どの座標軸に offset を置き、どの軸に沿って線を伸ばすか」だけなので、
`AxisLayout` の表で軸の割り当てを引き、分岐を持たない 1 本の経路で生成する。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import numpy as np

from gridplane.core.color import RGBA
from gridplane.core.grid_config import GridAxis, GridConfig
from gridplane.core.line_mesh import LineMesh

logger = logging.getLogger(__name__)

# major 線を引く間隔（本数）。
MAJOR_LINE_INTERVAL = 10


class LineFamily(str, Enum):
    """互いに直交する 2 つの線の族。生成順もこの定義順に従う。"""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True, slots=True)
class AxisLayout:
    """平面ごとの座標軸の割り当て。

    Attributes
    ----------
    offset_axis : int
        horizontal 族の線を並べる軸（0=X, 1=Y, 2=Z）。
    extent_axis : int
        horizontal 族の線が伸びる軸。vertical 族では offset_axis と役割を入れ替える。
    fixed_axis : int
        平面に含まれず 0 に固定される軸。
    horizontal_color : str
        horizontal 族の中心線に使う GridConfig の色フィールド名。
    vertical_color : str
        vertical 族の中心線に使う GridConfig の色フィールド名。
    """

    offset_axis: int
    extent_axis: int
    fixed_axis: int
    horizontal_color: str
    vertical_color: str

    def family_axes(self, family: LineFamily) -> tuple[int, int]:
        """族に対する `(offset_axis, extent_axis)` を返す。"""
        if family is LineFamily.HORIZONTAL:
            return self.offset_axis, self.extent_axis
        return self.extent_axis, self.offset_axis

    def centerline_color_field(self, family: LineFamily) -> str:
        if family is LineFamily.HORIZONTAL:
            return self.horizontal_color
        return self.vertical_color


# 中心線の色は「その線が伸びるワールド軸の色」と一致する。
_AXIS_LAYOUTS: dict[GridAxis, AxisLayout] = {
    GridAxis.XY: AxisLayout(
        offset_axis=1,
        extent_axis=0,
        fixed_axis=2,
        horizontal_color="axis_color_x",
        vertical_color="axis_color_y",
    ),
    GridAxis.YZ: AxisLayout(
        offset_axis=1,
        extent_axis=2,
        fixed_axis=0,
        horizontal_color="axis_color_z",
        vertical_color="axis_color_y",
    ),
    GridAxis.ZX: AxisLayout(
        offset_axis=2,
        extent_axis=0,
        fixed_axis=1,
        horizontal_color="axis_color_x",
        vertical_color="axis_color_z",
    ),
}


def axis_layout(axis: GridAxis | str) -> AxisLayout:
    """平面に対応する AxisLayout を返す。"""
    return _AXIS_LAYOUTS[GridAxis.coerce(axis)]


LineColorRule = tuple[Callable[[np.ndarray], np.ndarray], RGBA]
"""`(predicate, color)`。predicate は線番号配列を受けて bool 配列を返す。"""


def line_color_rules(config: GridConfig, family: LineFamily) -> tuple[LineColorRule, ...]:
    """族の線色を決める規則列を優先順に返す。

    先に一致した規則が採用され、どれにも一致しなければ `minor_line_color` になる。
    中心線（`i == size // 2`）の判定は major 線（`i % 10 == 0`）より優先される。
    """
    center = config.size // 2
    centerline_color: RGBA = getattr(
        config, axis_layout(config.axis).centerline_color_field(family)
    )
    return (
        (lambda i: i == center, centerline_color),
        (lambda i: i % MAJOR_LINE_INTERVAL == 0, config.major_line_color),
    )


def _family_colors(config: GridConfig, family: LineFamily, line_indices: np.ndarray) -> np.ndarray:
    """線番号配列に対する線色を shape (n, 4) で返す。"""
    rules = line_color_rules(config, family)
    palette = np.array(
        [color for _, color in rules] + [config.minor_line_color],
        dtype=np.float32,
    )
    # np.select は condlist の先頭から評価し、最初に真になった choice を採る。
    choice = np.select(
        [predicate(line_indices) for predicate, _ in rules],
        list(range(len(rules))),
        default=len(rules),
    )
    return palette[choice]


def _family_endpoints(
    config: GridConfig, family: LineFamily, line_indices: np.ndarray
) -> np.ndarray:
    """線番号配列に対する線分端点を shape (n, 2, 3) で返す。

    offset は `i * spacing - size * 0.5 * spacing`、端点は伸びる軸上の
    `-size * spacing * 0.5` と `+size * spacing * 0.5`。計算は float32 で行う。
    """
    offset_axis, extent_axis = axis_layout(config.axis).family_axes(family)

    spacing = np.float32(config.spacing)
    half = np.float32(0.5)
    offsets = line_indices.astype(np.float32) * spacing - np.float32(config.size) * half * spacing
    start = np.float32(-config.size) * spacing * half
    end = np.float32(config.size) * spacing * half

    lines = np.zeros((line_indices.shape[0], 2, 3), dtype=np.float32)
    lines[:, :, offset_axis] = offsets[:, np.newaxis]
    lines[:, 0, extent_axis] = start
    lines[:, 1, extent_axis] = end
    return lines


def _line_index(i: int, config: GridConfig) -> int:
    i_int = int(i)
    if i_int < 0 or i_int > config.size:
        raise ValueError(f"線番号は 0..{config.size} の範囲である必要がある: got={i!r}")
    return i_int


def _single_line(
    i: int, config: GridConfig, family: LineFamily
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    i_int = _line_index(i, config)
    line = _family_endpoints(config, family, np.array([i_int], dtype=np.int64))[0]
    start = (float(line[0, 0]), float(line[0, 1]), float(line[0, 2]))
    end = (float(line[1, 0]), float(line[1, 1]), float(line[1, 2]))
    return start, end


def horizontal_line_endpoints(
    i: int, config: GridConfig
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """horizontal 族の i 本目の線の `(start, end)` を返す。"""
    return _single_line(i, config, LineFamily.HORIZONTAL)


def vertical_line_endpoints(
    i: int, config: GridConfig
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """vertical 族の i 本目の線の `(start, end)` を返す。"""
    return _single_line(i, config, LineFamily.VERTICAL)


def line_color(i: int, family: LineFamily | str, config: GridConfig) -> RGBA:
    """族 `family` の i 本目の線の色を返す。"""
    fam = LineFamily(family)
    idx = np.int64(_line_index(i, config))
    for predicate, color in line_color_rules(config, fam):
        if bool(predicate(idx)):
            return color
    return config.minor_line_color


def build_grid_mesh(config: GridConfig) -> LineMesh:
    """GridConfig からグリッドの LineMesh を生成する。

    Parameters
    ----------
    config : GridConfig
        生成パラメータ。

    Returns
    -------
    LineMesh
        `2 * (size + 1)` 本の線分。horizontal 族（i 昇順）の後に vertical 族が続く。
        頂点は線分ごとに新しく 2 つ割り当て、インデックスは `0..4*(size+1)-1` の連番。

    Notes
    -----
    - 純粋関数であり、同じ config からは同じ配列が得られる。
    - spacing が 0 以下でもエラーにはせず、退化したメッシュを返す（警告ログを出す）。
    """
    if config.spacing <= 0.0:
        logger.warning(
            "spacing が 0 以下のため退化したグリッドを生成します: spacing=%s", config.spacing
        )

    line_indices = np.arange(config.size + 1, dtype=np.int64)
    families = tuple(LineFamily)

    lines = np.concatenate(
        [_family_endpoints(config, family, line_indices) for family in families], axis=0
    )
    line_colors = np.concatenate(
        [_family_colors(config, family, line_indices) for family in families], axis=0
    )

    positions = lines.reshape((-1, 3))
    # 両端点は同じ線色を共有する。
    colors = np.repeat(line_colors, 2, axis=0)
    indices = np.arange(positions.shape[0], dtype=np.uint32)

    logger.debug(
        "grid mesh: axis=%s size=%d spacing=%s lines=%d vertices=%d",
        config.axis.value,
        config.size,
        config.spacing,
        lines.shape[0],
        positions.shape[0],
    )
    return LineMesh(positions=positions, colors=colors, indices=indices)


__all__ = [
    "MAJOR_LINE_INTERVAL",
    "AxisLayout",
    "LineColorRule",
    "LineFamily",
    "axis_layout",
    "build_grid_mesh",
    "horizontal_line_endpoints",
    "line_color",
    "line_color_rules",
    "vertical_line_endpoints",
]
