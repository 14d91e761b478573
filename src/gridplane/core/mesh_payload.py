"""
どこで: `src/gridplane/core/mesh_payload.py`。
何を: LineMesh を描画ホストへ渡す描画記述（トポロジ・マテリアル・変換・バッファ）にまとめる。
なぜ: ホスト側のアダプタが GPU バッファ作成とエンティティ配置だけに専念できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from gridplane.core.grid_config import GridConfig
from gridplane.core.grid_mesh import build_grid_mesh
from gridplane.core.line_mesh import LineMesh

LINE_LIST = "line_list"


@dataclass(frozen=True, slots=True)
class VertexLayout:
    """インターリーブ頂点バッファの属性レイアウト。"""

    attributes: tuple[str, ...]
    format: str  # 属性ごとの "<成分数>f" を空白区切りで並べる
    stride_bytes: int


GRID_VERTEX_LAYOUT = VertexLayout(
    attributes=("in_position", "in_color"),
    format="3f 4f",
    stride_bytes=(3 + 4) * 4,
)


@dataclass(frozen=True, slots=True)
class LineMaterial:
    """グリッド描画用マテリアルの要件。ライティング無し・アルファブレンド・頂点カラー。"""

    unlit: bool = True
    alpha_mode: str = "blend"
    vertex_colors: bool = True


@dataclass(frozen=True, slots=True)
class GridPlanePayload:
    """描画ホストへ渡すグリッド 1 枚分の描画記述。

    Attributes
    ----------
    mesh : LineMesh
        頂点位置・頂点カラー・インデックス。
    topology : str
        プリミティブトポロジ。常に "line_list"。
    material : LineMaterial
        マテリアル要件。
    translation, rotation, scale
        エンティティの変換。グリッドは原点に単位変換で置く（rotation は xyzw クォータニオン）。
    """

    mesh: LineMesh
    topology: str = LINE_LIST
    material: LineMaterial = field(default_factory=LineMaterial)
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)

    @property
    def vertex_layout(self) -> VertexLayout:
        return GRID_VERTEX_LAYOUT

    def vertex_bytes(self) -> bytes:
        """position(3f) と color(4f) をインターリーブした頂点バッファを返す。"""
        interleaved = np.concatenate([self.mesh.positions, self.mesh.colors], axis=1)
        return np.ascontiguousarray(interleaved, dtype="<f4").tobytes()

    def index_bytes(self) -> bytes:
        """uint32 リトルエンディアンのインデックスバッファを返す。"""
        return np.ascontiguousarray(self.mesh.indices, dtype="<u4").tobytes()


def grid_plane_payload(config: GridConfig | None = None) -> GridPlanePayload:
    """GridConfig からグリッドの描画記述を構築する。

    config が None の場合は `runtime_config()` の grid 設定を使う。
    """
    if config is None:
        from gridplane.core.runtime_config import runtime_config

        config = runtime_config().grid
    return GridPlanePayload(mesh=build_grid_mesh(config))


__all__ = [
    "GRID_VERTEX_LAYOUT",
    "LINE_LIST",
    "GridPlanePayload",
    "LineMaterial",
    "VertexLayout",
    "grid_plane_payload",
]
