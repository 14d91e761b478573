# src/gridplane/core/line_mesh.py
# ライン描画用メッシュ（位置・頂点カラー・line-list インデックス）のモデルと検証ロジック。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class LineMesh:
    """line-list トポロジで描く線分メッシュを表現する。

    Parameters
    ----------
    positions : np.ndarray
        float32 型 shape (N, 3) の頂点配列。
    colors : np.ndarray
        float32 型 shape (N, 4) の頂点カラー配列（RGBA, 0..1）。
    indices : np.ndarray
        uint32 型 shape (N,) のインデックス配列。連続する 2 要素で 1 線分を表す。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で保持する。
    頂点は線分の端点ごとに 1 つ割り当てる（インデックスの再利用なし）ため、
    positions / colors / indices は同じ長さを持つ。
    """

    positions: np.ndarray
    colors: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        """配列形状と整合性を検証し、不変条件を満たす形に固定する。"""
        positions = np.asarray(self.positions)
        colors = np.asarray(self.colors)
        indices = np.asarray(self.indices)

        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(
                f"positions は shape (N,3) の 2 次元配列である必要がある: shape={positions.shape}"
            )
        if colors.ndim != 2 or colors.shape[1] != 4:
            raise ValueError(
                f"colors は shape (N,4) の 2 次元配列である必要がある: shape={colors.shape}"
            )
        if indices.ndim != 1:
            raise ValueError(f"indices は 1 次元配列である必要がある: shape={indices.shape}")
        if not np.issubdtype(indices.dtype, np.integer):
            raise ValueError(f"indices は整数配列である必要がある: dtype={indices.dtype}")

        n = int(positions.shape[0])
        if colors.shape[0] != n:
            raise ValueError(
                f"colors の行数は positions と一致する必要がある: {colors.shape[0]} != {n}"
            )
        if indices.shape[0] != n:
            raise ValueError(
                f"indices の長さは positions の行数と一致する必要がある: {indices.shape[0]} != {n}"
            )
        if indices.shape[0] % 2 != 0:
            raise ValueError("indices の長さは偶数（2 要素で 1 線分）である必要がある")
        if indices.size and (int(indices.min()) < 0 or int(indices.max()) >= n):
            raise ValueError("indices は 0 以上 N 未満である必要がある")

        positions = positions.astype(np.float32, copy=False)
        colors = colors.astype(np.float32, copy=False)
        indices = indices.astype(np.uint32, copy=False)

        positions.setflags(write=False)
        colors.setflags(write=False)
        indices.setflags(write=False)

        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "colors", colors)
        object.__setattr__(self, "indices", indices)

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def segment_count(self) -> int:
        return int(self.indices.shape[0]) // 2


def empty_line_mesh() -> LineMesh:
    """頂点 0 の LineMesh を返す。"""
    return LineMesh(
        positions=np.zeros((0, 3), dtype=np.float32),
        colors=np.zeros((0, 4), dtype=np.float32),
        indices=np.zeros((0,), dtype=np.uint32),
    )


__all__ = ["LineMesh", "empty_line_mesh"]
