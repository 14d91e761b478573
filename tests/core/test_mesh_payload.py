from __future__ import annotations

import numpy as np

from gridplane.core.grid_config import GridConfig
from gridplane.core.mesh_payload import (
    GRID_VERTEX_LAYOUT,
    LINE_LIST,
    LineMaterial,
    grid_plane_payload,
)


def test_payload_describes_line_list_draw() -> None:
    payload = grid_plane_payload(GridConfig(size=4))

    assert payload.topology == LINE_LIST
    assert payload.material == LineMaterial(unlit=True, alpha_mode="blend", vertex_colors=True)
    assert payload.translation == (0.0, 0.0, 0.0)
    assert payload.rotation == (0.0, 0.0, 0.0, 1.0)
    assert payload.scale == (1.0, 1.0, 1.0)
    assert payload.vertex_layout is GRID_VERTEX_LAYOUT


def test_vertex_bytes_interleave_position_and_color() -> None:
    payload = grid_plane_payload(GridConfig(axis="xy", size=2, spacing=1.0))
    mesh = payload.mesh

    raw = payload.vertex_bytes()
    assert len(raw) == GRID_VERTEX_LAYOUT.stride_bytes * mesh.vertex_count

    decoded = np.frombuffer(raw, dtype="<f4").reshape((-1, 7))
    np.testing.assert_array_equal(decoded[:, :3], mesh.positions)
    np.testing.assert_array_equal(decoded[:, 3:], mesh.colors)


def test_index_bytes_are_uint32() -> None:
    payload = grid_plane_payload(GridConfig(size=3))

    raw = payload.index_bytes()
    assert len(raw) == 4 * payload.mesh.vertex_count
    np.testing.assert_array_equal(np.frombuffer(raw, dtype="<u4"), payload.mesh.indices)
