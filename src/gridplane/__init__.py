"""gridplane: 描画ホスト向けの参照グリッド（line-list メッシュ）生成。"""

from gridplane.core.builtins import ensure_builtin_primitives_registered
from gridplane.core.color import RGBA, coerce_rgba, hsla
from gridplane.core.grid_config import GridAxis, GridConfig
from gridplane.core.grid_mesh import (
    LineFamily,
    build_grid_mesh,
    horizontal_line_endpoints,
    line_color,
    vertical_line_endpoints,
)
from gridplane.core.line_mesh import LineMesh
from gridplane.core.mesh_payload import GridPlanePayload, LineMaterial, grid_plane_payload
from gridplane.core.primitive_registry import primitive_registry
from gridplane.core.runtime_config import RuntimeConfig, runtime_config, set_config_path

__all__ = [
    "RGBA",
    "GridAxis",
    "GridConfig",
    "GridPlanePayload",
    "LineFamily",
    "LineMaterial",
    "LineMesh",
    "RuntimeConfig",
    "build_grid_mesh",
    "coerce_rgba",
    "ensure_builtin_primitives_registered",
    "grid_plane_payload",
    "horizontal_line_endpoints",
    "hsla",
    "line_color",
    "primitive_registry",
    "runtime_config",
    "set_config_path",
    "vertical_line_endpoints",
]
