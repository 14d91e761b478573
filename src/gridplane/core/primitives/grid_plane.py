"""
どこで: `src/gridplane/core/primitives/grid_plane.py`。グリッド平面プリミティブの登録。
何を: レジストリが組み立てた GridConfig を `build_grid_mesh()` へ渡して LineMesh を生成する。
なぜ: ホスト側のインスペクタ/設定から op 名と引数辞書だけでグリッドを生成できるようにするため。
"""

from __future__ import annotations

from gridplane.core.grid_config import GridAxis, GridConfig
from gridplane.core.grid_mesh import build_grid_mesh
from gridplane.core.line_mesh import LineMesh
from gridplane.core.parameters.meta import ParamMeta
from gridplane.core.primitive_registry import primitive

grid_plane_meta = {
    "axis": ParamMeta(kind="choice", choices=tuple(a.value for a in GridAxis)),
    "size": ParamMeta(kind="int", ui_min=0, ui_max=500),
    "spacing": ParamMeta(kind="float", ui_min=0.01, ui_max=10.0),
    "axis_color_x": ParamMeta(kind="rgba", ui_min=0.0, ui_max=1.0),
    "axis_color_y": ParamMeta(kind="rgba", ui_min=0.0, ui_max=1.0),
    "axis_color_z": ParamMeta(kind="rgba", ui_min=0.0, ui_max=1.0),
    "minor_line_color": ParamMeta(kind="rgba", ui_min=0.0, ui_max=1.0),
    "major_line_color": ParamMeta(kind="rgba", ui_min=0.0, ui_max=1.0),
}


@primitive(meta=grid_plane_meta)
def grid_plane(config: GridConfig) -> LineMesh:
    """中心線・major/minor 線を色分けしたグリッド平面を生成する。

    Parameters
    ----------
    config : GridConfig
        `grid_plane_meta` の各引数を既定値 `GridConfig()` に重ねた生成パラメータ。

    Returns
    -------
    LineMesh
        `2 * (size + 1)` 本の線分。
    """
    return build_grid_mesh(config)
