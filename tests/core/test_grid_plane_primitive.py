"""grid_plane プリミティブと primitive レジストリに関するテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from gridplane.core.builtins import ensure_builtin_primitives_registered
from gridplane.core.grid_config import GridAxis, GridConfig
from gridplane.core.grid_mesh import build_grid_mesh
from gridplane.core.line_mesh import LineMesh, empty_line_mesh
from gridplane.core.parameters.meta import ParamMeta
from gridplane.core.primitive_registry import primitive, primitive_registry


@pytest.fixture(autouse=True)
def _builtins() -> None:
    ensure_builtin_primitives_registered()


def test_grid_plane_is_registered_with_meta_and_defaults() -> None:
    assert "grid_plane" in primitive_registry

    meta = primitive_registry.get_meta("grid_plane")
    assert meta["activate"].kind == "bool"
    assert meta["axis"].kind == "choice"
    assert meta["axis"].choices == ("xy", "yz", "zx")
    assert meta["axis_color_x"].kind == "rgba"

    defaults = primitive_registry.get_defaults("grid_plane")
    assert defaults["activate"] is True
    assert defaults["axis"] == "zx"
    assert not isinstance(defaults["axis"], GridAxis)
    assert defaults["size"] == 100
    assert defaults["spacing"] == 1.0
    assert defaults["major_line_color"] == GridConfig().major_line_color

    order = primitive_registry.get_param_order("grid_plane")
    assert order == (
        "activate",
        "axis",
        "size",
        "spacing",
        "axis_color_x",
        "axis_color_y",
        "axis_color_z",
        "minor_line_color",
        "major_line_color",
    )


def test_registry_call_matches_direct_build() -> None:
    func = primitive_registry["grid_plane"]
    via_registry = func((("axis", "xy"), ("size", 6), ("spacing", 0.5)))
    direct = build_grid_mesh(GridConfig(axis="xy", size=6, spacing=0.5))

    np.testing.assert_array_equal(via_registry.positions, direct.positions)
    np.testing.assert_array_equal(via_registry.colors, direct.colors)
    np.testing.assert_array_equal(via_registry.indices, direct.indices)


def test_registry_defaults_build_default_grid() -> None:
    func = primitive_registry["grid_plane"]
    args = tuple(primitive_registry.get_defaults("grid_plane").items())

    mesh = func(args)

    assert mesh.vertex_count == 4 * 101


def test_activate_false_returns_empty_mesh() -> None:
    mesh = primitive_registry["grid_plane"]((("activate", False), ("size", 10)))

    assert mesh.vertex_count == 0


def test_invalid_argument_propagates_value_error() -> None:
    with pytest.raises(ValueError):
        primitive_registry["grid_plane"]((("size", -3),))


def test_unknown_argument_raises_value_error() -> None:
    with pytest.raises(ValueError, match="radius"):
        primitive_registry["grid_plane"]((("radius", 2.0),))


def test_unknown_primitive_raises_key_error() -> None:
    with pytest.raises(KeyError):
        primitive_registry.get("no_such_primitive")


def test_build_receives_config_merged_over_defaults() -> None:
    received: list[GridConfig] = []

    @primitive(meta={"size": ParamMeta(kind="int")}, defaults=GridConfig(axis="xy", size=4))
    def _test_prim_capture(config: GridConfig) -> LineMesh:
        received.append(config)
        return empty_line_mesh()

    assert primitive_registry.get_defaults("_test_prim_capture") == {"activate": True, "size": 4}

    primitive_registry["_test_prim_capture"]((("size", 2),))

    assert received == [GridConfig(axis="xy", size=2)]


def test_meta_argument_must_be_grid_config_field() -> None:
    with pytest.raises(ValueError):
        primitive(meta={"radius": ParamMeta(kind="float")})


def test_meta_values_must_be_param_meta() -> None:
    with pytest.raises(TypeError):
        primitive(meta={"size": {"kind": "int"}})  # type: ignore[dict-item]


def test_meta_must_not_be_empty() -> None:
    with pytest.raises(ValueError):
        primitive(meta={})


def test_activate_is_reserved() -> None:
    with pytest.raises(ValueError):
        primitive(meta={"activate": ParamMeta(kind="bool")})


def test_non_line_mesh_return_raises_type_error() -> None:
    @primitive(meta={"size": ParamMeta(kind="int")})
    def _test_prim_bad_return(config: GridConfig) -> LineMesh:
        return (np.zeros((0, 3)), np.zeros((1,)))  # type: ignore[return-value]

    with pytest.raises(TypeError):
        primitive_registry["_test_prim_bad_return"](())
