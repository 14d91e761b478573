from __future__ import annotations

import pytest

from gridplane.core.parameters import PARAM_KINDS, ParamMeta


def test_choices_are_normalized_to_str_tuple() -> None:
    meta = ParamMeta(kind="choice", choices=["xy", "zx"])

    assert meta.choices == ("xy", "zx")
    assert meta == ParamMeta(kind="choice", choices=("xy", "zx"))


def test_rgba_is_a_known_kind() -> None:
    assert "rgba" in PARAM_KINDS
    assert ParamMeta(kind="rgba", ui_min=0.0, ui_max=1.0).kind == "rgba"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": "vec9"},
        {"kind": "choice"},
        {"kind": "choice", "choices": ()},
    ],
)
def test_invalid_meta_raises_value_error(kwargs) -> None:
    with pytest.raises(ValueError):
        ParamMeta(**kwargs)


def test_string_choices_raise_type_error() -> None:
    with pytest.raises(TypeError):
        ParamMeta(kind="choice", choices="xyz")
