"""
どこで: `src/gridplane/core/color.py`。
何を: 色指定（RGB/RGBA 配列・hex 文字列・HSLA mapping）を 0..1 float の RGBA タプルへ正規化する。
なぜ: GridConfig / config.yaml のどちらから来た色も、頂点カラー配列へそのまま詰められる形に揃えるため。
"""

from __future__ import annotations

import colorsys
import math
from collections.abc import Mapping
from typing import Any

RGBA = tuple[float, float, float, float]
"""0..1 float の (r, g, b, a)。"""

_HSLA_KEYS = {"h", "s", "l", "a"}


def hsla(hue: float, saturation: float, lightness: float, alpha: float = 1.0) -> RGBA:
    """HSL(A) から RGBA を返す。

    Parameters
    ----------
    hue : float
        色相 [deg]。360 で一周する（範囲外は剰余で畳む）。
    saturation, lightness, alpha : float
        0..1 の彩度・明度・不透明度。

    Returns
    -------
    RGBA
        0..1 float の (r, g, b, a)。
    """
    try:
        hue_f = float(hue)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"hue は数値である必要があります: got={hue!r}") from exc
    if not math.isfinite(hue_f):
        raise ValueError(f"hue は有限値である必要があります: got={hue!r}")
    h = (hue_f % 360.0) / 360.0
    s = _unit_component(saturation, key="saturation")
    lum = _unit_component(lightness, key="lightness")
    a = _unit_component(alpha, key="alpha")
    # colorsys は HLS 順（明度と彩度の位置に注意）。
    r, g, b = colorsys.hls_to_rgb(h, lum, s)
    return (float(r), float(g), float(b), a)


def rgba_from_hex(text: str) -> RGBA:
    """`#rrggbb` / `#rrggbbaa` 形式の文字列を RGBA に変換する。"""

    s = str(text).strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) not in (6, 8):
        raise ValueError(f"hex 色は #rrggbb または #rrggbbaa である必要があります: got={text!r}")
    try:
        parts = [int(s[i : i + 2], 16) for i in range(0, len(s), 2)]
    except ValueError as exc:
        raise ValueError(f"hex 色に 16 進以外の文字が含まれています: got={text!r}") from exc
    if len(parts) == 3:
        parts.append(255)
    r, g, b, a = (p / 255.0 for p in parts)
    return (r, g, b, a)


def _unit_component(value: Any, *, key: str) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} は数値である必要があります: got={value!r}") from exc
    if not math.isfinite(v) or v < 0.0 or v > 1.0:
        raise ValueError(f"{key} は 0..1 の範囲である必要があります: got={value!r}")
    return v


def coerce_rgba(value: Any, *, key: str = "color") -> RGBA:
    """任意の色指定を RGBA タプルへ正規化する。

    受理する形:
    - 長さ 3 / 4 の数値シーケンス（0..1）。長さ 3 の場合 alpha=1.0 を補う。
    - `#rrggbb` / `#rrggbbaa` の hex 文字列。
    - `{h, s, l}` / `{h, s, l, a}` の mapping（h は [deg]）。

    Parameters
    ----------
    value : Any
        色指定。
    key : str, optional
        例外メッセージに含めるフィールド名。

    Raises
    ------
    ValueError
        形式が不正、または成分が 0..1 の範囲外の場合。
    """

    if isinstance(value, str):
        try:
            return rgba_from_hex(value)
        except ValueError as exc:
            raise ValueError(f"{key}: {exc}") from exc

    if isinstance(value, Mapping):
        keys = {str(k) for k in value.keys()}
        if not {"h", "s", "l"} <= keys or not keys <= _HSLA_KEYS:
            raise ValueError(
                f"{key} の mapping は h/s/l（任意で a）のキーを持つ必要があります: got={dict(value)!r}"
            )
        try:
            hue = float(value["h"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{key}.h は数値である必要があります: got={value['h']!r}") from exc
        try:
            return hsla(hue, value["s"], value["l"], value.get("a", 1.0))
        except ValueError as exc:
            raise ValueError(f"{key}: {exc}") from exc

    try:
        seq = list(value)
    except TypeError as exc:
        raise ValueError(f"{key} は色として解釈できません: got={value!r}") from exc
    if len(seq) not in (3, 4):
        raise ValueError(f"{key} は [r, g, b] または [r, g, b, a] である必要があります: got={value!r}")
    if len(seq) == 3:
        seq.append(1.0)
    r, g, b, a = (_unit_component(c, key=key) for c in seq)
    return (r, g, b, a)


__all__ = ["RGBA", "coerce_rgba", "hsla", "rgba_from_hex"]
