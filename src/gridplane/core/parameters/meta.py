# どこで: `src/gridplane/core/parameters/meta.py`。
# 何を: ParamMeta（GUI 表示/検証のためのメタ情報）を提供する。
# なぜ: ホスト側のインスペクタ生成と値検証に必要な型・レンジ情報を一元管理するため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

# ParamMeta.kind として受理する値。
PARAM_KINDS: frozenset[str] = frozenset({"float", "int", "bool", "str", "choice", "rgba"})


@dataclass(frozen=True, slots=True)
class ParamMeta:
    """パラメータの UI/検証用メタ情報。

    ui_min/ui_max はスライダー初期レンジを示すだけで、実値をクランプしない。
    choices は tuple[str, ...] に正規化して保持する。
    """

    kind: str  # "float" | "int" | "bool" | "str" | "choice" | "rgba"
    ui_min: Any | None = None
    ui_max: Any | None = None
    choices: Sequence[str] | None = None

    def __post_init__(self) -> None:
        if self.kind not in PARAM_KINDS:
            raise ValueError(f"ParamMeta の kind が未知です: {self.kind!r}")
        if self.choices is not None:
            # str は Sequence だが「選択肢の列」と誤認しやすいので弾く。
            if isinstance(self.choices, (str, bytes)) or not isinstance(self.choices, Sequence):
                raise TypeError("ParamMeta の choices は Sequence[str] である必要があります")
            object.__setattr__(self, "choices", tuple(str(x) for x in self.choices))
        if self.kind == "choice" and not self.choices:
            raise ValueError("kind='choice' の ParamMeta には空でない choices が必要です")
