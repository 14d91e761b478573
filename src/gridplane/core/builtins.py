"""
どこで: `src/gridplane/core/builtins.py`。
何を: 組み込み primitive の登録（registry 初期化）を単一入口へ集約する。
なぜ: import 副作用の分散と手動列挙の重複をなくすため。
"""

from __future__ import annotations

import importlib

_BUILTIN_PRIMITIVE_MODULES: tuple[str, ...] = ("gridplane.core.primitives.grid_plane",)

_BUILTIN_PRIMITIVES_REGISTERED = False


def ensure_builtin_primitives_registered() -> None:
    """組み込み primitive を registry に登録する（idempotent）。"""

    global _BUILTIN_PRIMITIVES_REGISTERED
    if _BUILTIN_PRIMITIVES_REGISTERED:
        return
    for module in _BUILTIN_PRIMITIVE_MODULES:
        importlib.import_module(module)
    _BUILTIN_PRIMITIVES_REGISTERED = True


__all__ = ["ensure_builtin_primitives_registered"]
