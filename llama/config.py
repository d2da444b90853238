from __future__ import annotations
import os
from typing import Optional

from llama.types.errors import LlamaTypeError


# Unset or empty means no budget: the host recursion limit is the failure mode.
MAX_DEPTH_VAR = 'LLAMA_MAX_DEPTH'


def int_from_env(var: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise LlamaTypeError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise LlamaTypeError(f"{var} must be positive, got {value}")
    return value


def get_max_depth() -> Optional[int]:
    return int_from_env(MAX_DEPTH_VAR)
