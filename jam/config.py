from __future__ import annotations
import os

from jam import Mode


_MODES = ("value", "name", "need")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

# Defaults
_DEFAULT_MODE: Mode = "value"
_DEFAULT_RECURSIVE_LET = True


def get_default_mode() -> Mode:
    raw = os.environ.get("JAM_EVAL_MODE")
    if not raw:
        return _DEFAULT_MODE
    mode = raw.strip().lower()
    if mode not in _MODES:
        raise ValueError(f"JAM_EVAL_MODE must be one of {', '.join(_MODES)}; got {raw!r}")
    return mode  # type: ignore[return-value]


def get_recursive_let() -> bool:
    """Whether `let` definitions see their own frame; JAM_RECURSIVE_LET=0 turns it off."""
    raw = os.environ.get("JAM_RECURSIVE_LET")
    if not raw or not raw.strip():
        return _DEFAULT_RECURSIVE_LET
    flag = raw.strip().lower()
    if flag in _TRUTHY:
        return True
    if flag in _FALSY:
        return False
    raise ValueError(f"JAM_RECURSIVE_LET must be a boolean flag; got {raw!r}")
