# stablescore/utils/debug.py
from __future__ import annotations

from stablescore.config import get_config

_enabled: bool | None = None


def debug_enabled() -> bool:
    global _enabled
    if _enabled is None:
        _enabled = bool(get_config().get("debug", False))
    return _enabled


def set_debug(on: bool | None) -> None:
    """Force console diagnostics on/off; None re-reads the config on next use."""
    global _enabled
    _enabled = on


def log(tag: str, msg: str, *args) -> None:
    # lightweight console logging, same shape as the rest of the app: "[TAG] message"
    if not debug_enabled():
        return
    print(f"[{tag}] {msg}", *args, flush=True)
