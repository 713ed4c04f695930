from __future__ import annotations
import math
import re
from typing import Any

_CURR_RE = re.compile(r"[^\d\.\-]")


def to_float(v: Any) -> float | None:
    """Parse a number out of raw quote data; None when missing, blank or not finite."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        f = float(v)
        return f if math.isfinite(f) else None
    if str(v).strip() == "":
        return None
    # strip currency symbols, commas, percent signs, spaces
    s = _CURR_RE.sub("", str(v))
    try:
        f = float(s) if s not in ("", "-", ".", "-.") else None
    except ValueError:
        return None
    if f is None or not math.isfinite(f):
        return None
    return f


def clean_str(v: Any) -> str:
    return v.strip() if isinstance(v, str) else ("" if v is None else str(v).strip())


def pick(d: dict, *keys: str, default: Any = None) -> Any:
    """First key present (and not None) in d; lets records use camelCase or snake_case."""
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default
