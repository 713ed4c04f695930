# stablescore/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

# Optional: load .env in local dev
load_dotenv()

CONFIG_CANDIDATES = ("stablescore/config.yaml", "config.yaml")


def _load_yaml(path: str | Path) -> dict:
    """Best-effort YAML loader; returns {} if the file is missing or unreadable."""
    p = Path(path)
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"[config] ignoring {p}: {e!r}")
        return {}
    return data if isinstance(data, dict) else {}


def _getenv_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in ("1", "true", "yes", "on")


def get_config() -> Dict[str, Any]:
    """
    Central place for scoring/runtime config.
    Merges (in order): defaults <- YAML (if present) <- ENV.
    Returns only keys the package actually uses.
    """
    cfg: Dict[str, Any] = {}
    for candidate in CONFIG_CANDIDATES:
        cfg.update(_load_yaml(candidate))

    defaults = {
        "scoring_ruleset": "canonical",  # canonical | legacy
        "debug": False,
    }

    # Merge YAML over defaults
    merged = {**defaults, **{k: v for k, v in cfg.items() if k in defaults}}

    # ENV overrides
    merged["scoring_ruleset"] = os.getenv("STABLESCORE_RULESET", merged["scoring_ruleset"])
    merged["debug"] = _getenv_bool("STABLESCORE_DEBUG", bool(merged["debug"]))

    return merged
