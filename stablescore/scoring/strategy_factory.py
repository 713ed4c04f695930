# scoring/strategy_factory.py
from typing import Any, Dict, Optional

from stablescore.config import get_config
from stablescore.scoring.rules import CANONICAL_RULES, LEGACY_RULES, ScoringRules
from stablescore.utils.debug import log


def get_rules(name: str = "canonical") -> ScoringRules:
    if name == "canonical":
        return CANONICAL_RULES
    if name == "legacy":
        return LEGACY_RULES
    raise ValueError(f"Unknown scoring ruleset: {name}")


def rules_from_config(cfg: Optional[Dict[str, Any]] = None) -> ScoringRules:
    cfg = cfg if cfg is not None else get_config()
    name = str(cfg.get("scoring_ruleset") or "canonical").strip().lower()
    try:
        rules = get_rules(name)
    except ValueError:
        print(f"[SCORING] unknown ruleset '{name}', defaulting to 'canonical'")
        return CANONICAL_RULES
    if rules is LEGACY_RULES:
        log("SCORING", "using deprecated 'legacy' ruleset")
    return rules
