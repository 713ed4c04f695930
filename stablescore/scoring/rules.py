# stablescore/scoring/rules.py
from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class ScoringRules:
    """
    One complete StableScore rule set. The engine reads every tunable from here,
    so two quotes scored with the same rules are always comparable.
    """
    name: str
    maturity_threshold: int          # fewer observed rate changes than this => new entrant
    volatility_window: int = 5       # most recent N rate changes feed the EWMA
    ewma_alpha: float = 0.3
    # base weights, renormalized over whatever is available
    established_weights: Dict[str, float] = field(default_factory=lambda: {
        "lossRatioGap": 0.40,
        "rateVolatility": 0.25,
        "riskPoolStability": 0.20,
        "financialBuffer": 0.15,
    })
    # fixed weights, no re-weighting
    new_entrant_weights: Dict[str, float] = field(default_factory=lambda: {
        "pricingAggression": 0.90,
        "financialBuffer": 0.10,
    })


CANONICAL_RULES = ScoringRules(name="canonical", maturity_threshold=3)

# Deprecated: the earlier production rule set. Same scorers and weights,
# but carriers graduate from the new-entrant model after 2 rate changes.
LEGACY_RULES = ScoringRules(name="legacy", maturity_threshold=2)
