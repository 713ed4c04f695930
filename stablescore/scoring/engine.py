# stablescore/scoring/engine.py
"""
StableScore engine: predicts long-term plan price stability (0-100) using one
of two models, picked by how much rate history the carrier has.

- established: loss ratio, rate volatility, financial strength, with the
  weights of missing components redistributed over the available ones
- new-entrant: pricing aggression (teaser-rate check) and financial strength
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from stablescore.scoring.components import (
    average_increase,
    clamp,
    ewma_volatility,
    is_teaser_rate,
    loss_ratio,
    round_half_up,
    score_financial_buffer,
    score_loss_ratio_gap,
    score_pricing_aggression,
    score_rate_volatility,
)
from stablescore.scoring.contracts import QuoteInput, ScoreComponents, ScoreDetails, StableScoreResult
from stablescore.scoring.market import MarketBaseline
from stablescore.scoring.rules import CANONICAL_RULES, ScoringRules
from stablescore.utils.debug import log

ComponentScorer = Callable[[QuoteInput, ScoringRules], Optional[float]]

_SNAKE = {
    "lossRatioGap": "loss_ratio_gap",
    "rateVolatility": "rate_volatility",
    "riskPoolStability": "risk_pool_stability",
    "financialBuffer": "financial_buffer",
    "pricingAggression": "pricing_aggression",
}


def _risk_pool_stability(q: QuoteInput, rules: ScoringRules) -> Optional[float]:
    # No data source for risk-pool composition yet; never available.
    return None


ESTABLISHED_COMPONENTS: List[Tuple[str, ComponentScorer]] = [
    ("lossRatioGap", lambda q, r: score_loss_ratio_gap(q.premiums, q.claims)),
    ("rateVolatility", lambda q, r: score_rate_volatility(q.rate_increases, r.volatility_window, r.ewma_alpha)),
    ("riskPoolStability", _risk_pool_stability),
    ("financialBuffer", lambda q, r: score_financial_buffer(q.rating)),
]


def is_new_entrant(rate_history_years: int, rules: ScoringRules = CANONICAL_RULES) -> bool:
    return rate_history_years < rules.maturity_threshold


def reweight(available: Mapping[str, float], base_weights: Mapping[str, float]) -> Dict[str, float]:
    """Renormalize the base weights of the available components so they sum to 1.0."""
    total = sum(base_weights.get(k, 0.0) for k in available)
    if total <= 0:
        return {}
    return {k: base_weights.get(k, 0.0) / total for k in available}


def weighted_score(scores: Mapping[str, float], weights: Mapping[str, float]) -> int:
    raw = sum(scores[k] * w for k, w in weights.items())
    return int(clamp(round_half_up(clamp(raw))))


def _components(scores: Mapping[str, float]) -> ScoreComponents:
    return ScoreComponents(**{_SNAKE[k]: int(clamp(round_half_up(v))) for k, v in scores.items()})


def score_established(q: QuoteInput, rules: ScoringRules = CANONICAL_RULES) -> StableScoreResult:
    years = len(q.rate_increases)
    scores: Dict[str, float] = {}
    for name, scorer in ESTABLISHED_COMPONENTS:
        value = scorer(q, rules)
        if value is not None:
            scores[name] = clamp(value)

    weights = reweight(scores, rules.established_weights)
    score = weighted_score(scores, weights)

    lr = loss_ratio(q.premiums, q.claims)
    ewma = ewma_volatility(q.rate_increases, rules.volatility_window, rules.ewma_alpha)
    avg = average_increase(q.rate_increases, rules.volatility_window)

    log("SCORING", f"established: score={score} components={scores} weights={weights}")

    return StableScoreResult(
        score=score,
        model="established",
        components=_components(scores),
        weights_used=weights,
        details=ScoreDetails(
            rate_history_years=years,
            rating=q.rating or "",
            avg_rate_increase=None if avg is None else round(avg, 2),
            loss_ratio_percent="N/A" if lr is None else f"{lr * 100:.1f}%",
            ewma_volatility=None if ewma is None else round(ewma * 100, 2),
        ),
    )


def _baseline_for(q: QuoteInput) -> MarketBaseline:
    baseline = MarketBaseline(q.peer_established_prices)
    if len(baseline) == 0 and q.cheapest_established_price is not None:
        # single comparison price when the caller has no peer set
        baseline = MarketBaseline([q.cheapest_established_price])
    return baseline


def score_new_entrant(q: QuoteInput, rules: ScoringRules = CANONICAL_RULES) -> StableScoreResult:
    baseline = _baseline_for(q)
    scores = {
        "pricingAggression": score_pricing_aggression(q.monthly_premium, baseline),
        "financialBuffer": float(score_financial_buffer(q.rating)),
    }
    weights = dict(rules.new_entrant_weights)
    score = weighted_score(scores, weights)

    log(
        "SCORING",
        f"new-entrant: price={q.monthly_premium} baseline={baseline.average()} "
        f"score={score} components={scores}",
    )

    return StableScoreResult(
        score=score,
        model="new-entrant",
        components=_components(scores),
        weights_used=weights,
        details=ScoreDetails(
            rate_history_years=len(q.rate_increases),
            rating=q.rating or "",
            is_teaser_rate=is_teaser_rate(scores["pricingAggression"]),
        ),
    )


def score_quote(
    quote: Union[QuoteInput, Dict[str, Any]],
    rules: Optional[ScoringRules] = None,
) -> StableScoreResult:
    """Score one quote. Pure: same input and rules always give the same result."""
    q = quote if isinstance(quote, QuoteInput) else QuoteInput.from_dict(quote)
    rules = rules or CANONICAL_RULES
    if is_new_entrant(len(q.rate_increases), rules):
        return score_new_entrant(q, rules)
    return score_established(q, rules)
