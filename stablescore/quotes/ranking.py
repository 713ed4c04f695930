# stablescore/quotes/ranking.py
"""
Batch flow around the scoring engine: take the quotes for one request, drop
the ones we can't or shouldn't show, score and personalize the rest, and
order them best-first.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from stablescore.quotes.contracts import CarrierQuote, HouseholdInfo, RankedQuote
from stablescore.quotes.discounts import apply_household_discounts
from stablescore.quotes.fees import application_fee
from stablescore.quotes.validation import record_errors
from stablescore.scoring.contracts import BoostQuote, QuoteInput, UserPreferences
from stablescore.scoring.engine import score_quote
from stablescore.scoring.personalization import personalization_boost
from stablescore.scoring.rules import CANONICAL_RULES, ScoringRules
from stablescore.scoring.strategy_factory import rules_from_config
from stablescore.utils.debug import log

QuoteLike = Union[CarrierQuote, Dict[str, Any]]

HOUSEHOLD_VIEW = "with_hhd"

RANKED_COLUMNS = [
    "carrier", "plan", "monthly_premium", "model", "stable_score",
    "boost", "final_score", "is_teaser_rate", "application_fee",
]


def load_quotes(records: Iterable[QuoteLike]) -> List[CarrierQuote]:
    """Coerce records into CarrierQuotes, skipping any that fail the record schema."""
    out: List[CarrierQuote] = []
    for i, rec in enumerate(records or []):
        if isinstance(rec, CarrierQuote):
            out.append(rec)
            continue
        errs = record_errors(rec)
        if errs:
            print(f"[QUOTES] skipping record {i}: {'; '.join(errs)}")
            continue
        out.append(CarrierQuote.from_dict(rec))
    return out


def eligible_quotes(quotes: Iterable[CarrierQuote]) -> List[CarrierQuote]:
    out: List[CarrierQuote] = []
    for q in quotes:
        # household-rated duplicates are re-derived from base rates by apply_household_discounts
        if HOUSEHOLD_VIEW in q.view_type:
            continue
        if q.monthly_premium is None:
            log("QUOTES", f"dropping {q.carrier_name} ({q.plan_name}): no monthly premium")
            continue
        out.append(q)
    return out


def dedupe_cheapest(quotes: Iterable[CarrierQuote]) -> List[CarrierQuote]:
    """Keep one quote per (carrier NAIC, plan): the cheapest. First-seen order is preserved."""
    best: Dict[tuple, CarrierQuote] = {}
    for q in quotes:
        key = (q.naic or q.carrier_name, q.plan_name)
        cur = best.get(key)
        if cur is None or q.monthly_premium < cur.monthly_premium:
            best[key] = q
    return list(best.values())


def established_peer_prices(quotes: Iterable[CarrierQuote], rules: ScoringRules = CANONICAL_RULES) -> List[float]:
    return sorted(
        q.monthly_premium for q in quotes
        if q.history_years >= rules.maturity_threshold
    )


def _score_input(q: CarrierQuote, peers: List[float]) -> QuoteInput:
    return QuoteInput(
        rating=q.rating,
        monthly_premium=q.monthly_premium,
        rate_increases=q.rate_increases,
        premiums=q.premiums,
        claims=q.claims,
        peer_established_prices=tuple(peers),
    )


def rank_quotes(
    quotes: Iterable[QuoteLike],
    preferences: Optional[Union[UserPreferences, Dict[str, Any]]] = None,
    household: Optional[Union[HouseholdInfo, Dict[str, Any]]] = None,
    rules: Optional[ScoringRules] = None,
) -> List[RankedQuote]:
    rules = rules or rules_from_config()
    prefs = UserPreferences.from_dict(preferences)
    hh = HouseholdInfo.from_dict(household)

    pool = eligible_quotes(load_quotes(quotes))
    pool = apply_household_discounts(pool, hh)
    pool = dedupe_cheapest(pool)
    log("RANKING", f"{len(pool)} eligible quotes after discounts/dedupe")

    peers = established_peer_prices(pool, rules)
    log("RANKING", f"established peer prices: {peers or 'none'}")

    ranked: List[RankedQuote] = []
    for q in pool:
        result = score_quote(_score_input(q, peers), rules)
        boost = personalization_boost(
            BoostQuote(
                carrier_name=q.carrier_name,
                plan_name=q.plan_name,
                stable_score=result.score,
                monthly_premium=q.monthly_premium,
            ),
            prefs,
            pool,
        )
        ranked.append(RankedQuote(
            quote=q,
            result=result,
            personalization_boost=boost,
            application_fee=application_fee(q.carrier_name),
        ))

    # stable sort: ties keep input order
    ranked.sort(key=lambda r: r.final_score, reverse=True)

    for r in ranked[:5]:
        log(
            "RANKING",
            f"{r.quote.carrier_name} ({r.quote.plan_name}) ${r.quote.monthly_premium:.2f} "
            f"{r.result.model} score={r.stable_score} boost={r.personalization_boost} final={r.final_score}",
        )
    return ranked


def ranked_frame(ranked: List[RankedQuote]) -> pd.DataFrame:
    rows = [
        {
            "carrier": r.quote.carrier_name,
            "plan": r.quote.plan_name,
            "monthly_premium": r.quote.monthly_premium,
            "model": r.result.model,
            "stable_score": r.stable_score,
            "boost": r.personalization_boost,
            "final_score": r.final_score,
            "is_teaser_rate": bool(r.result.details.is_teaser_rate),
            "application_fee": r.application_fee,
        }
        for r in ranked
    ]
    return pd.DataFrame(rows, columns=RANKED_COLUMNS)
