# stablescore/scoring/personalization.py
from typing import Any, Dict, Iterable, Optional, Union

from stablescore.scoring.contracts import BoostQuote, UserPreferences
from stablescore.scoring.market import mean_premium
from stablescore.utils.normalizers import pick, to_float

MAX_BOOST = 10
PLAN_MATCH_BOOST = 5
COMPANY_MATCH_BOOST = 5
STABILITY_BOOST = 5
STABILITY_MIN_SCORE = 85
BRAND_BOOST = 5
PRICE_BOOST = 3
PRICE_DISCOUNT_FACTOR = 0.9   # more than 10% below the peer mean

NATIONAL_BRANDS = (
    "aarp",
    "united healthcare",
    "aetna",
    "mutual of omaha",
    "humana",
    "cigna",
    "anthem",
    "blue cross",
)


def _company_matches(carrier: str, wanted: str) -> bool:
    c, w = carrier.lower(), wanted.lower()
    return bool(c and w) and (w in c or c in w)


def _peer_premium(p: Any) -> Optional[float]:
    if isinstance(p, dict):
        return to_float(pick(p, "monthlyPremium", "monthly_premium"))
    return to_float(getattr(p, "monthly_premium", p))


def personalization_boost(
    quote: Union[BoostQuote, Dict[str, Any]],
    preferences: Optional[Union[UserPreferences, Dict[str, Any]]] = None,
    peer_quotes: Optional[Iterable[Any]] = None,
) -> int:
    """
    Boost (0-10) added to a quote's StableScore when it lines up with what the
    user asked for. No preferences means no boost.
    """
    prefs = UserPreferences.from_dict(preferences)
    if prefs is None:
        return 0
    q = BoostQuote.from_dict(quote)

    boost = 0

    if prefs.plan_preference and prefs.plan_preference.upper() in q.plan_name.upper():
        boost += PLAN_MATCH_BOOST

    if prefs.specific_company:
        if _company_matches(q.carrier_name, prefs.specific_company):
            boost += COMPANY_MATCH_BOOST
    elif prefs.company_preference == "stability":
        if q.stable_score >= STABILITY_MIN_SCORE:
            boost += STABILITY_BOOST
    elif prefs.company_preference == "brand":
        carrier = q.carrier_name.lower()
        if any(brand in carrier for brand in NATIONAL_BRANDS):
            boost += BRAND_BOOST
    elif prefs.company_preference == "price":
        avg = mean_premium(_peer_premium(p) for p in (peer_quotes or []))
        if avg is not None and avg > 0 and q.monthly_premium is not None \
                and q.monthly_premium < avg * PRICE_DISCOUNT_FACTOR:
            boost += PRICE_BOOST

    return max(0, min(MAX_BOOST, boost))
