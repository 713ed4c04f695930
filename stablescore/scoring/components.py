# stablescore/scoring/components.py
"""
Component scorers for StableScore. Each returns a 0-100 score, or None when
the input is insufficient (the engine then drops that component's weight).
"""
from __future__ import annotations
import math
import re
from typing import List, Optional, Sequence

from stablescore.scoring.contracts import RateIncrease
from stablescore.scoring.market import MarketBaseline

_RATING_NOISE_RE = re.compile(r"[^A-Z+\-]")

# (upper bound inclusive, score), checked in order
LOSS_RATIO_STEPS = [
    (0.75, 100),  # sustainable, healthy margin
    (0.80, 95),
    (0.86, 85),
    (0.90, 75),   # margins too thin, increases likely
    (0.95, 55),
]
LOSS_RATIO_FLOOR = 20

EWMA_STEPS = [
    (0.03, 100),
    (0.05, 80),
    (0.08, 60),
    (0.12, 40),
    (0.15, 20),
]
EWMA_FLOOR = 0

TEASER_PENALTY_PER_UNIT = 500   # 5 points per 1% below market


def clamp(v: float, lo: float = 0.0, hi: float = 100.0) -> float:
    if v is None or not math.isfinite(v):
        return lo
    return max(lo, min(hi, v))


def round_half_up(v: float) -> int:
    # Python's round() is banker's rounding; scores round .5 up
    return int(math.floor(v + 0.5))


def _step(value: float, steps, floor: int) -> int:
    for bound, score in steps:
        if value <= bound:
            return score
    return floor


# --- Loss-Ratio-Gap -----------------------------------------------------------

def loss_ratio(premiums: Optional[float], claims: Optional[float]) -> Optional[float]:
    if premiums is None or claims is None:
        return None
    if not (math.isfinite(premiums) and math.isfinite(claims)) or premiums <= 0:
        return None
    return claims / premiums


def score_loss_ratio_gap(premiums: Optional[float], claims: Optional[float]) -> Optional[int]:
    lr = loss_ratio(premiums, claims)
    if lr is None:
        return None
    return _step(lr, LOSS_RATIO_STEPS, LOSS_RATIO_FLOOR)


# --- Rate-Volatility ----------------------------------------------------------

def normalize_increase(v: float) -> float:
    """6 and 0.06 both mean 6%."""
    return v / 100.0 if v > 1 else v


def recent_increases(rate_increases: Sequence[RateIncrease], window: int = 5) -> List[float]:
    """Last `window` observations as fractions, most recent first, rate decreases dropped."""
    recent = list(rate_increases or [])[-window:] if window > 0 else []
    vals = [normalize_increase(r.value) for r in recent]
    vals = [v for v in vals if math.isfinite(v) and v >= 0]
    vals.reverse()
    return vals


def ewma(values: Sequence[float], alpha: float = 0.3) -> Optional[float]:
    if not values:
        return None
    acc = values[0]
    for x in values[1:]:
        acc = alpha * x + (1 - alpha) * acc
    return acc


def ewma_volatility(rate_increases: Sequence[RateIncrease], window: int = 5, alpha: float = 0.3) -> Optional[float]:
    """EWMA of recent increases as a fraction; None with fewer than 2 usable points."""
    vals = recent_increases(rate_increases, window)
    if len(vals) < 2:
        return None
    return ewma(vals, alpha)


def score_ewma(value: float) -> int:
    return _step(value, EWMA_STEPS, EWMA_FLOOR)


def score_rate_volatility(rate_increases: Sequence[RateIncrease], window: int = 5, alpha: float = 0.3) -> Optional[int]:
    v = ewma_volatility(rate_increases, window, alpha)
    if v is None:
        return None
    return score_ewma(v)


def average_increase(rate_increases: Sequence[RateIncrease], window: int = 5) -> Optional[float]:
    """Plain mean of the recent increases, in percent."""
    recent = list(rate_increases or [])[-window:] if window > 0 else []
    vals = [normalize_increase(r.value) for r in recent]
    vals = [v for v in vals if math.isfinite(v)]
    if not vals:
        return None
    return sum(vals) / len(vals) * 100.0


# --- Financial-Buffer ---------------------------------------------------------

def normalize_rating(rating: Optional[str]) -> str:
    return _RATING_NOISE_RE.sub("", str(rating or "").upper())


def score_financial_buffer(rating: Optional[str]) -> int:
    """Flattened: every A-tier scores the same; only B++ and below are separated."""
    r = normalize_rating(rating)
    if r.startswith("A"):
        return 90
    if r.startswith("B++"):
        return 75
    if r.startswith("B+"):
        return 70
    if r.startswith("B"):
        return 60
    return 40  # NR, unrated, unknown agencies


# --- Pricing-Aggression (new entrants) ----------------------------------------

def score_pricing_aggression(price: Optional[float], baseline: MarketBaseline) -> float:
    if price is None or not math.isfinite(price):
        # no price to compare
        return 100.0
    below = baseline.percent_below(price)
    if below is None or below <= 0:
        # no established peers, or at/above market: nothing to penalize
        return 100.0
    return clamp(100.0 - below * TEASER_PENALTY_PER_UNIT)


def is_teaser_rate(pricing_aggression: float) -> bool:
    return pricing_aggression < 50
