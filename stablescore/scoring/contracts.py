# stablescore/scoring/contracts.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stablescore.utils.normalizers import clean_str, pick, to_float

ScoringModel = Literal["established", "new-entrant"]
CompanyPreference = Literal["stability", "brand", "price"]


# --- Inputs -------------------------------------------------------------------

@dataclass(frozen=True)
class RateIncrease:
    value: float                  # 0.06 or 6 both mean 6%
    date: Optional[str] = None

    @staticmethod
    def from_dict(d: Any) -> "RateIncrease":
        """Accepts the shapes the quoting API and callers send; bare numbers too."""
        if isinstance(d, RateIncrease):
            return d
        if not isinstance(d, dict):
            return RateIncrease(value=to_float(d) or 0.0)
        raw = pick(d, "increase", "rate_increase", "percentOrFraction", "increase_fraction_or_percent")
        return RateIncrease(value=to_float(raw) or 0.0, date=d.get("date"))


@dataclass(frozen=True)
class QuoteInput:
    """Everything the engine needs to score one carrier+plan quote."""
    rating: str
    monthly_premium: Optional[float]
    rate_increases: Tuple[RateIncrease, ...] = ()   # chronological, most recent last
    premiums: Optional[float] = None                # market data, dollars
    claims: Optional[float] = None
    peer_established_prices: Optional[Tuple[float, ...]] = None
    cheapest_established_price: Optional[float] = None

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "QuoteInput":
        if isinstance(d, QuoteInput):
            return d
        incs = pick(d, "rateIncreases", "rate_increases", default=[]) or []
        peers = pick(d, "peerEstablishedPrices", "peer_established_prices")
        peer_prices = None
        if peers is not None:
            peer_prices = tuple(p for p in (to_float(x) for x in peers) if p is not None)
        return QuoteInput(
            rating=clean_str(pick(d, "rating", "amBestRating", "ambest_rating", default="")),
            monthly_premium=to_float(pick(d, "monthlyPremium", "monthly_premium")),
            rate_increases=tuple(RateIncrease.from_dict(r) for r in incs),
            premiums=to_float(d.get("premiums")),
            claims=to_float(d.get("claims")),
            peer_established_prices=peer_prices,
            cheapest_established_price=to_float(
                pick(d, "cheapestEstablishedPrice", "cheapest_established_price")
            ),
        )


@dataclass(frozen=True)
class UserPreferences:
    plan_preference: Optional[str] = None        # e.g. "G" or "N"
    specific_company: Optional[str] = None
    company_preference: Optional[CompanyPreference] = None

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Optional["UserPreferences"]:
        if d is None or isinstance(d, UserPreferences):
            return d
        pref = clean_str(pick(d, "companyPreference", "company_preference", default="")).lower()
        return UserPreferences(
            plan_preference=clean_str(pick(d, "planPreference", "plan_preference", default="")) or None,
            specific_company=clean_str(pick(d, "specificCompany", "specific_company", default="")) or None,
            company_preference=pref if pref in ("stability", "brand", "price") else None,
        )


@dataclass(frozen=True)
class BoostQuote:
    """The scored quote as the personalization booster sees it."""
    carrier_name: str
    plan_name: str
    stable_score: int
    monthly_premium: Optional[float]

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "BoostQuote":
        if isinstance(d, BoostQuote):
            return d
        return BoostQuote(
            carrier_name=clean_str(pick(d, "carrierName", "carrier_name", default="")),
            plan_name=clean_str(pick(d, "planName", "plan_name", default="")),
            stable_score=int(to_float(pick(d, "stableScore", "stable_score")) or 0),
            monthly_premium=to_float(pick(d, "monthlyPremium", "monthly_premium")),
        )


# --- Results ------------------------------------------------------------------

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScoreComponents(_CamelModel):
    loss_ratio_gap: Optional[int] = Field(default=None, ge=0, le=100)
    rate_volatility: Optional[int] = Field(default=None, ge=0, le=100)
    risk_pool_stability: Optional[int] = Field(default=None, ge=0, le=100)
    financial_buffer: int = Field(ge=0, le=100)
    pricing_aggression: Optional[int] = Field(default=None, ge=0, le=100)


class ScoreDetails(_CamelModel):
    """Diagnostics for display only; nothing here feeds back into the score."""
    rate_history_years: int
    rating: str
    avg_rate_increase: Optional[float] = None     # percent
    loss_ratio_percent: Optional[str] = None      # "70.0%" or "N/A"
    is_teaser_rate: Optional[bool] = None
    ewma_volatility: Optional[float] = None       # percent


class StableScoreResult(_CamelModel):
    score: int = Field(ge=0, le=100)
    model: ScoringModel
    components: ScoreComponents
    weights_used: Dict[str, float] = {}
    details: ScoreDetails

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
