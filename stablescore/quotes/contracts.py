# stablescore/quotes/contracts.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from stablescore.scoring.contracts import RateIncrease, StableScoreResult
from stablescore.utils.normalizers import clean_str, pick, to_float


def _yes(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    return str(v or "").strip().lower() in {"yes", "y", "true", "1"}


@dataclass(frozen=True)
class Discount:
    type: str                      # "percent" | "dollar" | "fixed"
    value: float                   # percent may arrive as 0.07 or 7
    category: Optional[str] = None

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Discount":
        if isinstance(d, Discount):
            return d
        return Discount(
            type=clean_str(d.get("type")).lower(),
            value=to_float(d.get("value")) or 0.0,
            category=clean_str(pick(d, "category", "name", default="")) or None,
        )


@dataclass(frozen=True)
class CarrierQuote:
    """One carrier+plan quote as handed over by the quote-fetching layer (already whitelisted)."""
    carrier_name: str
    plan_name: str
    monthly_premium: Optional[float]
    rating: str
    rate_increases: Tuple[RateIncrease, ...] = ()
    naic: Optional[str] = None
    premiums: Optional[float] = None
    claims: Optional[float] = None
    discounts: Tuple[Discount, ...] = ()
    discount_category: Optional[str] = None
    view_type: Tuple[str, ...] = ()
    # set when a household discount was applied
    discount_applied: bool = False
    original_premium: Optional[float] = None

    @property
    def history_years(self) -> int:
        return len(self.rate_increases)

    def with_premium(self, premium: float, **changes: Any) -> "CarrierQuote":
        return replace(self, monthly_premium=premium, **changes)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "CarrierQuote":
        if isinstance(d, CarrierQuote):
            return d
        naic = pick(d, "naic", "companyNaic", "company_naic")
        return CarrierQuote(
            carrier_name=clean_str(pick(d, "carrierName", "carrier_name", default="Unknown")) or "Unknown",
            plan_name=clean_str(pick(d, "planName", "plan_name", "plan", default="")),
            monthly_premium=to_float(pick(d, "monthlyPremium", "monthly_premium")),
            rating=clean_str(pick(d, "rating", "amBestRating", default="NR")) or "NR",
            rate_increases=tuple(RateIncrease.from_dict(r) for r in (pick(d, "rateIncreases", "rate_increases") or [])),
            naic=None if naic is None else str(naic),
            premiums=to_float(d.get("premiums")),
            claims=to_float(d.get("claims")),
            discounts=tuple(Discount.from_dict(x) for x in (d.get("discounts") or [])),
            discount_category=clean_str(pick(d, "discountCategory", "discount_category", default="")) or None,
            view_type=tuple(str(v) for v in (pick(d, "viewType", "view_type") or [])),
        )


@dataclass(frozen=True)
class HouseholdInfo:
    has_household_member: bool = False
    same_company_insurance: bool = False

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Optional["HouseholdInfo"]:
        if d is None or isinstance(d, HouseholdInfo):
            return d
        return HouseholdInfo(
            has_household_member=_yes(pick(d, "hasHouseholdMember", "has_household_member")),
            same_company_insurance=_yes(pick(d, "sameCompanyInsurance", "same_company_insurance")),
        )


@dataclass
class RankedQuote:
    quote: CarrierQuote
    result: StableScoreResult
    personalization_boost: int = 0
    application_fee: Optional[float] = None

    @property
    def stable_score(self) -> int:
        return self.result.score

    @property
    def final_score(self) -> int:
        return self.result.score + self.personalization_boost

    def to_dict(self) -> Dict[str, Any]:
        q, r = self.quote, self.result
        c, det = r.components, r.details
        return {
            "carrierName": q.carrier_name,
            "planName": q.plan_name,
            "monthlyPremium": q.monthly_premium,
            "stableScore": r.score,
            "finalScore": self.final_score,
            "personalizationBoost": self.personalization_boost,
            "model": r.model,
            "rateVolatility": c.rate_volatility,
            "lossRatioGap": c.loss_ratio_gap,
            "financialStrength": c.financial_buffer,
            "pricingAggression": c.pricing_aggression,
            "rateHistoryYears": det.rate_history_years,
            "avgRateIncrease": det.avg_rate_increase,
            "lossRatioPercent": det.loss_ratio_percent,
            "isTeaserRate": det.is_teaser_rate,
            "amBestRating": q.rating,
            "companyNaic": q.naic,
            "discountApplied": q.discount_applied,
            "originalRate": q.original_premium,
            "discountCategory": q.discount_category,
            "applicationFee": self.application_fee,
        }
