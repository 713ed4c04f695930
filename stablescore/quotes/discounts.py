# stablescore/quotes/discounts.py
from typing import List, Optional, Tuple

from stablescore.quotes.contracts import CarrierQuote, Discount, HouseholdInfo
from stablescore.utils.debug import log


def _qualifies(category: str, household: HouseholdInfo) -> bool:
    is_roommate = "roommate" in category
    is_multi_or_household = "multi" in category or "household" in category
    if is_multi_or_household and not is_roommate:
        # multi-insured discounts need the other member on the same carrier
        return household.same_company_insurance
    return True


def discount_amount(base: float, discount: Discount) -> float:
    if discount.type == "percent":
        share = discount.value / 100.0 if discount.value > 1 else discount.value
        return base * share
    if discount.type in ("dollar", "fixed"):
        return discount.value
    return 0.0


def household_discount(quote: CarrierQuote, household: HouseholdInfo) -> Tuple[float, Optional[str]]:
    """Total discount (dollars) the household qualifies for, plus the first category applied."""
    base = quote.monthly_premium
    total = 0.0
    applied: Optional[str] = None
    for d in quote.discounts:
        category = (d.category or quote.discount_category or "").lower()
        if not _qualifies(category, household):
            log("QUOTES", f"skipping {category} discount for {quote.carrier_name} (requires same company insurance)")
            continue
        amount = discount_amount(base, d)
        if amount <= 0:
            continue
        total += amount
        if applied is None:
            applied = d.category or quote.discount_category
    return total, applied


def apply_household_discounts(quotes: List[CarrierQuote], household: Optional[HouseholdInfo]) -> List[CarrierQuote]:
    if household is None or not household.has_household_member:
        return list(quotes)

    out: List[CarrierQuote] = []
    for q in quotes:
        total, applied = household_discount(q, household)
        if total <= 0:
            out.append(q)
            continue
        discounted = round(max(0.0, q.monthly_premium - total), 2)
        log(
            "QUOTES",
            f"discount for {q.carrier_name}: base ${q.monthly_premium:.2f} - ${total:.2f} = ${discounted:.2f} "
            f"(category: {applied or 'Unknown'})",
        )
        out.append(q.with_premium(
            discounted,
            discount_applied=True,
            original_premium=q.monthly_premium,
            discount_category=applied,
        ))
    return out
