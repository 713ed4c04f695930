import itertools

import pytest

from stablescore.scoring.contracts import QuoteInput, RateIncrease
from stablescore.scoring.engine import is_new_entrant, reweight, score_quote
from stablescore.scoring.rules import CANONICAL_RULES, LEGACY_RULES


def _quote(n_years=5, inc=0.02, **kw):
    kw.setdefault("rating", "A+")
    kw.setdefault("monthly_premium", 120.0)
    return QuoteInput(rate_increases=tuple(RateIncrease(inc) for _ in range(n_years)), **kw)


def _component_values(res):
    return [v for v in res.components.model_dump().values() if v is not None]


def test_established_full_data():
    res = score_quote(_quote(premiums=1_000_000, claims=700_000))
    assert res.model == "established"
    assert res.components.loss_ratio_gap == 100
    assert res.components.rate_volatility == 100
    assert res.components.financial_buffer == 90
    assert res.components.risk_pool_stability is None
    assert res.components.pricing_aggression is None
    # 0.40/0.25/0.15 renormalized over 0.80
    assert res.weights_used == pytest.approx({
        "lossRatioGap": 0.5, "rateVolatility": 0.3125, "financialBuffer": 0.1875,
    })
    assert res.score == 98
    assert res.details.loss_ratio_percent == "70.0%"
    assert res.details.rate_history_years == 5


def test_new_entrant_teaser_rate_from_dict():
    res = score_quote({
        "rateIncreases": [],
        "rating": "NR",
        "monthlyPremium": 100,
        "peerEstablishedPrices": [120, 130, 140],
    })
    assert res.model == "new-entrant"
    assert res.components.pricing_aggression == 0
    assert res.components.financial_buffer == 40
    assert res.score == 4
    assert res.details.is_teaser_rate is True
    assert res.weights_used == {"pricingAggression": 0.9, "financialBuffer": 0.1}


def test_missing_premiums_drops_loss_ratio():
    for premiums in (0, None):
        res = score_quote(_quote(n_years=3, rating="B", premiums=premiums, claims=5_000))
        assert res.components.loss_ratio_gap is None
        assert set(res.weights_used) == {"rateVolatility", "financialBuffer"}
        assert res.weights_used["rateVolatility"] == pytest.approx(0.625)
        assert res.weights_used["financialBuffer"] == pytest.approx(0.375)
        assert res.score == 85
        assert res.details.loss_ratio_percent == "N/A"


def test_only_financial_buffer_available():
    res = score_quote(_quote(n_years=3, inc=-0.01, rating="B+"))
    assert res.model == "established"
    assert res.components.rate_volatility is None
    assert res.weights_used == pytest.approx({"financialBuffer": 1.0})
    assert res.score == 70


def test_lowercase_rating_scores_like_uppercase():
    lo = score_quote(_quote(rating="b++"))
    up = score_quote(_quote(rating="B++"))
    assert lo.components.financial_buffer == up.components.financial_buffer == 75
    assert lo.score == up.score


def test_model_partition_by_history_length():
    for n in range(0, 7):
        res = score_quote(_quote(n_years=n))
        assert res.model == ("new-entrant" if n < 3 else "established")
        assert is_new_entrant(n) == (n < 3)


def test_legacy_rules():
    # two rate changes: new entrant under canonical rules, established under legacy
    two = _quote(n_years=2, premiums=1_000_000, claims=700_000)
    assert score_quote(two).model == "new-entrant"
    assert score_quote(two, LEGACY_RULES).model == "established"
    assert score_quote(_quote(n_years=1), LEGACY_RULES).model == "new-entrant"
    res = score_quote(
        QuoteInput(rating="NR", monthly_premium=100, peer_established_prices=(120, 130, 140)),
        LEGACY_RULES,
    )
    assert res.score == 4  # 0 * 0.9 + 40 * 0.1


def test_new_entrant_without_peers_is_not_penalized():
    res = score_quote(QuoteInput(rating="A", monthly_premium=80))
    assert res.components.pricing_aggression == 100
    assert res.details.is_teaser_rate is False
    assert res.score == 99


def test_cheapest_established_price_used_without_peer_set():
    res = score_quote(QuoteInput(rating="NR", monthly_premium=100, cheapest_established_price=125))
    assert res.components.pricing_aggression == 0


def test_non_finite_market_data_is_missing():
    res = score_quote(_quote(premiums=float("nan"), claims=1.0))
    assert res.components.loss_ratio_gap is None


def test_established_details():
    q = QuoteInput(
        rating="A",
        monthly_premium=150,
        rate_increases=(RateIncrease(2), RateIncrease(4), RateIncrease(6)),
    )
    d = score_quote(q).details
    assert d.avg_rate_increase == pytest.approx(4.0)
    assert d.ewma_volatility == pytest.approx(4.38)


def test_deterministic():
    q = _quote(premiums=2_000_000, claims=1_800_000, inc=0.07)
    assert score_quote(q).to_dict() == score_quote(q).to_dict()


def test_ranges_hold_across_inputs():
    ratings = ["A+", "B", "NR", "", "zz"]
    claims = [None, 0, 500_000, 950_000, 3_000_000]
    incs = [0.0, 0.04, 0.2, 45]
    for rating, c, inc, n in itertools.product(ratings, claims, incs, [0, 1, 3, 6]):
        res = score_quote(_quote(n_years=n, inc=inc, rating=rating, premiums=1_000_000, claims=c,
                                 peer_established_prices=(90, 200)))
        assert 0 <= res.score <= 100
        assert all(0 <= v <= 100 for v in _component_values(res))
        assert sum(res.weights_used.values()) == pytest.approx(1.0)


def test_reweight_sums_to_one_for_every_subset():
    names = list(CANONICAL_RULES.established_weights)
    for k in range(1, len(names) + 1):
        for subset in itertools.combinations(names, k):
            w = reweight(dict.fromkeys(subset, 50.0), CANONICAL_RULES.established_weights)
            assert sum(w.values()) == pytest.approx(1.0)


def test_to_dict_uses_camel_case_and_drops_absent():
    out = score_quote(_quote(premiums=1_000_000, claims=700_000)).to_dict()
    assert out["model"] == "established"
    assert set(out["components"]) == {"lossRatioGap", "rateVolatility", "financialBuffer"}
    assert out["details"]["lossRatioPercent"] == "70.0%"
    assert "isTeaserRate" not in out["details"]
    assert "weightsUsed" in out


def test_zero_price_new_entrant_is_a_teaser_rate():
    res = score_quote(QuoteInput(rating="A", monthly_premium=0.0, peer_established_prices=(120, 130, 140)))
    assert res.components.pricing_aggression == 0
    assert res.details.is_teaser_rate is True
    assert res.score == 9


def test_missing_price_from_dict_is_none():
    q = QuoteInput.from_dict({"rating": "A", "rateIncreases": []})
    assert q.monthly_premium is None
    assert score_quote(q).components.pricing_aggression == 100
