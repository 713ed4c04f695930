from stablescore.scoring.contracts import BoostQuote, UserPreferences
from stablescore.scoring.personalization import personalization_boost


def _q(carrier="Acme Life", plan="Plan G", score=70, premium=100.0):
    return BoostQuote(carrier_name=carrier, plan_name=plan, stable_score=score, monthly_premium=premium)


def test_plan_preference_match():
    q = {"carrierName": "Acme Life", "planName": "Plan G", "stableScore": 70, "monthlyPremium": 100}
    assert personalization_boost(q, {"planPreference": "G"}, []) == 5
    assert personalization_boost(q, {"planPreference": "g"}, []) == 5
    assert personalization_boost(q, {"planPreference": "N"}, []) == 0


def test_no_preferences_no_boost():
    assert personalization_boost(_q(score=99), None, []) == 0
    assert personalization_boost(_q(score=99), {}, []) == 0


def test_specific_company_matches_either_direction():
    q = _q(carrier="Mutual of Omaha")
    assert personalization_boost(q, UserPreferences(specific_company="omaha")) == 5
    assert personalization_boost(q, UserPreferences(specific_company="Mutual of Omaha Insurance Company")) == 5
    assert personalization_boost(q, UserPreferences(specific_company="Humana")) == 0


def test_specific_company_suppresses_company_preference():
    prefs = UserPreferences(specific_company="Aetna", company_preference="brand")
    assert personalization_boost(_q(carrier="Humana"), prefs) == 0


def test_stability_preference():
    prefs = UserPreferences(company_preference="stability")
    assert personalization_boost(_q(score=85), prefs) == 5
    assert personalization_boost(_q(score=84), prefs) == 0


def test_brand_preference():
    prefs = {"companyPreference": "brand"}
    assert personalization_boost(_q(carrier="AARP / UnitedHealthcare"), prefs) == 5
    assert personalization_boost(_q(carrier="Blue Cross Blue Shield of Texas"), prefs) == 5
    assert personalization_boost(_q(carrier="Acme Life"), prefs) == 0


def test_price_preference():
    prefs = UserPreferences(company_preference="price")
    peers = [{"monthlyPremium": 100}] * 4
    assert personalization_boost(_q(premium=89), prefs, peers) == 3
    assert personalization_boost(_q(premium=90), prefs, peers) == 0
    assert personalization_boost(_q(premium=10), prefs, []) == 0


def test_boost_is_capped():
    prefs = UserPreferences(plan_preference="G", company_preference="stability")
    assert personalization_boost(_q(score=95), prefs) == 10
    prefs = UserPreferences(plan_preference="G", specific_company="acme")
    assert personalization_boost(_q(), prefs) == 10


def test_unknown_company_preference_ignored():
    assert personalization_boost(_q(score=99), {"companyPreference": "vibes"}) == 0
