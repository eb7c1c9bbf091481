from aquascore.services.metrics import WaterAnalysisValues
from aquascore.services.profile_targets import PROFILE_IDS
from aquascore.services.water_insights import derive_water_insights, evaluate_badges, evaluate_profile_fit


def test_regulatory_badges() -> None:
    badges = evaluate_badges(WaterAnalysisValues(calcium=200, sodium=10))

    assert [badge.id for badge in badges] == ["calcium_high", "sodium_low"]


def test_bicarbonate_badges_stack() -> None:
    ids = {badge.id for badge in evaluate_badges(WaterAnalysisValues(bicarbonate=1500))}

    assert ids == {"bicarbonate_high", "bicarbonate_heal"}


def test_balanced_calcium_magnesium_synergy() -> None:
    insights = derive_water_insights(WaterAnalysisValues(calcium=80, magnesium=40))

    assert insights.calcium_magnesium_ratio == 2.0
    assert [item.id for item in insights.synergies] == ["ca-mg-balanced"]


def test_calcium_without_magnesium_is_a_kidney_risk() -> None:
    insights = derive_water_insights(WaterAnalysisValues(calcium=200))

    assert "kidney-risk" in {item.id for item in insights.synergies}


def test_reflux_and_electrolyte_synergies() -> None:
    insights = derive_water_insights(WaterAnalysisValues(bicarbonate=1500, magnesium=60, sodium=80))
    ids = {item.id for item in insights.synergies}

    assert "sodbrennen" in ids
    assert "electrolyte-boost" in ids


def test_profile_fit_covers_every_profile() -> None:
    assert set(evaluate_profile_fit(WaterAnalysisValues())) == set(PROFILE_IDS)


def test_baby_fit_for_low_sodium_and_nitrate() -> None:
    fit = evaluate_profile_fit(WaterAnalysisValues(sodium=5, nitrate=2))

    assert fit["baby"].status == "ideal"
    assert fit["blood_pressure"].status == "ideal"


def test_sport_fit_avoids_low_mineral_water() -> None:
    fit = evaluate_profile_fit(WaterAnalysisValues(magnesium=5, bicarbonate=50))

    assert fit["sport"].status == "avoid"


def test_blood_pressure_avoids_unknown_sodium() -> None:
    assert evaluate_profile_fit(WaterAnalysisValues(calcium=80))["blood_pressure"].status == "avoid"


def test_target_window_fit() -> None:
    ideal = evaluate_profile_fit(WaterAnalysisValues(calcium=80, magnesium=25, sodium=10))
    hard = evaluate_profile_fit(WaterAnalysisValues(calcium=200))
    empty = evaluate_profile_fit(WaterAnalysisValues())

    assert ideal["standard"].status == "ideal"
    assert hard["kidney"].status == "avoid"
    assert empty["standard"].status == "ok"
