from aquascore.services.metrics import WaterAnalysisValues
from aquascore.services.scan_processor import merge_values, process_scan


def test_user_overrides_win_over_parsed_values() -> None:
    outcome = process_scan(
        text="Calcium: 80\nMagnesium: 25",
        profile="standard",
        overrides=WaterAnalysisValues(calcium=95),
    )

    assert outcome.ocr_parsed_values.calcium == 80
    assert outcome.merged_values.calcium == 95
    assert outcome.merged_values.magnesium == 25
    assert {item.metric: item.raw_value for item in outcome.score.metrics}["calcium"] == 95


def test_merge_keeps_parsed_values_without_overrides() -> None:
    parsed = WaterAnalysisValues(calcium=80)

    assert merge_values(parsed, None) == parsed
    assert merge_values(parsed, WaterAnalysisValues(sodium=5)) == WaterAnalysisValues(calcium=80, sodium=5)


def test_implausible_values_are_kept_and_flagged() -> None:
    outcome = process_scan(text=None, profile="standard", overrides=WaterAnalysisValues(ph=12))

    assert outcome.has_values
    assert outcome.merged_values.ph == 12
    assert len(outcome.warnings) == 1
    assert outcome.warnings[0].startswith("ph:")
    assert outcome.score.metric_scores() == {"ph": 0.0}


def test_unreadable_label_has_no_values() -> None:
    outcome = process_scan(text="This is random text", profile="sport")

    assert not outcome.has_values
    assert outcome.score.total_score == 0.0
    assert outcome.profile == "sport"


def test_outcome_carries_derived_metrics_and_insights() -> None:
    outcome = process_scan(text="Calcium: 71,4 mg/l\nMagnesium: 43,2 mg/l", profile="coffee")

    assert outcome.derived.hardness_class == "hart"
    assert outcome.insights.profile_fit["coffee"].status in {"ideal", "ok", "avoid"}
    assert outcome.score.low_data
