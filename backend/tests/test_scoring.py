from datetime import date, timedelta

import pytest

from pcn_appeal.engine.case_record import CaseRecord
from pcn_appeal.engine.scoring import (
    AppealInput,
    attempt_penalty,
    detect_council,
    evidence_quality,
    legal_strength,
    location_multiplier,
    predict,
    predict_case,
    timing_score,
)
from pcn_appeal.engine.weights import WeightTable
from pcn_appeal.knowledge import get_ground

AS_OF = date(2024, 6, 1)


def _appeal(**overrides):
    fields = {
        "description": "The sign was faded",
        "circumstances": [],
        "location": "High Street",
        "incident_date": AS_OF - timedelta(days=200),
        "evidence": [],
        "previous_attempts": 4,
    }
    fields.update(overrides)
    return AppealInput(**fields)


# --- Components ---


def test_timing_boundaries():
    assert timing_score(14) == 1.0
    assert timing_score(15) == 0.9
    assert timing_score(28) == 0.9
    assert timing_score(56) == 0.7
    assert timing_score(84) == 0.4
    assert timing_score(365) == 0.2
    assert timing_score(366) == 0.05


def test_timing_boundary_through_predict():
    on_day_14 = predict(_appeal(incident_date=AS_OF - timedelta(days=14)), as_of=AS_OF)
    on_day_15 = predict(_appeal(incident_date=AS_OF - timedelta(days=15)), as_of=AS_OF)
    assert on_day_14.components["timing"] == 1.0
    assert on_day_15.components["timing"] == 0.9


def test_attempt_penalty_floors_at_point_three():
    assert attempt_penalty(0) == 1.0
    assert attempt_penalty(2) == pytest.approx(0.7)
    assert attempt_penalty(10) == 0.3


def test_council_detected_from_location_text():
    assert detect_council("Oxford Street, Westminster") == "Westminster"
    assert detect_council("Leeds") is None
    assert location_multiplier("Southwark") == 1.05
    assert location_multiplier("Leeds") == 1.0
    assert location_multiplier(None) == 1.0


def test_legal_strength_formula():
    weights = WeightTable()
    c10 = get_ground("C10")  # high, statutory -> 0.95
    e20 = get_ground("E20")  # medium, mitigating -> 0.55
    expected = 0.6 * 0.95 + 0.3 * ((0.95 + 0.55) / 2) + 0.1 * 0.2
    assert legal_strength([c10, e20], weights) == pytest.approx(expected)
    assert legal_strength([], weights) == 0.15


def test_procedural_grounds_get_no_statutory_bonus():
    d15 = get_ground("D15")
    assert legal_strength([d15], WeightTable()) == pytest.approx(
        0.6 * 0.85 + 0.3 * 0.85 + 0.1 * 0.1
    )


def test_evidence_quality_uses_best_matching_type():
    c10 = get_ground("C10")
    assert evidence_quality([], [c10]) == 0.0
    score = evidence_quality(["Date-stamped photos"], [c10])
    # one of four items matched with no typed weight
    assert score == pytest.approx(0.5 / 4)
    assert evidence_quality(["   "], [c10]) == 0.0
    assert evidence_quality(["anything"], []) == 0.0


# --- Predictions ---


def test_prediction_is_idempotent():
    appeal = _appeal(evidence=["photographs of poor signage condition"])
    first = predict(appeal, as_of=AS_OF).to_dict()
    second = predict(appeal, as_of=AS_OF).to_dict()
    assert first == second


def test_adding_missing_evidence_never_lowers_the_estimate():
    without = predict(_appeal(), as_of=AS_OF)
    with_photos = predict(
        _appeal(evidence=["Photographs of poor signage condition"]), as_of=AS_OF
    )
    assert with_photos.components["evidence_quality"] > without.components["evidence_quality"]
    assert with_photos.success_probability > without.success_probability


def test_no_grounds_late_case_scores_at_the_floor():
    appeal = _appeal(description="Something happened on the road", previous_attempts=0)
    result = predict(appeal, as_of=AS_OF)
    assert result.matched_grounds == []
    assert result.components["legal_strength"] == 0.15
    assert result.success_probability == pytest.approx(0.15 * (1 + 0.65 * 0.2))
    assert "No clear legal grounds identified - case may lack merit" in result.risk_factors


def test_no_grounds_with_repeat_attempts_stays_under_ten_percent():
    appeal = _appeal(description="Something happened on the road", previous_attempts=3)
    assert predict(appeal, as_of=AS_OF).success_probability <= 0.10


def test_empty_description_scores_at_the_floor():
    result = predict(_appeal(description="", incident_date=AS_OF, previous_attempts=0), as_of=AS_OF)
    assert result.matched_grounds == []
    assert result.components["legal_strength"] == 0.15
    assert result.success_probability == pytest.approx(0.15 * (1 + 0.65 * 1.0))
    assert result.confidence == pytest.approx(0.3)


def test_probability_is_clamped():
    appeal = _appeal(incident_date=AS_OF, previous_attempts=0)
    assert predict(appeal, as_of=AS_OF).success_probability == 0.98


def test_westminster_lowers_the_estimate():
    base = predict(_appeal(), as_of=AS_OF)
    westminster = predict(_appeal(location="Westminster Bridge Road"), as_of=AS_OF)
    assert westminster.components["location_multiplier"] == 0.9
    assert westminster.success_probability == pytest.approx(base.success_probability * 0.9)


def test_explicit_council_overrides_location():
    result = predict(_appeal(location="Westminster", council_name="Southwark"), as_of=AS_OF)
    assert result.components["location_multiplier"] == 1.05


def test_recommended_grounds_are_high_then_medium():
    result = predict(_appeal(), as_of=AS_OF)
    assert [g.id for g in result.recommended_grounds] == ["C10", "C12", "C11"]


def test_evidence_gaps_flag_first_item_per_ground():
    result = predict(_appeal(), as_of=AS_OF)
    assert result.evidence_gaps[0] == "Photographs of poor signage condition (HIGH PRIORITY for C10)"
    assert "Images showing faded text" in result.evidence_gaps
    declared = predict(_appeal(evidence=["Images showing faded text"]), as_of=AS_OF)
    assert "Images showing faded text" not in declared.evidence_gaps


def test_risk_factors_cover_timing_and_attempts():
    risks = predict(_appeal(pcn_amount=130.0), as_of=AS_OF).risk_factors
    assert "Late appeal submission - may face procedural challenges" in risks
    assert "4 previous failed attempts may reduce credibility" in risks
    assert "Multiple previous failures suggest fundamental case weakness" in risks
    assert "High penalty amount - increased scrutiny likely" in risks


def test_confidence_counts_high_grounds_and_keywords():
    # 0.3 base + 3 high-strength grounds
    assert predict(_appeal(), as_of=AS_OF).confidence == pytest.approx(0.9)
    quiet = _appeal(description="Something happened on the road")
    assert predict(quiet, as_of=AS_OF).confidence == pytest.approx(0.3)


def test_strategy_and_actions_follow_primary_ground():
    result = predict(_appeal(), as_of=AS_OF)
    assert "Focus on Signs unclear, faded, or missing" in result.legal_strategy
    assert "'Herron v Sunderland'" in result.legal_strategy
    assert "Take current photographs of parking signage" in result.priority_actions
    assert "Submit appeal urgently - approaching deadline" in result.priority_actions


def test_weights_version_reported():
    table = WeightTable(version=7)
    assert predict(_appeal(), as_of=AS_OF, weights=table).weights_version == 7


def test_nudged_weights_scale_legal_strength():
    base = predict(_appeal(), as_of=AS_OF)
    nudged = predict(_appeal(), as_of=AS_OF, weights=WeightTable().nudged())
    assert nudged.components["legal_strength"] > base.components["legal_strength"]


def test_predict_case_uses_case_fields():
    case = CaseRecord(
        ticket_number="PCN12345678",
        issue_date="2024-05-25",
        location="Camden High Street",
        reason="Invalid or unclear signage",
        evidence=["Date-stamped photos"],
    )
    result = predict_case(case, as_of=AS_OF)
    assert result.components["timing"] == 1.0
    assert result.components["location_multiplier"] == 0.95
    assert result.matched_grounds[0].ground.id == "C10"
    assert "PCN12345678" in result.letter.render()
