from pcn_appeal.engine.matcher import (
    build_search_text,
    count_high_confidence_keywords,
    match_grounds,
)


def _ids(text):
    return [(m.ground.id, m.confidence) for m in match_grounds(text)]


def test_faded_sign_ranks_signage_ground_first():
    matches = match_grounds("faded parking sign, no ticket displayed")
    assert matches[0].ground.id == "C10"
    assert matches[0].confidence >= 0.9


def test_equal_weights_fall_back_to_catalog_order():
    ranked = _ids("the sign was faded")
    assert ranked[:2] == [("C10", 0.9), ("C12", 0.9)]
    assert ranked[2:] == [("C11", 0.8), ("C14", 0.8)]


def test_keyword_weight_beats_search_seed():
    # "yellow line" also seeds C12 through its scenario text
    assert _ids("yellow line") == [("C12", 0.8)]


def test_blue_badge_maps_to_permit_ground():
    assert _ids("I had my blue badge on the dashboard")[0] == ("A2", 0.95)


def test_matching_is_case_insensitive():
    assert _ids("MEDICAL EMERGENCY") == [("E20", 0.8), ("E21", 0.8), ("G30", 0.8)]


def test_unrelated_text_matches_nothing():
    assert match_grounds("Something happened on the road") == []


def test_search_text_joins_description_and_circumstances():
    text = build_search_text("Car broke down", ["hazard lights on", "called AA"])
    assert text == "Car broke down hazard lights on called AA"
    assert match_grounds(text)[0].ground.id == "F23"


def test_high_confidence_keyword_count():
    assert count_high_confidence_keywords("Paid, and I have the receipt and a photograph") == 3
    assert count_high_confidence_keywords("nothing relevant") == 0


def test_blank_text_matches_nothing():
    assert match_grounds("") == []
    assert match_grounds("   ") == []
    assert match_grounds(build_search_text("", [])) == []
