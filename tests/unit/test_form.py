# tests/unit/test_form.py
import pytest
from pydantic import ValidationError

from recipe_form.core.form import (
    begin_generation,
    begin_pantry_analysis,
    build_generate_request,
    finish_generation,
    finish_pantry_analysis,
    take_alert,
    toggle_restriction,
)
from recipe_form.core.models import RESTRICTIONS, FormState, GeneratedMeal


@pytest.mark.parametrize("label", RESTRICTIONS)
def test_toggle_twice_restores_selection(label):
    start = FormState(restrictions=["Keto"] if label != "Keto" else ["Vegan"])
    once = toggle_restriction(start, label)
    assert label in once.restrictions
    assert toggle_restriction(once, label).restrictions == start.restrictions


def test_toggle_keeps_toggle_order():
    s = toggle_restriction(FormState(), "Vegan")
    s = toggle_restriction(s, "Keto")
    assert s.restrictions == ["Vegan", "Keto"]


def test_toggle_rejects_unknown_label():
    with pytest.raises(ValueError):
        toggle_restriction(FormState(), "Paleo")


def test_toggle_does_not_mutate_input():
    s = FormState()
    toggle_restriction(s, "Vegan")
    assert s.restrictions == []


def test_state_rejects_duplicate_restrictions():
    with pytest.raises(ValidationError):
        FormState(restrictions=["Vegan", "Vegan"])


def test_blank_request_omits_both_fields():
    assert build_generate_request("   ", []).payload() == {}


def test_request_trims_and_joins():
    req = build_generate_request("  quick pasta ", ["Vegan", "Keto"])
    assert req.payload() == {"description": "quick pasta", "dietary_restrictions": "Vegan, Keto"}


def test_generation_flag_spans_request():
    s0 = FormState()
    assert s0.generating is False
    s1, seq = begin_generation(s0)
    assert s1.generating is True
    ok = finish_generation(s1, seq, result=GeneratedMeal(meal="<p>Eat pasta</p>", image_url="https://x/img.png"))
    assert ok.generating is False
    assert ok.meal_html == "<p>Eat pasta</p>"
    assert ok.image_url == "https://x/img.png"

    s2, seq2 = begin_generation(ok)
    failed = finish_generation(s2, seq2, alert="Error: Invalid input")
    assert failed.generating is False
    assert failed.alert == "Error: Invalid input"
    # previous result survives a failure
    assert failed.meal_html == "<p>Eat pasta</p>"


def test_stale_generation_response_is_discarded():
    s, first = begin_generation(FormState())
    s, second = begin_generation(s)
    s = finish_generation(s, second, result=GeneratedMeal(meal="<p>new</p>", image_url="https://x/new.png"))
    after = finish_generation(s, first, result=GeneratedMeal(meal="<p>old</p>", image_url="https://x/old.png"))
    assert after.meal_html == "<p>new</p>"
    assert after.generating is False


def test_flag_stays_up_until_latest_request_settles():
    s, first = begin_generation(FormState())
    s, second = begin_generation(s)
    s = finish_generation(s, first, alert="Error: boom")
    assert s.generating is True
    assert s.alert is None
    s = finish_generation(s, second)
    assert s.generating is False


def test_pantry_result_replaces_previous_text():
    s, seq = begin_pantry_analysis(FormState(pantry_ingredients="rice"))
    assert s.analyzing is True
    s = finish_pantry_analysis(s, seq, ingredients="eggs, milk, flour")
    assert s.pantry_ingredients == "eggs, milk, flour"
    assert s.analyzing is False


def test_pantry_and_generation_are_independent():
    s, gen = begin_generation(FormState())
    s, pan = begin_pantry_analysis(s)
    s = finish_pantry_analysis(s, pan, ingredients="eggs")
    assert s.generating is True
    assert s.analyzing is False


def test_take_alert_clears_it():
    s, alert = take_alert(FormState(alert="Error: x"))
    assert alert == "Error: x"
    assert s.alert is None
    assert take_alert(s) == (s, None)
