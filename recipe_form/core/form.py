# recipe_form/core/form.py
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .models import RESTRICTIONS, FormState, GeneratedMeal, GenerateMealRequest


# ---------- Field edits ----------

def set_description(state: FormState, description: str) -> FormState:
    return state.model_copy(update={"description": description})


def toggle_restriction(state: FormState, label: str) -> FormState:
    """
    Symmetric difference with {label}: drop it when selected, append it otherwise.
    Toggle order is kept because it is the order sent to the backend.
    """
    if label not in RESTRICTIONS:
        raise ValueError(f"Unknown dietary restriction: {label!r}")
    if label in state.restrictions:
        selected = [r for r in state.restrictions if r != label]
    else:
        selected = [*state.restrictions, label]
    return state.model_copy(update={"restrictions": selected})


def build_generate_request(description: str, restrictions: Sequence[str]) -> GenerateMealRequest:
    return GenerateMealRequest(
        description=description.strip() or None,
        dietary_restrictions=", ".join(restrictions) or None,
    )


# ---------- Recipe generation lifecycle ----------

def begin_generation(state: FormState) -> Tuple[FormState, int]:
    seq = state.generation_seq + 1
    return state.model_copy(update={"generating": True, "generation_seq": seq}), seq


def finish_generation(
    state: FormState,
    seq: int,
    result: Optional[GeneratedMeal] = None,
    alert: Optional[str] = None,
) -> FormState:
    """
    Settle generation request `seq`.

    - A request superseded by a later one changes nothing; the later one owns the flag.
    - Success replaces both the recipe markup and the image URL.
    - Failure keeps the previous result and raises `alert` for the next render.
    """
    if seq != state.generation_seq:
        return state
    update: dict = {"generating": False}
    if result is not None:
        update["meal_html"] = result.meal
        update["image_url"] = result.image_url
    if alert:
        update["alert"] = alert
    return state.model_copy(update=update)


# ---------- Pantry analysis lifecycle ----------

def begin_pantry_analysis(state: FormState) -> Tuple[FormState, int]:
    seq = state.pantry_seq + 1
    return state.model_copy(update={"analyzing": True, "pantry_seq": seq}), seq


def finish_pantry_analysis(
    state: FormState,
    seq: int,
    ingredients: Optional[str] = None,
    alert: Optional[str] = None,
) -> FormState:
    if seq != state.pantry_seq:
        return state
    update: dict = {"analyzing": False}
    if ingredients is not None:
        update["pantry_ingredients"] = ingredients
    if alert:
        update["alert"] = alert
    return state.model_copy(update=update)


def is_stale(state: FormState, kind: str, seq: int) -> bool:
    latest = state.generation_seq if kind == "generation" else state.pantry_seq
    return seq != latest


# ---------- Alerts ----------

def take_alert(state: FormState) -> Tuple[FormState, Optional[str]]:
    """Return the state with its alert cleared, plus the alert that was pending."""
    if state.alert is None:
        return state, None
    return state.model_copy(update={"alert": None}), state.alert
