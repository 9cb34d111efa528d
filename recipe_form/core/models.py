# recipe_form/core/models.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# Canonical order; the page renders chips in this order.
RESTRICTIONS: tuple[str, ...] = (
    "Vegetarian",
    "Vegan",
    "Gluten-free",
    "Dairy-free",
    "Nut-free",
    "Keto",
)


# ---------- Session form state ----------

class FormState(BaseModel):
    """Everything the page needs to render one browser session."""
    description: str = ""
    restrictions: List[str] = Field(default_factory=list, description="Selected labels in toggle order")
    pantry_ingredients: str = ""
    meal_html: str = ""
    image_url: str = ""

    generating: bool = False
    analyzing: bool = False

    # Latest issued request per kind; older responses are dropped on arrival.
    generation_seq: int = Field(0, ge=0)
    pantry_seq: int = Field(0, ge=0)

    alert: Optional[str] = None

    @field_validator("restrictions")
    @classmethod
    def _known_unique_labels(cls, v: List[str]) -> List[str]:
        unknown = [r for r in v if r not in RESTRICTIONS]
        if unknown:
            raise ValueError(f"Unknown dietary restriction(s): {', '.join(unknown)}")
        if len(set(v)) != len(v):
            raise ValueError("Dietary restrictions must not repeat")
        return v

    def has_result(self) -> bool:
        return bool(self.meal_html)


# ---------- Recipe backend wire format ----------

class GenerateMealRequest(BaseModel):
    description: Optional[str] = None
    dietary_restrictions: Optional[str] = None

    def payload(self) -> dict:
        # absent, never empty strings
        return self.model_dump(exclude_none=True)


class GeneratedMeal(BaseModel):
    meal: str = Field(..., description="Recipe as an HTML fragment")
    image_url: str


class PantryAnalysis(BaseModel):
    ingredients: str


class ErrorPayload(BaseModel):
    detail: str
