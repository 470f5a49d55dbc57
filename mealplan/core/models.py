from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


# ---------- Core value objects ----------

class Ingredient(BaseModel):
    """A single parsed ingredient line: {name, quantity, unit}."""
    name: str = Field(..., min_length=1, description="Display name of the ingredient")
    quantity: str = Field("", description="Free-form quantity, e.g. '2', '1/2' or 'to taste'")
    unit: str = Field("", description="Unit as written by the parser, e.g. 'cup', 'lb'")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Ingredient.name cannot be blank")
        return v

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def _coerce_text(cls, v) -> str:
        # Parsers sometimes hand back numbers or nulls here
        if v is None:
            return ""
        return str(v)

    def normalized_name(self) -> str:
        return self.name.lower().strip()


class Recipe(BaseModel):
    """A user-owned dish. The suggestion engine only ever reads these."""
    id: str
    user_id: str
    name: str
    raw_ingredients: str = ""
    parsed_ingredients: Optional[List[Ingredient]] = None
    primary_protein: Optional[str] = None
    primary_carbohydrate: Optional[str] = None
    primary_vegetable: Optional[str] = None
    last_ordered_at: Optional[datetime] = None
    total_orders: int = Field(0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("primary_protein", "primary_carbohydrate", "primary_vegetable")
    @classmethod
    def _blank_tag_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("total_orders", mode="before")
    @classmethod
    def _missing_orders_is_zero(cls, v):
        return 0 if v is None else v

    def ingredients(self) -> List[Ingredient]:
        """Parsed ingredients, or an empty list when the parser never ran."""
        return list(self.parsed_ingredients or [])

    def category_tags(self) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """Lower-cased (protein, carbohydrate, vegetable) tags used for diversity checks."""
        return (
            self.primary_protein.lower() if self.primary_protein else None,
            self.primary_carbohydrate.lower() if self.primary_carbohydrate else None,
            self.primary_vegetable.lower() if self.primary_vegetable else None,
        )

    def is_complete_meal(self) -> bool:
        return bool(self.primary_protein and self.primary_carbohydrate and self.primary_vegetable)


# ---------- Suggestion domain ----------

StrategyName = Literal["balanced", "random", "fresh", "favorites"]


class SuggestionStrategy:
    """Named scoring policies understood by the scorer."""
    BALANCED = "balanced"
    RANDOM = "random"
    FRESH = "fresh"
    FAVORITES = "favorites"


class SuggestionOptions(BaseModel):
    exclude_recipe_ids: List[str] = Field(default_factory=list)  # "show me different ones"
    strategy: StrategyName = SuggestionStrategy.BALANCED
    random_seed: Optional[int] = None


class RecipeSuggestion(BaseModel):
    recipe: Recipe
    score: float
    reason: str


class SuggestResponse(BaseModel):
    suggestions: List[RecipeSuggestion]
    total_recipes: int = Field(..., ge=0)
    requested_count: int = Field(..., ge=0)


# ---------- Grocery list ----------

class GroceryListRequest(BaseModel):
    recipe_ids: List[str] = Field(..., min_length=1)


class GroceryList(BaseModel):
    items: List[Ingredient] = Field(default_factory=list)


# ---------- Auditing / events ----------

class SuggestionEvent(BaseModel):
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    type: Literal["suggest", "grocery_list"]
    payload: dict
    schema_version: int = 1
