from __future__ import annotations

import re
from typing import Dict, Iterable, List

from .models import Ingredient, Recipe

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_quantity(text: str) -> float:
    """
    Best-effort numeric value of a quantity string.

    Reads the leading number only ("2 large" -> 2.0, "1.5" -> 1.5). Anything
    without a leading number ("to taste", "a pinch", "") counts as 0.
    """
    m = _LEADING_NUMBER.match(text or "")
    if not m:
        return 0.0
    try:
        return float(m.group(0))
    except ValueError:
        return 0.0


def format_quantity(value: float) -> str:
    value = round(value, 6)  # avoid float drift
    if value.is_integer():
        return str(int(value))
    return str(value)


class _Group:
    __slots__ = ("name", "quantity", "unit", "mixed")

    def __init__(self, first: Ingredient):
        self.name = first.normalized_name()
        self.quantity = first.quantity
        self.unit = first.unit  # first-seen unit wins
        self.mixed = False

    def add(self, ing: Ingredient) -> None:
        if not self.mixed and ing.unit == self.unit:
            total = parse_quantity(self.quantity) + parse_quantity(ing.quantity)
            self.quantity = format_quantity(total)
        else:
            # Different units can't be summed; keep both readable
            self.mixed = True
            self.quantity = f"{self.quantity} + {ing.quantity} {ing.unit}"

    def to_ingredient(self) -> Ingredient:
        return Ingredient(name=self.name, quantity=self.quantity, unit=self.unit)


def consolidate_ingredients(ingredients: Iterable[Ingredient]) -> List[Ingredient]:
    """
    Merge duplicate ingredients into one shopping-list line per name.

    Rules:
    - Names are grouped lower-cased and trimmed; the output uses that form.
    - Same unit as the group => quantities are summed (unparsable ones count as 0).
    - Different unit => " + {quantity} {unit}" is appended to the quantity text and
      the group stops summing from then on.
    - A name seen once keeps its quantity text untouched.

    Output is sorted by name.
    """
    groups: Dict[str, _Group] = {}
    for ing in ingredients:
        key = ing.normalized_name()
        if key in groups:
            groups[key].add(ing)
        else:
            groups[key] = _Group(ing)

    merged = [g.to_ingredient() for g in groups.values()]
    merged.sort(key=lambda it: it.name.lower())
    return merged


def grocery_list_for(recipes: Iterable[Recipe]) -> List[Ingredient]:
    """Consolidated shopping list for a set of recipes (recipes never parsed contribute nothing)."""
    lines: List[Ingredient] = []
    for recipe in recipes:
        lines.extend(recipe.ingredients())
    return consolidate_ingredients(lines)
