from __future__ import annotations

from typing import List, Optional, Sequence, Set

from .models import RecipeSuggestion


def _conflicts(tag: Optional[str], used: Set[str]) -> bool:
    return tag is not None and tag in used


def select_diverse(ranked: Sequence[RecipeSuggestion], count: int) -> List[RecipeSuggestion]:
    """
    Greedily pick up to `count` suggestions from `ranked` (best first), tracking
    which primary protein / carbohydrate / vegetable tags are already taken.

    Rules:
    - A candidate with no tag collision is always accepted.
    - A colliding candidate is still accepted while fewer than
      min(count, len(ranked)) have been picked, so the quota is never missed.
    - Tags of every accepted candidate are marked as used.
    - Output keeps selection order.
    """
    target = min(max(count, 0), len(ranked))
    selected: List[RecipeSuggestion] = []
    used_proteins: Set[str] = set()
    used_carbs: Set[str] = set()
    used_veggies: Set[str] = set()

    for suggestion in ranked:
        if len(selected) >= target:
            break

        protein, carb, veggie = suggestion.recipe.category_tags()
        has_conflict = (
            _conflicts(protein, used_proteins)
            or _conflicts(carb, used_carbs)
            or _conflicts(veggie, used_veggies)
        )

        if not has_conflict or len(selected) < target:
            selected.append(suggestion)
            if protein:
                used_proteins.add(protein)
            if carb:
                used_carbs.add(carb)
            if veggie:
                used_veggies.add(veggie)

    return selected
