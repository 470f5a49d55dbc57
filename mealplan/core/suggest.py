from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, List, Optional, Sequence

from .diversity import select_diverse
from .models import Recipe, RecipeSuggestion, SuggestionOptions
from .scoring import RANDOM_REASON, recipe_reason, score_recipe

logger = logging.getLogger(__name__)

SORT_JITTER = 5.0  # independent of the per-score jitter in scoring.py
FALLBACK_SCORE_CEILING = 100.0


def clamp_count(count: Any, pool_size: int) -> int:
    """Coerce a requested count into [0, pool_size]; anything non-numeric means 'as many as possible'."""
    try:
        n = int(count)
    except (TypeError, ValueError, OverflowError):
        return pool_size
    return max(0, min(n, pool_size))


def _random_fallback(recipes: Sequence[Recipe], count: int, rng: random.Random) -> List[RecipeSuggestion]:
    shuffled = list(recipes)
    rng.shuffle(shuffled)
    return [
        RecipeSuggestion(recipe=r, score=rng.random() * FALLBACK_SCORE_CEILING, reason=RANDOM_REASON)
        for r in shuffled[: clamp_count(count, len(shuffled))]
    ]


def suggest_recipes(
    all_recipes: Sequence[Recipe],
    count: Any = 3,
    options: Optional[SuggestionOptions] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[RecipeSuggestion]:
    """
    Pick `count` recipes to cook next from a user's history.

    Steps: drop excluded ids, score every remaining recipe with the chosen
    strategy, sort by score plus a small independent jitter, then run the
    diversity selector. If the exclusions remove everything, fall back to a
    random pick from the full pool so callers still get suggestions.

    Not deterministic unless `rng` or `options.random_seed` is given.
    """
    if not all_recipes:
        return []

    options = options or SuggestionOptions()
    if rng is None:
        rng = random.Random(options.random_seed) if options.random_seed is not None else random.Random()

    excluded = set(options.exclude_recipe_ids)
    available = [r for r in all_recipes if r.id not in excluded]

    if not available:
        logger.debug(
            "All %d recipes excluded; falling back to random selection", len(all_recipes)
        )
        return _random_fallback(all_recipes, count, rng)

    scored = [
        RecipeSuggestion(
            recipe=r,
            score=score_recipe(r, options.strategy, rng=rng, now=now),
            reason=recipe_reason(r, options.strategy, now=now),
        )
        for r in available
    ]

    # One jitter draw per candidate, taken before sorting
    keyed = [(s.score + rng.uniform(-SORT_JITTER, SORT_JITTER), s) for s in scored]
    keyed.sort(key=lambda pair: pair[0], reverse=True)
    ranked = [s for _, s in keyed]

    selected = select_diverse(ranked, clamp_count(count, len(ranked)))
    logger.debug(
        "Suggested %d of %d candidates (%d excluded, strategy=%s)",
        len(selected), len(available), len(all_recipes) - len(available), options.strategy,
    )
    return selected
