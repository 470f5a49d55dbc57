from __future__ import annotations

import math
import random
from datetime import datetime, timezone
from typing import Optional

from .models import Recipe, SuggestionStrategy

BASE_SCORE = 100.0
RANDOM_SCORE_CEILING = 200.0
SCORE_JITTER = 10.0  # +/- applied to every non-random score

RANDOM_REASON = "Random selection for variety!"
NEVER_TRIED_REASON = "You haven't tried this recipe yet!"


def days_since(ts: datetime, now: Optional[datetime] = None) -> int:
    """Whole days between `ts` and `now`, rounded up. Naive timestamps are read as UTC."""
    now = now or datetime.now(timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = abs((now - ts).total_seconds())
    return math.ceil(seconds / 86400)


def _strategy_bonus(recipe: Recipe, strategy: str, now: Optional[datetime]) -> float:
    bonus = 0.0
    if strategy == SuggestionStrategy.FRESH:
        if recipe.last_ordered_at is None:
            bonus += 50
        else:
            bonus += min(days_since(recipe.last_ordered_at, now), 100)
        if recipe.total_orders == 0:
            bonus += 30
    elif strategy == SuggestionStrategy.FAVORITES:
        bonus += recipe.total_orders * 10
        if recipe.last_ordered_at is not None and days_since(recipe.last_ordered_at, now) < 30:
            bonus += 20
    return bonus


def _balanced_modifiers(recipe: Recipe, now: Optional[datetime]) -> float:
    """Recency, order-count variety and completeness, shared by every non-random strategy."""
    adjust = 0.0

    if recipe.last_ordered_at is None:
        adjust += 30
    else:
        days = days_since(recipe.last_ordered_at, now)
        if days < 7:
            adjust -= 50
        elif days < 14:
            adjust -= 25
        elif days < 30:
            adjust -= 10
        else:
            adjust += 20

    orders = recipe.total_orders
    if orders == 0:
        adjust += 25
    elif orders == 1:
        adjust += 15
    elif orders == 2:
        adjust += 10
    elif orders >= 5:
        adjust -= 10

    if recipe.is_complete_meal():
        adjust += 10
    return adjust


def score_recipe(
    recipe: Recipe,
    strategy: str = SuggestionStrategy.BALANCED,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> float:
    """
    Desirability of `recipe` under `strategy`; higher is suggested first.

    Only the resulting rank order matters. Every strategy except 'random' gets a
    uniform +/-10 jitter so repeated calls with the same history don't return the
    same list. Unknown strategy names score like 'balanced'.
    """
    rng = rng or random
    if strategy == SuggestionStrategy.RANDOM:
        return rng.random() * RANDOM_SCORE_CEILING

    score = BASE_SCORE
    score += _strategy_bonus(recipe, strategy, now)
    score += _balanced_modifiers(recipe, now)
    score += rng.uniform(-SCORE_JITTER, SCORE_JITTER)
    return max(0.0, score)


def recipe_reason(
    recipe: Recipe,
    strategy: str = SuggestionStrategy.BALANCED,
    now: Optional[datetime] = None,
) -> str:
    """Human-readable justification shown next to a suggestion."""
    if strategy == SuggestionStrategy.RANDOM:
        return RANDOM_REASON

    if strategy == SuggestionStrategy.FRESH:
        if recipe.last_ordered_at is None:
            return NEVER_TRIED_REASON
        return "Time to try something different!"

    if strategy == SuggestionStrategy.FAVORITES:
        if recipe.total_orders > 3:
            return "One of your proven favorites!"
        return "Building on what you love!"

    # balanced: first match wins
    if recipe.last_ordered_at is None:
        return NEVER_TRIED_REASON
    days = days_since(recipe.last_ordered_at, now)
    if days > 60:
        return "You haven't made this in a while"
    if days > 30:
        return "Haven't had this in over a month"
    if days > 14:
        return "It's been a couple weeks"
    if recipe.total_orders <= 2:
        return "One of your newer recipes"
    return "A reliable favorite"
