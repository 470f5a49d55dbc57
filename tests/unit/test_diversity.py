# tests/unit/test_diversity.py
from mealplan.core.diversity import select_diverse
from mealplan.core.models import Recipe, RecipeSuggestion


def cand(rid, protein=None, carb=None, veggie=None, score=100.0):
    recipe = Recipe(
        id=rid, user_id="u1", name=rid,
        primary_protein=protein, primary_carbohydrate=carb, primary_vegetable=veggie,
    )
    return RecipeSuggestion(recipe=recipe, score=score, reason="test")


def ids(selection):
    return [s.recipe.id for s in selection]


def test_conflicting_candidate_accepted_while_quota_unfilled():
    ranked = [
        cand("a", "chicken", "rice", "broccoli"),
        cand("b", "Chicken", "pasta", "peas"),  # same protein as a, different case
        cand("c", "beef", "potato", "carrot"),
    ]
    assert ids(select_diverse(ranked, 2)) == ["a", "b"]


def test_selection_follows_rank_order():
    ranked = [
        cand("a", "chicken", "rice", "broccoli"),
        cand("b", "tofu", "noodles", "broccoli"),
        cand("c", "beef", "potato", "carrot"),
        cand("d", "salmon", "quinoa", "kale"),
    ]
    assert ids(select_diverse(ranked, 3)) == ["a", "b", "c"]


def test_identical_tags_still_fill_quota():
    ranked = [
        cand("a", "chicken", "rice"),
        cand("b", "chicken", "rice"),
        cand("c", "chicken", "pasta"),
    ]
    assert ids(select_diverse(ranked, 2)) == ["a", "b"]
    assert ids(select_diverse(ranked, 3)) == ["a", "b", "c"]


def test_stops_at_count():
    ranked = [cand("a"), cand("b"), cand("c", "chicken")]
    assert ids(select_diverse(ranked, 2)) == ["a", "b"]


def test_small_pool_returns_everything():
    ranked = [cand("a", "chicken"), cand("b", "chicken")]
    assert ids(select_diverse(ranked, 5)) == ["a", "b"]


def test_zero_or_negative_count_returns_nothing():
    ranked = [cand("a"), cand("b")]
    assert select_diverse(ranked, 0) == []
    assert select_diverse(ranked, -3) == []
    assert select_diverse([], 3) == []
