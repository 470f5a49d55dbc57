# tests/test_consolidate.py
from mealplan.core.consolidate import consolidate_ingredients, grocery_list_for, parse_quantity
from mealplan.core.models import Ingredient, Recipe


def test_consolidate_sums_quantities_for_same_unit():
    out = consolidate_ingredients([
        Ingredient(name="flour", quantity="1", unit="cup"),
        Ingredient(name="Flour", quantity="2", unit="cup"),
    ])
    assert len(out) == 1
    assert out[0].name == "flour"
    assert out[0].quantity == "3"
    assert out[0].unit == "cup"


def test_consolidate_appends_mixed_units_and_keeps_first_unit():
    out = consolidate_ingredients([
        Ingredient(name="rice", quantity="1", unit="cup"),
        Ingredient(name="rice", quantity="1", unit="lb"),
    ])
    assert len(out) == 1
    assert out[0].quantity == "1 + 1 lb"
    assert out[0].unit == "cup"


def test_consolidate_stops_summing_once_units_are_mixed():
    out = consolidate_ingredients([
        Ingredient(name="rice", quantity="1", unit="cup"),
        Ingredient(name="rice", quantity="1", unit="lb"),
        Ingredient(name="rice", quantity="2", unit="cup"),
    ])
    assert out[0].quantity == "1 + 1 lb + 2 cup"


def test_consolidate_leaves_distinct_names_untouched():
    items = [
        Ingredient(name="salt", quantity="to taste", unit=""),
        Ingredient(name="onion", quantity="1/2", unit="whole"),
        Ingredient(name="butter", quantity="2", unit="tbsp"),
    ]
    out = consolidate_ingredients(items)
    assert {(i.name, i.quantity, i.unit) for i in out} == {
        ("salt", "to taste", ""),
        ("onion", "1/2", "whole"),
        ("butter", "2", "tbsp"),
    }


def test_consolidate_is_sorted_by_name():
    out = consolidate_ingredients([
        Ingredient(name="Bananas", quantity="1", unit="piece"),
        Ingredient(name="apple", quantity="1", unit="piece"),
        Ingredient(name="Carrot", quantity="1", unit="g"),
    ])
    assert [i.name for i in out] == ["apple", "bananas", "carrot"]


def test_unparsable_quantities_count_as_zero_when_summing():
    out = consolidate_ingredients([
        Ingredient(name="salt", quantity="a pinch", unit="tsp"),
        Ingredient(name="salt", quantity="2", unit="tsp"),
    ])
    assert out[0].quantity == "2"


def test_fractional_sums_have_no_float_drift():
    out = consolidate_ingredients([
        Ingredient(name="milk", quantity="0.1", unit="l"),
        Ingredient(name="milk", quantity="0.2", unit="l"),
    ])
    assert out[0].quantity == "0.3"


def test_parse_quantity_reads_leading_number():
    assert parse_quantity("2 large") == 2.0
    assert parse_quantity("1.5") == 1.5
    assert parse_quantity("to taste") == 0.0
    assert parse_quantity("") == 0.0


def test_grocery_list_skips_unparsed_recipes():
    parsed = Recipe(
        id="r1", user_id="u1", name="Chicken & Rice", raw_ingredients="...",
        parsed_ingredients=[
            Ingredient(name="rice", quantity="1", unit="cup"),
            Ingredient(name="chicken breast", quantity="1", unit="lb"),
        ],
    )
    also_parsed = Recipe(
        id="r2", user_id="u1", name="Fried Rice", raw_ingredients="...",
        parsed_ingredients=[Ingredient(name="Rice", quantity="2", unit="cup")],
    )
    unparsed = Recipe(id="r3", user_id="u1", name="Mystery", raw_ingredients="some stuff")
    out = grocery_list_for([parsed, also_parsed, unparsed])
    assert [(i.name, i.quantity, i.unit) for i in out] == [
        ("chicken breast", "1", "lb"),
        ("rice", "3", "cup"),
    ]
