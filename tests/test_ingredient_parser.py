import pytest

from recipe_units.errors import (
    DivisionByZeroError,
    EmptyInputError,
    InvalidFractionError,
    InvalidQuantityError,
    MissingNameError,
    TooShortError,
)
from recipe_units.parsing import parse_ingredient_string, parse_quantity
from recipe_units.services.unit_registry import UnitCategory

VOLUME = UnitCategory.VOLUME
MASS = UnitCategory.MASS
COUNT = UnitCategory.COUNT


def test_parse_ingredient_string_table():
    cases = [
        ("2 cups flour", 2, "cup", VOLUME, "flour"),
        ("1 tsp salt", 1, "tsp", VOLUME, "salt"),
        ("1/2 cup milk", 0.5, "cup", VOLUME, "milk"),
        ("3 tbsp olive oil", 3, "tbsp", VOLUME, "olive oil"),
        ("1 lb ground beef", 1, "lb", MASS, "ground beef"),
        ("8 oz cream cheese", 8, "oz", MASS, "cream cheese"),
        ("500 g pasta", 500, "g", MASS, "pasta"),
        ("2 fl oz vanilla extract", 2, "fl_oz", VOLUME, "vanilla extract"),
        ("1/4 tsp black pepper", 0.25, "tsp", VOLUME, "black pepper"),
        ("3 eggs", 3, "count", COUNT, "eggs"),
        ("1 onion", 1, "count", COUNT, "onion"),
        ("2 cloves garlic", 2, "count", COUNT, "cloves garlic"),
        ("1 cup all-purpose flour", 1, "cup", VOLUME, "all-purpose flour"),
        ("2 tablespoons butter", 2, "tbsp", VOLUME, "butter"),
        ("1 teaspoon baking powder", 1, "tsp", VOLUME, "baking powder"),
        ("100 grams sugar", 100, "g", MASS, "sugar"),
        ("1 pound chicken breast", 1, "lb", MASS, "chicken breast"),
    ]

    for text, quantity, unit, category, name in cases:
        result = parse_ingredient_string(text)
        assert result.quantity == quantity, text
        assert result.unit_key == unit, text
        assert result.category == category, text
        assert result.ingredient_name == name, text


def test_parse_half_tsp_salt():
    result = parse_ingredient_string("1/2 tsp salt")
    assert result.quantity == 0.5
    assert result.unit_key == "tsp"
    assert result.category == VOLUME
    assert result.ingredient_name == "salt"


def test_parse_fractions():
    cases = [
        ("1/2 cup sugar", 0.5),
        ("1/4 tsp salt", 0.25),
        ("3/4 cup milk", 0.75),
        ("1/3 cup water", 1.0 / 3.0),
        ("2/3 cup broth", 2.0 / 3.0),
        ("1/3 tsp pepper", 1.0 / 3.0),
        ("2/3 tsp paprika", 2.0 / 3.0),
    ]
    for text, quantity in cases:
        result = parse_ingredient_string(text)
        assert abs(result.quantity - quantity) < 0.0001, text


def test_parse_no_quantity():
    for text in ("flour", "salt to taste", "avocado oil, for cooking", "fresh parsley"):
        result = parse_ingredient_string(text)
        assert result.ingredient_name == text
        assert result.quantity == 1
        assert result.unit_key == "count"
        assert result.category == COUNT


def test_parse_trims_and_collapses_whitespace():
    result = parse_ingredient_string("  2   cups    flour  ")
    assert result.quantity == 2
    assert result.unit_key == "cup"
    assert result.ingredient_name == "flour"

    # no-quantity lines keep the trimmed text as-is
    assert parse_ingredient_string("  salt to taste ").ingredient_name == "salt to taste"


def test_parse_mixed_fraction():
    result = parse_ingredient_string("3 1/2 cups flour")
    assert result.quantity == 3.5
    assert result.unit_key == "cup"
    assert result.ingredient_name == "flour"

    result = parse_ingredient_string("1 1/2 tsp salt")
    assert result.quantity == 1.5
    assert result.unit_key == "tsp"


def test_parse_improper_fraction_is_not_fused():
    # "3/2" is not the fractional part of a mixed number
    result = parse_ingredient_string("2 3/2 cups flour")
    assert result.quantity == 2
    assert result.unit_key == "count"
    assert result.ingredient_name == "3/2 cups flour"


def test_parse_vulgar_fractions():
    result = parse_ingredient_string("1½ cups sugar")
    assert result.quantity == 1.5
    assert result.unit_key == "cup"

    result = parse_ingredient_string("½ lemon")
    assert result.quantity == 0.5
    assert result.unit_key == "count"
    assert result.ingredient_name == "lemon"


def test_parse_fractional_display_units():
    # Formatter output for fractional units parses back to the same unit
    result = parse_ingredient_string("½ tsp salt")
    assert result.quantity == 1
    assert result.unit_key == "half_tsp"
    assert result.ingredient_name == "salt"

    result = parse_ingredient_string("2 ½ tsp salt")
    assert result.quantity == 2
    assert result.unit_key == "half_tsp"
    assert result.ingredient_name == "salt"

    result = parse_ingredient_string("⅓ cup oats")
    assert result.quantity == 1
    assert result.unit_key == "third_cup"


def test_parse_three_word_unit():
    result = parse_ingredient_string("2 imp fl oz rum")
    assert result.quantity == 2
    assert result.unit_key == "imp_fl_oz"
    assert result.category == VOLUME
    assert result.ingredient_name == "rum"


def test_parse_attached_unit():
    result = parse_ingredient_string("500g spaghetti")
    assert result.quantity == 500
    assert result.unit_key == "g"
    assert result.category == MASS
    assert result.ingredient_name == "spaghetti"

    result = parse_ingredient_string("2tbsp. honey")
    assert result.quantity == 2
    assert result.unit_key == "tbsp"


def test_parse_count_nouns_are_consumed():
    result = parse_ingredient_string("3 pieces chicken")
    assert result.quantity == 3
    assert result.unit_key == "count"
    assert result.ingredient_name == "chicken"


def test_parse_errors():
    with pytest.raises(EmptyInputError):
        parse_ingredient_string("")

    with pytest.raises(EmptyInputError):
        parse_ingredient_string("   ")

    with pytest.raises(DivisionByZeroError):
        parse_ingredient_string("1/0 cup flour")

    with pytest.raises(TooShortError):
        parse_ingredient_string("123")

    with pytest.raises(TooShortError):
        parse_ingredient_string("3 1/2")

    with pytest.raises(MissingNameError):
        parse_ingredient_string("2 cups")

    with pytest.raises(MissingNameError):
        parse_ingredient_string("2 fl oz")

    with pytest.raises(InvalidQuantityError):
        parse_ingredient_string("2x flour")

    with pytest.raises(InvalidFractionError):
        parse_ingredient_string("1/2/3 cup flour")


def test_parse_error_keeps_input():
    with pytest.raises(MissingNameError) as exc:
        parse_ingredient_string("2 cups")
    assert exc.value.value == "2 cups"
    assert "2 cups" in str(exc.value)


def test_parse_quantity():
    cases = [
        ("1", 1),
        ("2", 2),
        ("0.5", 0.5),
        ("1.5", 1.5),
        (".5", 0.5),
        ("1/2", 0.5),
        ("1/4", 0.25),
        ("3/4", 0.75),
        ("100", 100),
        ("½", 0.5),
        ("1¼", 1.25),
    ]
    for text, expected in cases:
        assert abs(parse_quantity(text) - expected) < 0.0001, text


def test_parse_quantity_errors():
    with pytest.raises(InvalidQuantityError):
        parse_quantity("abc")

    with pytest.raises(InvalidQuantityError):
        parse_quantity("")

    with pytest.raises(InvalidFractionError):
        parse_quantity("1/2/3")

    with pytest.raises(InvalidFractionError):
        parse_quantity("a/2")

    with pytest.raises(DivisionByZeroError):
        parse_quantity("1/0")

    # fraction errors are quantity errors too
    with pytest.raises(InvalidQuantityError):
        parse_quantity("1/0")


def test_parsed_ingredient_to_stored():
    parsed = parse_ingredient_string("1 lb ground beef")
    assert parsed.to_stored() == (453592.0, "mg")

    parsed = parse_ingredient_string("3 eggs")
    assert parsed.to_stored() == (3, "count")

    quantity = parse_ingredient_string("2 cups flour").to_quantity()
    assert quantity.value == 2
    assert quantity.unit_key == "cup"


def test_parse_quantity_rejects_out_of_range_numbers():
    huge = "9" * 400

    with pytest.raises(InvalidQuantityError):
        parse_quantity(huge)

    with pytest.raises(InvalidQuantityError):
        parse_quantity(huge + "/2")

    with pytest.raises(InvalidQuantityError):
        parse_quantity(huge + "½")


def test_parse_rejects_out_of_range_quantities():
    huge = "9" * 400

    with pytest.raises(InvalidQuantityError):
        parse_ingredient_string(huge + " cups flour")

    with pytest.raises(InvalidQuantityError):
        parse_ingredient_string(huge + "g flour")

    with pytest.raises(InvalidQuantityError):
        parse_ingredient_string(huge + " eggs")


def test_to_stored_rejects_overflowing_base_value():
    # the number itself fits in a float, the milligram total does not
    parsed = parse_ingredient_string("9" * 305 + " stone flour")
    assert parsed.unit_key == "stone"

    with pytest.raises(InvalidQuantityError):
        parsed.to_stored()
