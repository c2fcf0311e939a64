import pytest

from recipe_units.errors import UnknownUnitError
from recipe_units.services.unit_aliases import UNIT_ALIASES, resolve_unit
from recipe_units.services.unit_registry import (
    MASS_UNITS,
    VOLUME_UNITS,
    UnitCategory,
    category_of,
)


def test_resolve_canonical_keys():
    assert resolve_unit("tbsp") == ("tbsp", UnitCategory.VOLUME)
    assert resolve_unit("half_cup") == ("half_cup", UnitCategory.VOLUME)
    assert resolve_unit("lb") == ("lb", UnitCategory.MASS)


def test_resolve_normalizes_case_and_whitespace():
    assert resolve_unit("  Cups ") == ("cup", UnitCategory.VOLUME)
    assert resolve_unit("TABLESPOONS") == ("tbsp", UnitCategory.VOLUME)
    assert resolve_unit("fl   oz") == ("fl_oz", UnitCategory.VOLUME)


def test_resolve_aliases():
    assert resolve_unit("tablespoons") == ("tbsp", UnitCategory.VOLUME)
    assert resolve_unit("tbsps") == ("tbsp", UnitCategory.VOLUME)
    assert resolve_unit("teaspoon") == ("tsp", UnitCategory.VOLUME)
    assert resolve_unit("litres") == ("l", UnitCategory.VOLUME)
    assert resolve_unit("pounds") == ("lb", UnitCategory.MASS)
    assert resolve_unit("lbs") == ("lb", UnitCategory.MASS)
    assert resolve_unit("grams") == ("g", UnitCategory.MASS)
    assert resolve_unit("kilo") == ("kg", UnitCategory.MASS)


def test_resolve_fraction_units():
    assert resolve_unit("½ cup") == ("half_cup", UnitCategory.VOLUME)
    assert resolve_unit("1/2 tsp") == ("half_tsp", UnitCategory.VOLUME)
    assert resolve_unit("1/3 tsp") == ("third_tsp", UnitCategory.VOLUME)
    assert resolve_unit("⅓ tsp") == ("third_tsp", UnitCategory.VOLUME)
    assert resolve_unit("1/3 cup") == ("third_cup", UnitCategory.VOLUME)
    assert resolve_unit("⅓ cup") == ("third_cup", UnitCategory.VOLUME)
    assert resolve_unit("¼ cups") == ("qtr_cup", UnitCategory.VOLUME)
    assert resolve_unit("⅛ teaspoon") == ("eighth_tsp", UnitCategory.VOLUME)


def test_resolve_trailing_periods():
    assert resolve_unit("tbsp.") == ("tbsp", UnitCategory.VOLUME)
    assert resolve_unit("fl. oz.") == ("fl_oz", UnitCategory.VOLUME)
    assert resolve_unit("oz.") == ("oz", UnitCategory.MASS)


def test_resolve_plural_fallback():
    assert resolve_unit("kgs") == ("kg", UnitCategory.MASS)
    assert resolve_unit("qts") == ("qt", UnitCategory.VOLUME)


def test_resolve_count_nouns():
    for alias in ("count", "piece", "pieces", "item", "items", "each", "ea", "unit", "units"):
        assert resolve_unit(alias) == ("count", UnitCategory.COUNT)


def test_resolve_unknown():
    with pytest.raises(UnknownUnitError) as exc:
        resolve_unit("glarps")
    assert exc.value.value == "glarps"

    with pytest.raises(UnknownUnitError):
        resolve_unit("")

    # clove is deliberately not a unit: "2 cloves garlic" keeps it in the name
    with pytest.raises(UnknownUnitError):
        resolve_unit("cloves")


def test_aliases_point_at_registry_keys():
    for alias, key in UNIT_ALIASES.items():
        assert category_of(key) in (UnitCategory.VOLUME, UnitCategory.MASS), alias


def test_display_names_resolve_to_their_unit():
    # Everything the formatter can print must parse back
    for table in (VOLUME_UNITS, MASS_UNITS):
        for key, unit in table.items():
            spellings = [
                unit.singular_name,
                unit.abbreviation,
                unit.plural_name,
                unit.plural_abbreviation or unit.abbreviation,
            ]
            for spelling in spellings:
                assert resolve_unit(spelling)[0] == key, spelling


def test_resolve_is_deterministic():
    assert resolve_unit("tablespoons") == resolve_unit("tablespoons")
