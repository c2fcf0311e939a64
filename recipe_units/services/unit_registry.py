"""
Unit Registry for recipe-units.

Static tables of every known volume and mass unit, keyed by canonical unit key.
Base units: ml (volume), mg (mass), count (dimensionless).

The tables are built once at import time and exposed read-only.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import UnknownUnitError

# --- Types ---

class UnitCategory(str, Enum):
    VOLUME = "volume"
    MASS = "mass"
    COUNT = "count"


class DerivedUnit(BaseModel):
    model_config = ConfigDict(frozen=True)

    canonical_key: str
    to_base_factor: float = Field(gt=0)
    singular_name: str
    abbreviation: str
    plural_name: str
    plural_abbreviation: Optional[str] = None
    # Parseable, but never chosen by find_best_unit
    suppress_in_autoselect: bool = False

    def abbreviation_for(self, value: float) -> str:
        if value == 1:
            return self.abbreviation
        return self.plural_abbreviation or self.abbreviation


COUNT_KEY = "count"

BASE_UNITS = MappingProxyType({
    UnitCategory.VOLUME: "ml",
    UnitCategory.MASS: "mg",
    UnitCategory.COUNT: COUNT_KEY,
})


def _unit(key, factor, name, abbrev, plural, plural_abbrev=None, suppress=False) -> DerivedUnit:
    return DerivedUnit(
        canonical_key=key,
        to_base_factor=factor,
        singular_name=name,
        abbreviation=abbrev,
        plural_name=plural,
        plural_abbreviation=plural_abbrev,
        suppress_in_autoselect=suppress,
    )


# --- Data Tables ---

_VOLUME = [
    _unit("ml", 1, "milliliter", "ml", "milliliters"),
    _unit("cl", 10, "centiliter", "cl", "centiliters", suppress=True),
    _unit("dl", 100, "deciliter", "dl", "deciliters", suppress=True),
    _unit("l", 1000, "liter", "l", "liters"),

    _unit("tsp", 4.92892, "teaspoon", "tsp", "teaspoons"),
    _unit("half_tsp", 2.46446, "half teaspoon", "½ tsp", "half teaspoons"),
    _unit("third_tsp", 1.64297, "third teaspoon", "⅓ tsp", "third teaspoons"),
    _unit("qtr_tsp", 1.23223, "quarter teaspoon", "¼ tsp", "quarter teaspoons"),
    _unit("eighth_tsp", 0.616115, "eighth teaspoon", "⅛ tsp", "eighth teaspoons"),
    _unit("tbsp", 14.7868, "tablespoon", "tbsp", "tablespoons"),
    _unit("au_tbsp", 20, "australian tablespoon", "au tbsp", "australian tablespoons", suppress=True),
    _unit("fl_oz", 29.5735, "fluid ounce", "fl oz", "fluid ounces", suppress=True),
    _unit("jigger", 44.3603, "jigger", "jigger", "jiggers", "jiggers", suppress=True),
    _unit("cup", 236.588, "cup", "cup", "cups", "cups"),
    _unit("half_cup", 118.294, "half cup", "½ cup", "half cups"),
    _unit("third_cup", 78.8627, "third cup", "⅓ cup", "third cups"),
    _unit("qtr_cup", 59.147, "quarter cup", "¼ cup", "quarter cups"),
    _unit("gill", 118.294, "gill", "gill", "gills", "gills", suppress=True),
    _unit("pt", 473.176, "pint", "pt", "pints", suppress=True),
    _unit("qt", 946.353, "quart", "qt", "quarts"),
    _unit("gal", 3785.41, "gallon", "gal", "gallons"),

    _unit("drop", 0.05, "drop", "drop", "drops", "drops", suppress=True),
    _unit("smidgen", 0.115522, "smidgen", "smidgen", "smidgens", "smidgens", suppress=True),
    _unit("pinch", 0.231043, "pinch", "pinch", "pinches", "pinches"),
    _unit("dash", 0.462086, "dash", "dash", "dashes", "dashes"),

    _unit("imp_tsp", 5.91939, "imperial teaspoon", "imp tsp", "imperial teaspoons", suppress=True),
    _unit("imp_tbsp", 17.7582, "imperial tablespoon", "imp tbsp", "imperial tablespoons", suppress=True),
    _unit("imp_fl_oz", 28.4131, "imperial fluid ounce", "imp fl oz", "imperial fluid ounces", suppress=True),
    _unit("imp_cup", 284.131, "imperial cup", "imp cup", "imperial cups", suppress=True),
    _unit("imp_pt", 568.261, "imperial pint", "imp pt", "imperial pints", suppress=True),
    _unit("imp_qt", 1136.52, "imperial quart", "imp qt", "imperial quarts", suppress=True),
    _unit("imp_gal", 4546.09, "imperial gallon", "imp gal", "imperial gallons", suppress=True),
]

_MASS = [
    _unit("mcg", 0.001, "microgram", "mcg", "micrograms"),
    _unit("mg", 1, "milligram", "mg", "milligrams"),
    _unit("cg", 10, "centigram", "cg", "centigrams", suppress=True),
    _unit("dg", 100, "decigram", "dg", "decigrams", suppress=True),
    _unit("g", 1000, "gram", "g", "grams"),
    _unit("dag", 10000, "decagram", "dag", "decagrams", suppress=True),
    _unit("hg", 100000, "hectogram", "hg", "hectograms", suppress=True),
    _unit("kg", 1000000, "kilogram", "kg", "kilograms"),

    _unit("gr", 64.79891, "grain", "gr", "grains", suppress=True),
    _unit("dr", 1771.8452, "dram", "dr", "drams", suppress=True),
    _unit("oz", 28349.5, "ounce", "oz", "ounces"),
    _unit("lb", 453592, "pound", "lb", "pounds"),
    _unit("stone", 6350293, "stone", "st", "stone", suppress=True),

    _unit("oz_t", 31103.5, "troy ounce", "oz t", "troy ounces", suppress=True),
    _unit("dwt", 1555.17, "pennyweight", "dwt", "pennyweights", suppress=True),
]

VOLUME_UNITS: Mapping[str, DerivedUnit] = MappingProxyType({u.canonical_key: u for u in _VOLUME})
MASS_UNITS: Mapping[str, DerivedUnit] = MappingProxyType({u.canonical_key: u for u in _MASS})

_TABLES = MappingProxyType({
    UnitCategory.VOLUME: VOLUME_UNITS,
    UnitCategory.MASS: MASS_UNITS,
})

# Rendered without a leading "1" when the value is exactly one
FRACTIONAL_UNITS = frozenset({
    "half_tsp", "third_tsp", "qtr_tsp", "eighth_tsp",
    "half_cup", "third_cup", "qtr_cup",
})


def _sort_by_factor(table: Mapping[str, DerivedUnit]) -> Tuple[str, ...]:
    return tuple(sorted(table, key=lambda k: (-table[k].to_base_factor, k)))


_SORTED_UNITS = MappingProxyType({
    UnitCategory.VOLUME: _sort_by_factor(VOLUME_UNITS),
    UnitCategory.MASS: _sort_by_factor(MASS_UNITS),
})


# --- Lookups ---

def get_derived_unit(unit_key: str) -> Tuple[DerivedUnit, UnitCategory]:
    """Look up a registry entry and the category it belongs to."""
    for category, table in _TABLES.items():
        if unit_key in table:
            return table[unit_key], category
    raise UnknownUnitError(f"unknown unit: {unit_key}", unit_key)


def category_of(unit_key: str) -> UnitCategory:
    if unit_key == COUNT_KEY:
        return UnitCategory.COUNT
    return get_derived_unit(unit_key)[1]


def units_for_category(category: UnitCategory) -> Mapping[str, DerivedUnit]:
    """Registry table for a measured category. Count has no table."""
    table = _TABLES.get(UnitCategory(category))
    if table is None:
        raise UnknownUnitError(f"category {category} has no unit table", category)
    return table


def list_units_for_category(category: UnitCategory) -> Tuple[str, ...]:
    category = UnitCategory(category)
    if category == UnitCategory.COUNT:
        return (COUNT_KEY,)
    return tuple(_TABLES[category])


def sorted_units(category: UnitCategory) -> Tuple[str, ...]:
    """Keys of a measured category ordered by factor, largest first."""
    category = UnitCategory(category)
    if category == UnitCategory.COUNT:
        return (COUNT_KEY,)
    return _SORTED_UNITS[category]


def base_unit_for(category: UnitCategory) -> str:
    return BASE_UNITS[UnitCategory(category)]


def category_for_storage_unit(storage_unit: str) -> UnitCategory:
    """
    Map a persisted ingredient type (ml, mg or count) back to its category.
    Stored quantities are always expressed in their category's base unit.
    """
    for category, base in BASE_UNITS.items():
        if base == storage_unit:
            return category
    raise UnknownUnitError(f"unknown storage unit: {storage_unit}", storage_unit)


# --- Quantity ---

class Quantity(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float
    unit_key: str
    category: UnitCategory

    @model_validator(mode="after")
    def _check_unit_in_category(self):
        if self.category == UnitCategory.COUNT:
            if self.unit_key != COUNT_KEY:
                raise UnknownUnitError(f"unknown count unit: {self.unit_key}", self.unit_key)
        elif self.unit_key not in _TABLES[self.category]:
            raise UnknownUnitError(
                f"unknown {self.category.value} unit: {self.unit_key}", self.unit_key
            )
        return self
