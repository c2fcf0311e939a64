"""
Alias resolution for free-text unit spellings.

Maps plurals, abbreviations and symbolic fractions ("tablespoons", "tbsps",
"½ cup", "1/3 tsp") onto canonical registry keys, so conversion code only
ever sees keys that exist in the registry.
"""

import re
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..errors import UnknownUnitError
from .unit_registry import (
    COUNT_KEY,
    MASS_UNITS,
    VOLUME_UNITS,
    UnitCategory,
    category_of,
)

VOLUME_ALIASES = {
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "centiliter": "cl",
    "centiliters": "cl",
    "centilitre": "cl",
    "centilitres": "cl",
    "deciliter": "dl",
    "deciliters": "dl",
    "decilitre": "dl",
    "decilitres": "dl",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",

    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tsps": "tsp",
    "half teaspoon": "half_tsp",
    "half teaspoons": "half_tsp",
    "1/2 tsp": "half_tsp",
    "1/2 teaspoon": "half_tsp",
    "1/2 teaspoons": "half_tsp",
    "½ tsp": "half_tsp",
    "½ teaspoon": "half_tsp",
    "third teaspoon": "third_tsp",
    "third teaspoons": "third_tsp",
    "1/3 tsp": "third_tsp",
    "1/3 teaspoon": "third_tsp",
    "1/3 teaspoons": "third_tsp",
    "⅓ tsp": "third_tsp",
    "⅓ teaspoon": "third_tsp",
    "quarter teaspoon": "qtr_tsp",
    "quarter teaspoons": "qtr_tsp",
    "1/4 tsp": "qtr_tsp",
    "1/4 teaspoon": "qtr_tsp",
    "1/4 teaspoons": "qtr_tsp",
    "¼ tsp": "qtr_tsp",
    "¼ teaspoon": "qtr_tsp",
    "eighth teaspoon": "eighth_tsp",
    "eighth teaspoons": "eighth_tsp",
    "1/8 tsp": "eighth_tsp",
    "1/8 teaspoon": "eighth_tsp",
    "1/8 teaspoons": "eighth_tsp",
    "⅛ tsp": "eighth_tsp",
    "⅛ teaspoon": "eighth_tsp",

    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbsps": "tbsp",
    "tbs": "tbsp",
    "tbl": "tbsp",
    "australian tablespoon": "au_tbsp",
    "australian tablespoons": "au_tbsp",
    "fluid ounce": "fl_oz",
    "fluid ounces": "fl_oz",
    "fl oz": "fl_oz",
    "floz": "fl_oz",

    "cups": "cup",
    "half cup": "half_cup",
    "half cups": "half_cup",
    "1/2 cup": "half_cup",
    "1/2 cups": "half_cup",
    "½ cup": "half_cup",
    "½ cups": "half_cup",
    "third cup": "third_cup",
    "third cups": "third_cup",
    "1/3 cup": "third_cup",
    "1/3 cups": "third_cup",
    "⅓ cup": "third_cup",
    "⅓ cups": "third_cup",
    "quarter cup": "qtr_cup",
    "quarter cups": "qtr_cup",
    "1/4 cup": "qtr_cup",
    "1/4 cups": "qtr_cup",
    "¼ cup": "qtr_cup",
    "¼ cups": "qtr_cup",

    "pint": "pt",
    "pints": "pt",
    "quart": "qt",
    "quarts": "qt",
    "gallon": "gal",
    "gallons": "gal",
    "drops": "drop",
    "dashes": "dash",
    "pinches": "pinch",
    "smidgens": "smidgen",
    "jiggers": "jigger",
    "shot": "jigger",
    "shots": "jigger",
    "gills": "gill",
}

MASS_ALIASES = {
    "microgram": "mcg",
    "micrograms": "mcg",
    "µg": "mcg",
    "ug": "mcg",
    "milligram": "mg",
    "milligrams": "mg",
    "centigram": "cg",
    "centigrams": "cg",
    "decigram": "dg",
    "decigrams": "dg",
    "gram": "g",
    "grams": "g",
    "decagram": "dag",
    "decagrams": "dag",
    "hectogram": "hg",
    "hectograms": "hg",
    "kilogram": "kg",
    "kilograms": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "grain": "gr",
    "grains": "gr",
    "dram": "dr",
    "drams": "dr",
    "ounce": "oz",
    "ounces": "oz",
    "pound": "lb",
    "pounds": "lb",
    "lbs": "lb",
    "stones": "stone",
    "st": "stone",
    "troy ounce": "oz_t",
    "troy ounces": "oz_t",
    "pennyweight": "dwt",
    "pennyweights": "dwt",
}

COUNT_ALIASES = frozenset({
    "count", "piece", "pieces", "item", "items", "each", "ea", "unit", "units",
})


def _clean(text: str) -> str:
    s = text.strip().lower().replace(".", "")
    return re.sub(r"\s+", " ", s)


def _build_alias_table() -> Mapping[str, str]:
    table: Dict[str, str] = {}

    # Display names double as aliases so formatted output always parses back
    for units in (VOLUME_UNITS, MASS_UNITS):
        for key, unit in units.items():
            for spelling in (
                unit.singular_name,
                unit.abbreviation,
                unit.plural_name,
                unit.plural_abbreviation,
            ):
                if spelling:
                    table.setdefault(_clean(spelling), key)

    table.update(VOLUME_ALIASES)
    table.update(MASS_ALIASES)

    for alias, key in table.items():
        # Raises UnknownUnitError at import if an alias points nowhere
        category_of(key)

    return MappingProxyType(table)


UNIT_ALIASES = _build_alias_table()


def _lookup(s: str) -> Optional[str]:
    if s in VOLUME_UNITS or s in MASS_UNITS:
        return s
    if s in UNIT_ALIASES:
        return UNIT_ALIASES[s]
    if s in COUNT_ALIASES:
        return COUNT_KEY
    return None


def resolve_unit(text: str) -> Tuple[str, UnitCategory]:
    """
    Resolve a unit spelling to (canonical_key, category).

    Order: canonical key, alias table, count nouns, then the same lookups
    with a trailing plural "s" removed ("tsps", "kgs").
    """
    s = _clean(text or "")

    key = _lookup(s)
    if key is None and len(s) > 1 and s.endswith("s"):
        key = _lookup(s[:-1])

    if key is None:
        raise UnknownUnitError(f"unknown unit: {text!r}", text)

    return key, category_of(key)
