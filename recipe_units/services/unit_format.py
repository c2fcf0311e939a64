"""
Best-unit selection and display formatting.

Stored quantities are plain numbers in a base unit. For display we search the
registry for the largest unit that expresses the value as a (near) whole
number, e.g. 2.46446 ml -> "½ tsp", 453592 mg -> "1 lb".
"""

import math
from typing import Optional

from ..settings import settings
from .unit_registry import (
    COUNT_KEY,
    FRACTIONAL_UNITS,
    Quantity,
    UnitCategory,
    base_unit_for,
    category_for_storage_unit,
    get_derived_unit,
    sorted_units,
    units_for_category,
)


def is_near_integer(value: float, tolerance: float) -> bool:
    if not math.isfinite(value):
        return False
    rounded = round(value)
    if rounded == 0:
        return False
    return abs(value - rounded) / rounded <= tolerance


def find_best_unit(
    base_value: float,
    category: UnitCategory,
    tolerance: Optional[float] = None,
) -> Quantity:
    """
    Find the largest displayable unit in which base_value is within
    tolerance of a whole number (and at least 1).

    Falls back to the base unit with the raw value when nothing fits, so this
    never fails.
    """
    category = UnitCategory(category)
    if tolerance is None:
        tolerance = settings.unit_integer_tolerance

    if category == UnitCategory.COUNT:
        return Quantity(value=base_value, unit_key=COUNT_KEY, category=category)

    # inf/nan have no whole-number form in any unit
    if not math.isfinite(base_value):
        return Quantity(value=base_value, unit_key=base_unit_for(category), category=category)

    table = units_for_category(category)
    for unit_key in sorted_units(category):
        unit = table[unit_key]
        if unit.suppress_in_autoselect:
            continue
        candidate = base_value / unit.to_base_factor
        if candidate >= 1 and is_near_integer(candidate, tolerance):
            return Quantity(value=float(round(candidate)), unit_key=unit_key, category=category)

    return Quantity(value=base_value, unit_key=base_unit_for(category), category=category)


def _format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    if value < 0.1:
        return f"{value:.3f}"
    if value < 10:
        return f"{value:.2f}"
    return f"{value:.1f}"


def format_quantity(quantity: Quantity) -> str:
    """Render a quantity, e.g. "2 cups", "½ tsp", "2 ½ tsp", "1.50 tsp"."""
    if quantity.category == UnitCategory.COUNT:
        return f"{quantity.value:.0f}"

    unit, _ = get_derived_unit(quantity.unit_key)
    abbrev = unit.abbreviation_for(quantity.value)

    # "½ tsp" rather than "1 ½ tsp"
    if quantity.unit_key in FRACTIONAL_UNITS and quantity.value == 1:
        return abbrev

    return f"{_format_number(quantity.value)} {abbrev}"


def format_best(base_value: float, category: UnitCategory) -> str:
    return format_quantity(find_best_unit(base_value, category))


def format_stored_ingredient(base_value: float, storage_unit: str, name: str) -> str:
    """Render a persisted ingredient (base value + ml/mg/count type) with its name."""
    category = category_for_storage_unit(storage_unit)
    return f"{format_best(base_value, category)} {name}"
