"""
Unit Conversion Service for recipe-units.

Converts between registry units through each category's base unit.
Volume and mass never mix: converting cups to grams is an error, not an
approximation.
"""

import math
from typing import Iterable, Tuple

from ..errors import (
    CategoryMismatchError,
    EmptyInputError,
    InvalidQuantityError,
    UnknownUnitError,
)
from .unit_aliases import resolve_unit
from .unit_registry import (
    COUNT_KEY,
    Quantity,
    UnitCategory,
    base_unit_for,
    category_of,
    get_derived_unit,
    units_for_category,
)


def to_base(value: float, unit_key: str) -> Tuple[float, UnitCategory]:
    """Convert a value in unit_key to its category's base unit (ml, mg or count)."""
    if unit_key == COUNT_KEY:
        return value, UnitCategory.COUNT

    unit, category = get_derived_unit(unit_key)
    base_value = value * unit.to_base_factor
    if not math.isfinite(base_value):
        raise InvalidQuantityError(f"{value} {unit_key} is out of range", value)
    return base_value, category


def from_base(base_value: float, category: UnitCategory, target_unit_key: str) -> float:
    category = UnitCategory(category)

    if category == UnitCategory.COUNT:
        if target_unit_key != COUNT_KEY:
            raise UnknownUnitError(f"unknown count unit: {target_unit_key}", target_unit_key)
        return base_value

    unit = units_for_category(category).get(target_unit_key)
    if unit is None:
        raise UnknownUnitError(
            f"unknown {category.value} unit: {target_unit_key}", target_unit_key
        )
    return base_value / unit.to_base_factor


def convert(value: float, from_key: str, to_key: str) -> float:
    base_value, category = to_base(value, from_key)
    to_category = category_of(to_key)

    if category != to_category:
        raise CategoryMismatchError(
            f"cannot convert between {from_key} ({category.value}) and {to_key} ({to_category.value})",
            (from_key, to_key),
        )

    return from_base(base_value, category, to_key)


def scale_quantity(quantity: Quantity, factor: float) -> Quantity:
    return quantity.model_copy(update={"value": quantity.value * factor})


def sum_quantities(quantities: Iterable[Quantity]) -> Tuple[float, UnitCategory]:
    """
    Sum quantities of one category.
    Returns (total in base unit, category).
    """
    quantities = list(quantities)
    if not quantities:
        raise EmptyInputError("no quantities to sum")

    category = quantities[0].category
    total = 0.0

    for q in quantities:
        if q.category != category:
            raise CategoryMismatchError(
                f"cannot sum different categories: {category.value} and {q.category.value}",
                q,
            )
        base_value, _ = to_base(q.value, q.unit_key)
        total += base_value

    return total, category


def to_stored_quantity(quantity: float, unit_text: str) -> Tuple[float, str]:
    """
    Resolve a unit spelling and convert to the persisted representation.
    Returns (base_value, storage_unit) where storage_unit is ml, mg or count.
    """
    unit_key, category = resolve_unit(unit_text)
    base_value, _ = to_base(quantity, unit_key)
    return base_value, base_unit_for(category)
