"""
Router for unit conversion utilities.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..errors import MeasurementError
from ..parsing import parse_ingredient_string
from ..schemas import (
    IngredientParseRequest,
    IngredientParseResponse,
    QuantityFormatRequest,
    QuantityFormatResponse,
    UnitConvertRequest,
    UnitConvertResponse,
    UnitListResponse,
    UnitOut,
    UnitResolveRequest,
    UnitResolveResponse,
)
from ..services.unit_aliases import resolve_unit
from ..services.unit_conversion import convert
from ..services.unit_format import find_best_unit, format_quantity
from ..services.unit_registry import (
    UnitCategory,
    category_for_storage_unit,
    sorted_units,
    units_for_category,
)

logger = logging.getLogger("recipe_units.units")

router = APIRouter()


@router.get("", response_model=UnitListResponse)
def list_units(category: Optional[UnitCategory] = None):
    """
    List registry units, largest first within each category.
    Count has no registry entries.
    """
    categories = [category] if category else [UnitCategory.VOLUME, UnitCategory.MASS]

    items = []
    for cat in categories:
        if cat == UnitCategory.COUNT:
            continue
        table = units_for_category(cat)
        for key in sorted_units(cat):
            unit = table[key]
            items.append(UnitOut(
                key=key,
                category=cat,
                to_base_factor=unit.to_base_factor,
                singular_name=unit.singular_name,
                abbreviation=unit.abbreviation,
                plural_name=unit.plural_name,
                plural_abbreviation=unit.plural_abbreviation or unit.abbreviation,
                suppress_in_autoselect=unit.suppress_in_autoselect,
            ))

    return {"items": items}


@router.post("/resolve", response_model=UnitResolveResponse)
def resolve(req: UnitResolveRequest):
    unit_key, category = resolve_unit(req.text)
    return UnitResolveResponse(unit_key=unit_key, category=category)


@router.post("/parse", response_model=IngredientParseResponse)
def parse_ingredient(req: IngredientParseRequest):
    try:
        parsed = parse_ingredient_string(req.text)
        base_value, storage_unit = parsed.to_stored()
    except MeasurementError as e:
        logger.warning(f"Rejected ingredient {req.text!r}: {e}")
        raise HTTPException(status_code=400, detail=f"invalid ingredient {req.text!r}: {e}")

    return IngredientParseResponse(
        quantity=parsed.quantity,
        unit_key=parsed.unit_key,
        category=parsed.category,
        ingredient_name=parsed.ingredient_name,
        base_value=base_value,
        storage_unit=storage_unit,
    )


@router.post("/convert", response_model=UnitConvertResponse)
def convert_units(req: UnitConvertRequest):
    """
    Convert a quantity from one unit to another.
    Unit spellings go through alias resolution ("tablespoons" -> tbsp).
    """
    from_key, _ = resolve_unit(req.from_unit)
    to_key, _ = resolve_unit(req.to_unit)

    qty = convert(req.qty, from_key, to_key)
    return UnitConvertResponse(qty=qty, unit=to_key)


@router.post("/format", response_model=QuantityFormatResponse)
def format_stored(req: QuantityFormatRequest):
    """Render a base-unit value in its most natural display unit."""
    category = req.category
    if category is None:
        category = category_for_storage_unit(req.storage_unit)

    quantity = find_best_unit(req.base_value, category, req.tolerance)
    return QuantityFormatResponse(
        text=format_quantity(quantity),
        qty=quantity.value,
        unit=quantity.unit_key,
    )
