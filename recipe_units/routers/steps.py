"""
Router for recipe step ingredients.

normalize: free-text ingredient lines -> stored representation
    (name, ingredient_type ml/mg/count, quantity in that base unit)
render: stored representation -> "<best quantity> <name>" lines

Nothing is persisted here; callers own storage.
"""

import logging

from fastapi import APIRouter, HTTPException

from ..errors import MeasurementError
from ..parsing import parse_ingredient_string
from ..schemas import StepsStoredPayload, StepsTextPayload, StepStored, StepText, StoredIngredient
from ..services.unit_format import format_stored_ingredient

logger = logging.getLogger("recipe_units.steps")

router = APIRouter()


@router.post("/steps/normalize", response_model=StepsStoredPayload)
def normalize_steps(payload: StepsTextPayload):
    steps = []
    for step in payload.steps:
        ingredients = []
        for line in step.ingredients:
            try:
                parsed = parse_ingredient_string(line)
                base_value, storage_unit = parsed.to_stored()
            except MeasurementError as e:
                logger.warning(f"Rejected ingredient {line!r}: {e}")
                raise HTTPException(status_code=400, detail=f"invalid ingredient {line!r}: {e}")

            ingredients.append(StoredIngredient(
                ingredient_name=parsed.ingredient_name,
                ingredient_type=storage_unit,
                quantity=base_value,
            ))
        steps.append(StepStored(instruction=step.instruction, ingredients=ingredients))

    return StepsStoredPayload(steps=steps)


@router.post("/steps/render", response_model=StepsTextPayload)
def render_steps(payload: StepsStoredPayload):
    steps = []
    for step in payload.steps:
        ingredients = [
            format_stored_ingredient(ing.quantity, ing.ingredient_type, ing.ingredient_name)
            for ing in step.ingredients
        ]
        steps.append(StepText(instruction=step.instruction, ingredients=ingredients))

    return StepsTextPayload(steps=steps)
