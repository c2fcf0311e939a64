"""Pydantic schemas for the recipe-units API.

Request/response models for:
- Unit listing, alias resolution and conversion
- Ingredient line parsing and quantity formatting
- Recipe step normalize/render
"""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .services.unit_registry import BASE_UNITS, UnitCategory


# --- Units ---

class UnitOut(BaseModel):
    key: str
    category: UnitCategory
    to_base_factor: float
    singular_name: str
    abbreviation: str
    plural_name: str
    plural_abbreviation: str
    suppress_in_autoselect: bool


class UnitListResponse(BaseModel):
    items: List[UnitOut]


class UnitResolveRequest(BaseModel):
    text: str


class UnitResolveResponse(BaseModel):
    unit_key: str
    category: UnitCategory


class UnitConvertRequest(BaseModel):
    qty: float
    from_unit: str
    to_unit: str


class UnitConvertResponse(BaseModel):
    qty: float
    unit: str


# --- Parse / Format ---

class IngredientParseRequest(BaseModel):
    text: str


class IngredientParseResponse(BaseModel):
    quantity: float
    unit_key: str
    category: UnitCategory
    ingredient_name: str
    base_value: float
    storage_unit: str


class QuantityFormatRequest(BaseModel):
    base_value: float
    category: Optional[UnitCategory] = None
    storage_unit: Optional[str] = None
    tolerance: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _require_category_or_storage_unit(self):
        if self.category is None and self.storage_unit is None:
            raise ValueError("either category or storage_unit is required")
        if (
            self.category is not None
            and self.storage_unit is not None
            and BASE_UNITS[self.category] != self.storage_unit
        ):
            raise ValueError(
                f"storage_unit {self.storage_unit!r} does not belong to category {self.category.value!r}"
            )
        return self


class QuantityFormatResponse(BaseModel):
    text: str
    qty: float
    unit: str


# --- Recipe Steps ---

class StepText(BaseModel):
    instruction: str
    ingredients: List[str] = []


class StoredIngredient(BaseModel):
    ingredient_name: str
    ingredient_type: str  # ml, mg or count
    quantity: float


class StepStored(BaseModel):
    instruction: str
    ingredients: List[StoredIngredient] = []


class StepsTextPayload(BaseModel):
    steps: List[StepText]


class StepsStoredPayload(BaseModel):
    steps: List[StepStored]
