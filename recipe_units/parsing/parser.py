from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..services.unit_conversion import to_base
from ..services.unit_registry import Quantity, UnitCategory, base_unit_for


class ParsedIngredient(BaseModel):
    """
    One parsed ingredient line. quantity is the literal number from the
    text, expressed in unit_key (not yet converted to the base unit).
    """
    model_config = ConfigDict(frozen=True)

    quantity: float
    unit_key: str
    category: UnitCategory
    ingredient_name: str = Field(min_length=1)

    def to_quantity(self) -> Quantity:
        return Quantity(value=self.quantity, unit_key=self.unit_key, category=self.category)

    def to_stored(self) -> Tuple[float, str]:
        """(base_value, storage_unit) as persisted alongside the ingredient name."""
        base_value, category = to_base(self.quantity, self.unit_key)
        return base_value, base_unit_for(category)
