from .parser import ParsedIngredient
from .ingredient_parser import parse_ingredient_string, parse_quantity, VULGAR_FRACTIONS

__all__ = ["ParsedIngredient", "parse_ingredient_string", "parse_quantity", "VULGAR_FRACTIONS"]
