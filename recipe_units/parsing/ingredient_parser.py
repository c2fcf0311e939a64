import logging
import math
import re
from typing import List, Optional, Tuple

from ..errors import (
    DivisionByZeroError,
    EmptyInputError,
    InvalidFractionError,
    InvalidQuantityError,
    MissingNameError,
    TooShortError,
    UnknownUnitError,
)
from ..services.unit_aliases import resolve_unit
from ..services.unit_registry import COUNT_KEY, UnitCategory
from .parser import ParsedIngredient

logger = logging.getLogger("recipe_units.parsing")

VULGAR_FRACTIONS = {
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
}

# Multi-word units are tried longest first ("imp fl oz", "fl oz", "oz")
MAX_UNIT_WORDS = 3

_NUMBER_RE = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")
_INTEGER_RE = re.compile(r"^[0-9]+$")
_FRACTION_RE = re.compile(r"^[0-9]+/[0-9]+$")
_DIGIT_RE = re.compile(r"[0-9]")
# "500g", "2tbsp": number glued to its unit
_ATTACHED_UNIT_RE = re.compile(r"^([0-9][0-9./]*)([^0-9./].*)$")


def _looks_numeric(token: str) -> bool:
    return bool(_DIGIT_RE.search(token)) or token[0] in VULGAR_FRACTIONS


def parse_quantity(token: str) -> float:
    """
    Parse a single quantity token.

    Accepts decimals ("2", "1.5", ".5"), simple fractions ("3/4") and
    vulgar fraction glyphs, alone or after a whole number ("½", "1½").
    """
    s = token.strip()
    if not s:
        raise InvalidQuantityError(f"invalid quantity {token!r}", token)

    glyph = VULGAR_FRACTIONS.get(s[-1])
    if glyph is not None:
        whole = s[:-1]
        if whole and not _INTEGER_RE.match(whole):
            raise InvalidQuantityError(f"invalid quantity {token!r}", token)
        value = (float(whole) if whole else 0.0) + glyph
    elif "/" in s:
        pieces = s.split("/")
        if len(pieces) != 2 or not all(_NUMBER_RE.match(p) for p in pieces):
            raise InvalidFractionError(f"invalid fraction {token!r}", token)
        numerator, denominator = float(pieces[0]), float(pieces[1])
        if denominator == 0:
            raise DivisionByZeroError(f"division by zero in {token!r}", token)
        value = numerator / denominator
    elif _NUMBER_RE.match(s):
        value = float(s)
    else:
        raise InvalidQuantityError(f"invalid quantity {token!r}", token)

    # Digit strings past float range come back as inf
    if not math.isfinite(value):
        raise InvalidQuantityError(f"quantity out of range {token!r}", token)
    return value


def _match_unit(
    parts: List[str], start: int, min_words: int = 1
) -> Optional[Tuple[str, UnitCategory, int]]:
    """Longest unit spelling beginning at parts[start]. Returns (key, category, end)."""
    for width in range(MAX_UNIT_WORDS, min_words - 1, -1):
        end = start + width
        if end > len(parts):
            continue
        try:
            unit_key, category = resolve_unit(" ".join(parts[start:end]))
        except UnknownUnitError:
            continue
        return unit_key, category, end
    return None


def _split_attached_unit(token: str) -> Optional[Tuple[float, str, UnitCategory]]:
    match = _ATTACHED_UNIT_RE.match(token)
    if not match:
        return None
    try:
        unit_key, category = resolve_unit(match.group(2))
    except UnknownUnitError:
        return None
    return parse_quantity(match.group(1)), unit_key, category


def _build(text: str, parts: List[str], quantity: float, unit_key: str,
           category: UnitCategory, end: int) -> ParsedIngredient:
    name = " ".join(parts[end:])
    if not name:
        raise MissingNameError(f"no ingredient name found in {text!r}", text)
    return ParsedIngredient(
        quantity=quantity,
        unit_key=unit_key,
        category=category,
        ingredient_name=name,
    )


def parse_ingredient_string(text: str) -> ParsedIngredient:
    """
    Parse a line like "2 cups flour", "1/2 tsp salt" or "3 eggs".

    Lines that don't start with a number ("salt to taste") become one
    count of the whole line. A number with no recognised unit after it is a
    count ("3 eggs"). Mixed fractions ("3 1/2 cups") are fused into one
    quantity.
    """
    s = (text or "").strip()
    if not s:
        raise EmptyInputError("empty ingredient string", text)

    parts = s.split()
    first = parts[0]

    if not _looks_numeric(first):
        return ParsedIngredient(
            quantity=1.0,
            unit_key=COUNT_KEY,
            category=UnitCategory.COUNT,
            ingredient_name=s,
        )

    # "½ tsp salt" is how one fractional display unit is rendered
    if first in VULGAR_FRACTIONS:
        match = _match_unit(parts, 0, min_words=2)
        if match:
            unit_key, category, end = match
            return _build(s, parts, 1.0, unit_key, category, end)

    try:
        quantity = parse_quantity(first)
    except DivisionByZeroError:
        raise
    except InvalidQuantityError:
        attached = _split_attached_unit(first)
        if attached is None:
            raise
        quantity, unit_key, category = attached
        return _build(s, parts, quantity, unit_key, category, 1)

    idx = 1
    if _INTEGER_RE.match(first) and len(parts) > 1 and _FRACTION_RE.match(parts[1]):
        fraction = parse_quantity(parts[1])
        if fraction < 1:
            quantity += fraction
            idx = 2

    if len(parts) <= idx:
        raise TooShortError(f"ingredient string too short: {s!r}", text)

    match = _match_unit(parts, idx)
    if match is None:
        # No unit token: the quantity counts whole items
        logger.debug(f"No unit in {s!r}, treating {parts[idx]!r} as part of the name")
        unit_key, category, end = COUNT_KEY, UnitCategory.COUNT, idx
    else:
        unit_key, category, end = match

    return _build(s, parts, quantity, unit_key, category, end)
