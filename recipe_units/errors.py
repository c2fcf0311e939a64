"""
Error types raised by the measurement engine.

Every error keeps the offending input on ``.value`` so the HTTP layer can
quote it back to the caller.
"""

from typing import Any


class MeasurementError(Exception):
    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class EmptyInputError(MeasurementError):
    pass


class InvalidQuantityError(MeasurementError):
    pass


class InvalidFractionError(InvalidQuantityError):
    pass


class DivisionByZeroError(InvalidQuantityError):
    pass


class TooShortError(MeasurementError):
    pass


class MissingNameError(MeasurementError):
    pass


class UnknownUnitError(MeasurementError):
    pass


class CategoryMismatchError(MeasurementError):
    pass
