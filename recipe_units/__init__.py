"""recipe-units: ingredient quantity parsing, unit conversion and display."""

__version__ = "0.1.0"
