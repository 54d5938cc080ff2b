"""inksheet - freehand note sheet document engine."""

__version__ = "0.1.0"

from inksheet.exceptions import (
    DecodeError,
    DecompressionError,
    SheetError,
    UnsupportedFileTypeError,
)
from inksheet.models import Background, Format, Stroke, StrokesState
from inksheet.sheet import Sheet

__all__ = [
    "Background",
    "DecodeError",
    "DecompressionError",
    "Format",
    "Sheet",
    "SheetError",
    "Stroke",
    "StrokesState",
    "UnsupportedFileTypeError",
]
