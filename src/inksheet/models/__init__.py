from inksheet.models.background import Background, PatternStyle
from inksheet.models.format import Format, MeasureUnit, Orientation, PredefinedFormat
from inksheet.models.stroke import Point, Stroke, StrokesState

__all__ = [
    "Background",
    "Format",
    "MeasureUnit",
    "Orientation",
    "PatternStyle",
    "Point",
    "PredefinedFormat",
    "Stroke",
    "StrokesState",
]
