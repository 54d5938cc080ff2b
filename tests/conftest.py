import pytest

from inksheet import Sheet
from inksheet.models import Point, Stroke


@pytest.fixture
def sheet() -> Sheet:
    return Sheet()


@pytest.fixture
def sample_strokes() -> list[Stroke]:
    return [
        Stroke(points=[Point(10, 20, 1), Point(30, 40, 2)], color="#ff0000", width=2.0),
        Stroke(points=[Point(100, 100, 3), Point(200, 100, 4)], color="#00ff00", width=4.0),
        Stroke(points=[Point(50, 300, 5)], color="#0000ff", width=6.0, opacity=50),
    ]


@pytest.fixture
def sheet_with_strokes(sheet, sample_strokes) -> Sheet:
    for stroke in sample_strokes:
        sheet.strokes_state.insert_stroke(stroke)
    sheet.resize_endless()
    return sheet
