import json
import logging

import pytest

from inksheet import Sheet
from inksheet.codec import FIELDS, SheetRecord, decode_record, encode_record, record_to_dict
from inksheet.exceptions import DecodeError
from inksheet.models import Background, Format, Orientation, PatternStyle


@pytest.fixture
def custom_sheet(sheet_with_strokes) -> Sheet:
    sheet = sheet_with_strokes
    sheet.import_format(Format(width=1000, height=1400, dpi=96.0, orientation=Orientation.PORTRAIT))
    sheet.background.import_background(
        Background(color="#fffff0", pattern=PatternStyle.GRID, pattern_size=16.0)
    )
    sheet.width = 1000
    sheet.format_borders = False
    sheet.set_endless_sheet(False)
    return sheet


def _assert_equivalent(decoded: Sheet, original: Sheet) -> None:
    assert decoded.version == original.version
    assert decoded.width == original.width
    assert decoded.height == original.height
    assert decoded.padding_bottom == original.padding_bottom
    assert decoded.endless_sheet == original.endless_sheet
    assert decoded.format_borders == original.format_borders
    assert decoded.format == original.format
    assert decoded.background == original.background
    assert decoded.strokes_state == original.strokes_state


def test_encode_writes_all_fields_in_order(sheet):
    data = json.loads(sheet.encode())

    assert tuple(data.keys()) == FIELDS


def test_roundtrip(custom_sheet):
    decoded = Sheet.decode(custom_sheet.encode())

    _assert_equivalent(decoded, custom_sheet)


def test_roundtrip_endless(sheet_with_strokes):
    decoded = Sheet.decode(sheet_with_strokes.encode())

    _assert_equivalent(decoded, sheet_with_strokes)


def test_decode_positional_record(custom_sheet):
    """배열(위치 기준) 레코드도 같은 시트로 복원."""
    positional = list(record_to_dict(custom_sheet.to_record()).values())

    decoded = Sheet.decode(json.dumps(positional))

    _assert_equivalent(decoded, custom_sheet)


def test_decode_with_only_strokes_state(caplog):
    """strokes_state만 있으면 나머지는 기본값, 경고만 남김."""
    with caplog.at_level(logging.WARNING, logger="inksheet.codec"):
        decoded = Sheet.decode(json.dumps({"strokes_state": {"strokes": []}}))

    default = Sheet()
    _assert_equivalent(decoded, default)
    for name in FIELDS:
        if name != "strokes_state":
            assert f"missing field `{name}`" in caplog.text
    assert "missing field `strokes_state`" not in caplog.text


def test_decode_short_positional_record_uses_defaults(caplog):
    with caplog.at_level(logging.WARNING, logger="inksheet.codec"):
        record = decode_record(json.dumps(["9.9.9", {"strokes": []}]))

    assert record.version == "9.9.9"
    assert record.format == Format()
    assert record.endless_sheet is True
    assert "missing field `format_borders`" in caplog.text


def test_decode_long_positional_record_ignores_extra():
    values = list(record_to_dict(SheetRecord()).values()) + ["extra"]

    record = decode_record(json.dumps(values))

    assert record == SheetRecord()


def test_decode_duplicate_field_fails():
    text = '{"width": 100, "height": 200, "width": 300}'

    with pytest.raises(DecodeError, match="duplicate field `width`"):
        decode_record(text)


@pytest.mark.parametrize(
    "text",
    [
        '{"format": {"dpi": 96.0, "dpi": 192.0}}',
        '{"strokes_state": {"strokes": [{"color": "#000000", "color": "#ff0000"}]}}',
        '[{"x": 1, "x": 2}]',
    ],
)
def test_decode_nested_duplicate_field_fails(text):
    """중첩된 객체의 중복 키도 거부."""
    with pytest.raises(DecodeError, match="duplicate field"):
        decode_record(text)


        decode_record(text)


def test_decode_ignores_unknown_fields():
    text = json.dumps({"x": 1, "y": {"nested": True}, "width": 500})

    record = decode_record(text)

    assert record.width == 500


def test_decoder_does_not_resize():
    """디코더는 저장된 지오메트리를 그대로 둠."""
    text = json.dumps({"height": 5000, "endless_sheet": True, "strokes_state": {"strokes": []}})

    decoded = Sheet.decode(text)

    assert decoded.height == 5000


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "42",
        '"sheet"',
        '{"width": "wide"}',
        '{"width": true}',
        '{"width": 0}',
        '{"height": -1}',
        '{"endless_sheet": 1}',
        '{"version": 3}',
        '{"format": []}',
        '{"background": {"pattern": "waves"}}',
        '{"strokes_state": {"strokes": [{"points": [[1]]}]}}',
        '{"width": 99999999999}',
        '{"format": {"dpi": NaN}}',
        '{"format": {"dpi": Infinity}}',
        '{"format": {"dpi": -Infinity}}',
        '{"format": {"width": 1e999}}',
        '{"background": {"pattern_size": 1e-9}}',
        '{"strokes_state": {"strokes": [{"points": [[1, 1e999, 0]]}]}}',
        '{"strokes_state": {"strokes": [{"points": [[1, 2, 1e999]]}]}}',
        '{"strokes_state": {"strokes": [{"points": [[1, 2, 1.5]]}]}}',
        '{"strokes_state": {"strokes": [{"points": [[1, 2]], "width": NaN}]}}',
    ],
)
def test_decode_malformed_record_fails(text):
    with pytest.raises(DecodeError):
        decode_record(text)


def test_encode_record_matches_sheet_encode(custom_sheet):
    assert encode_record(custom_sheet.to_record()) == custom_sheet.encode()
