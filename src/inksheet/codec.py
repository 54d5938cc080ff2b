"""시트 문서 레코드 직렬화.

레코드는 JSON 객체(필드 이름 기준) 또는 JSON 배열(필드 위치 기준)로
읽을 수 있다. 쓰기는 항상 고정된 필드 순서의 JSON 객체다.

디코딩 정책:
    - 누락된 필드는 오류가 아니다. 경고 로그를 남기고 기본 문서의 값을 쓴다.
    - 알 수 없는 필드는 읽고 버린다 (새 버전 writer 호환).
    - 어느 깊이에서든 같은 키가 두 번 나오면 DecodeError.
    - NaN, Infinity, 범위를 넘는 수(1e999 등)는 DecodeError.
    - 필드 타입이 잘못되면 DecodeError.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from inksheet import config
from inksheet.exceptions import DecodeError
from inksheet.models import Background, Format, StrokesState
from inksheet.models.fields import read_bool, read_dimension, read_str

_logger = logging.getLogger(__name__)

FIELDS = (
    "version",
    "strokes_state",
    "format",
    "background",
    "width",
    "height",
    "padding_bottom",
    "endless_sheet",
    "format_borders",
)


@dataclass
class SheetRecord:
    """시트 문서 한 건의 모든 필드. 기본값이 곧 기본 문서다."""

    version: str = config.APP_VERSION
    strokes_state: StrokesState = field(default_factory=StrokesState)
    format: Format = field(default_factory=Format)
    background: Background = field(default_factory=Background)
    width: int = Format().width
    height: int = Format().height
    padding_bottom: int = Format().height
    endless_sheet: bool = True
    format_borders: bool = True


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """object_pairs_hook: 모든 깊이의 JSON 객체에서 중복 키 거부."""
    record: dict[str, Any] = {}
    for key, value in pairs:
        if key in record:
            raise DecodeError(f"duplicate field `{key}`")
        record[key] = value
    return record


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise DecodeError(f"number out of range: {text}")
    return value


def _reject_constant(name: str) -> Any:
    raise DecodeError(f"non-finite number not allowed: {name}")


def record_to_dict(record: SheetRecord) -> dict[str, Any]:
    return {
        "version": record.version,
        "strokes_state": record.strokes_state.to_dict(),
        "format": record.format.to_dict(),
        "background": record.background.to_dict(),
        "width": record.width,
        "height": record.height,
        "padding_bottom": record.padding_bottom,
        "endless_sheet": record.endless_sheet,
        "format_borders": record.format_borders,
    }


def encode_record(record: SheetRecord) -> str:
    return json.dumps(record_to_dict(record), ensure_ascii=False)


def _fields_from_mapping(obj: dict[str, Any]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, value in obj.items():
        if key not in FIELDS:
            _logger.debug("ignoring unknown sheet field `%s`", key)
            continue
        values[key] = value
    return values


def _fields_from_sequence(obj: list[Any]) -> dict[str, Any]:
    if len(obj) > len(FIELDS):
        _logger.warning(
            "ignoring %d trailing elements in sheet record", len(obj) - len(FIELDS)
        )
    return dict(zip(FIELDS, obj))


def record_from_obj(obj: Any) -> SheetRecord:
    """파싱된 JSON 값(객체 또는 배열)에서 SheetRecord 생성."""
    if isinstance(obj, dict):
        values = _fields_from_mapping(obj)
    elif isinstance(obj, list):
        values = _fields_from_sequence(obj)
    else:
        raise DecodeError(
            f"invalid sheet record: expected object or array, got {type(obj).__name__}"
        )

    for name in FIELDS:
        if name not in values:
            _logger.warning("missing field `%s` in sheet record, using default", name)

    default = SheetRecord()
    record = SheetRecord(
        version=read_str(values, "version", default.version),
        strokes_state=(
            StrokesState.from_dict(values["strokes_state"])
            if "strokes_state" in values
            else default.strokes_state
        ),
        format=Format.from_dict(values["format"]) if "format" in values else default.format,
        background=(
            Background.from_dict(values["background"])
            if "background" in values
            else default.background
        ),
        width=read_dimension(values, "width", default.width),
        height=read_dimension(values, "height", default.height),
        padding_bottom=read_dimension(values, "padding_bottom", default.padding_bottom),
        endless_sheet=read_bool(values, "endless_sheet", default.endless_sheet),
        format_borders=read_bool(values, "format_borders", default.format_borders),
    )

    if record.width == 0:
        raise DecodeError(f"invalid sheet width: {record.width}")

    return record


def decode_record(text: str) -> SheetRecord:
    try:
        obj = json.loads(
            text,
            object_pairs_hook=_reject_duplicate_keys,
            parse_float=_parse_finite_float,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise DecodeError(f"Failed to parse sheet record: {e}")
    return record_from_obj(obj)
