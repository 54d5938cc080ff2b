import math
from typing import Any

from inksheet import config
from inksheet.exceptions import DecodeError


def read_int(data: dict[str, Any], key: str, default: int) -> int:
    """정수 필드 읽기. bool은 정수로 취급하지 않음."""
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"invalid type for `{key}`: expected integer, got {value!r}")
    return value


def read_float(data: dict[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"invalid type for `{key}`: expected number, got {value!r}")
    try:
        result = float(value)
    except OverflowError:
        raise DecodeError(f"number out of range for `{key}`: {value!r}")
    if not math.isfinite(result):
        raise DecodeError(f"non-finite number for `{key}`: {value!r}")
    return result


def read_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise DecodeError(f"invalid type for `{key}`: expected bool, got {value!r}")
    return value


def read_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise DecodeError(f"invalid type for `{key}`: expected string, got {value!r}")
    return value


def require_mapping(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"invalid type for `{name}`: expected object, got {type(value).__name__}")
    return value


def read_point(value: Any) -> list:
    """[x, y] 또는 [x, y, timestamp] 점 배열 검증.

    x/y는 유한한 수, timestamp는 정수여야 한다.

    Returns:
        [x, y, timestamp] (x, y는 float)
    """
    if not isinstance(value, list) or not 2 <= len(value) <= 3:
        raise DecodeError(f"stroke point must be an array of [x, y, timestamp], got {value!r}")

    coords = {"x": value[0], "y": value[1]}
    x = read_float(coords, "x", 0.0)
    y = read_float(coords, "y", 0.0)
    timestamp = read_int({"timestamp": value[2]}, "timestamp", 0) if len(value) > 2 else 0
    return [x, y, timestamp]


def read_dimension(data: dict[str, Any], key: str, default: int) -> int:
    """픽셀 크기 필드 읽기. 0 이상 MAX_DIMENSION 이하만 허용."""
    value = read_int(data, key, default)
    if not 0 <= value <= config.MAX_DIMENSION:
        raise DecodeError(f"`{key}` out of range: {value}")
    return value
