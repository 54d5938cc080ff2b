# src/inksheet/models/format.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from inksheet import config
from inksheet.exceptions import DecodeError
from inksheet.models.fields import read_dimension, read_float, read_str, require_mapping


class MeasureUnit(Enum):
    PX = "px"
    MM = "mm"
    CM = "cm"
    INCH = "in"

    def to_inches(self, value: float, dpi: float) -> float:
        if self is MeasureUnit.PX:
            return value / dpi
        if self is MeasureUnit.MM:
            return value / 25.4
        if self is MeasureUnit.CM:
            return value / 2.54
        return value

    def from_inches(self, value: float, dpi: float) -> float:
        if self is MeasureUnit.PX:
            return value * dpi
        if self is MeasureUnit.MM:
            return value * 25.4
        if self is MeasureUnit.CM:
            return value * 2.54
        return value

    @staticmethod
    def convert_measurement(
        value: float,
        from_unit: "MeasureUnit",
        from_dpi: float,
        to_unit: "MeasureUnit",
        to_dpi: float,
    ) -> float:
        """측정값을 다른 단위/DPI로 변환.

        인치로 정규화한 뒤 대상 단위로 변환한다. DPI는 양수여야 하며
        호출자가 검증한다 (0 이하의 DPI는 계약 위반).

        Args:
            value: 변환할 값
            from_unit: 원래 단위
            from_dpi: 원래 DPI
            to_unit: 대상 단위
            to_dpi: 대상 DPI

        Returns:
            변환된 값. 단위와 DPI가 같으면 입력 그대로.
        """
        if from_unit is to_unit and from_dpi == to_dpi:
            return value
        return to_unit.from_inches(from_unit.to_inches(value, from_dpi), to_dpi)


class Orientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class PredefinedFormat(Enum):
    """세로 방향 기준 용지 크기 (mm)."""

    A6 = (105.0, 148.0)
    A5 = (148.0, 210.0)
    A4 = (210.0, 297.0)
    A3 = (297.0, 420.0)
    US_LETTER = (215.9, 279.4)
    US_LEGAL = (215.9, 355.6)

    @property
    def size_mm(self) -> tuple[float, float]:
        return self.value


def _mm_to_px(value: float, dpi: float) -> int:
    return round(
        MeasureUnit.convert_measurement(value, MeasureUnit.MM, dpi, MeasureUnit.PX, dpi)
    )


DEFAULT_WIDTH = _mm_to_px(PredefinedFormat.A4.size_mm[0], config.DEFAULT_DPI)
DEFAULT_HEIGHT = _mm_to_px(PredefinedFormat.A4.size_mm[1], config.DEFAULT_DPI)


@dataclass
class Format:
    """페이지 크기(px), DPI, 방향.

    width/height는 항상 현재 dpi 기준의 픽셀 값이다.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    dpi: float = config.DEFAULT_DPI
    orientation: Orientation = Orientation.PORTRAIT

    @classmethod
    def from_predefined(
        cls,
        preset: PredefinedFormat,
        orientation: Orientation = Orientation.PORTRAIT,
        dpi: float = config.DEFAULT_DPI,
    ) -> "Format":
        width_mm, height_mm = preset.size_mm
        if orientation is Orientation.LANDSCAPE:
            width_mm, height_mm = height_mm, width_mm
        return cls(
            width=_mm_to_px(width_mm, dpi),
            height=_mm_to_px(height_mm, dpi),
            dpi=dpi,
            orientation=orientation,
        )

    def set_dpi(self, dpi: float) -> bool:
        """DPI 변경. 페이지의 물리적 크기가 유지되도록 width/height도 변환.

        Returns:
            저장된 값이 실제로 바뀌었으면 True.
        """
        if dpi == self.dpi:
            return False

        old_dpi = self.dpi
        self.width = round(
            MeasureUnit.convert_measurement(self.width, MeasureUnit.PX, old_dpi, MeasureUnit.PX, dpi)
        )
        self.height = round(
            MeasureUnit.convert_measurement(self.height, MeasureUnit.PX, old_dpi, MeasureUnit.PX, dpi)
        )
        self.dpi = dpi
        return True

    def set_orientation(self, orientation: Orientation) -> None:
        if orientation is self.orientation:
            return
        self.width, self.height = self.height, self.width
        self.orientation = orientation

    def import_format(self, other: "Format") -> bool:
        """other의 모든 필드를 복사.

        Returns:
            dpi 값이 바뀌었으면 True. width/height/orientation 변경은 보고하지 않음.
        """
        dpi_changed = other.dpi != self.dpi
        self.width = other.width
        self.height = other.height
        self.orientation = other.orientation
        self.dpi = other.dpi
        return dpi_changed

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "dpi": float(self.dpi),
            "orientation": self.orientation.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Format":
        data = require_mapping(data, "format")
        default = cls()
        orientation = read_str(data, "orientation", default.orientation.value)
        try:
            orientation_value = Orientation(orientation)
        except ValueError:
            raise DecodeError(f"invalid format orientation: {orientation!r}")

        dpi = read_float(data, "dpi", default.dpi)
        if not math.isfinite(dpi) or dpi <= 0:
            raise DecodeError(f"invalid format dpi: {dpi!r}")

        return cls(
            width=read_dimension(data, "width", default.width),
            height=read_dimension(data, "height", default.height),
            dpi=dpi,
            orientation=orientation_value,
        )
