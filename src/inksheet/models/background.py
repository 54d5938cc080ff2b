# src/inksheet/models/background.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from PIL import ImageDraw

from inksheet import config
from inksheet.compose import Svg, fmt
from inksheet.exceptions import DecodeError
from inksheet.geometry import Bounds
from inksheet.models.fields import read_float, read_str, require_mapping


class PatternStyle(Enum):
    NONE = "none"
    LINES = "lines"
    GRID = "grid"
    DOTS = "dots"


@dataclass
class Background:
    color: str = config.DEFAULT_BACKGROUND_COLOR
    pattern: PatternStyle = PatternStyle.NONE
    pattern_size: float = config.DEFAULT_PATTERN_SIZE
    pattern_color: str = config.DEFAULT_PATTERN_COLOR

    DOT_RADIUS = 1.5
    LINE_WIDTH = 1.0

    def import_background(self, other: "Background") -> None:
        """other의 상태를 제자리에서 복사 (객체 identity 유지)."""
        self.color = other.color
        self.pattern = other.pattern
        self.pattern_size = other.pattern_size
        self.pattern_color = other.pattern_color

    def _pattern_steps(self, start: float, end: float) -> list[float]:
        """[start, end] 안의 pattern_size 배수 좌표 목록."""
        if not self.pattern_size >= config.MIN_PATTERN_SIZE:  # NaN 포함
            return []
        first = math.ceil(start / self.pattern_size)
        last = math.floor(end / self.pattern_size)
        return [i * self.pattern_size for i in range(first, last + 1)]

    def gen_svg(self, bounds: Bounds) -> Svg:
        """bounds 전체를 덮는 배경 SVG 조각 생성."""
        parts = [
            f'<rect x="{fmt(bounds.min_x)}" y="{fmt(bounds.min_y)}" '
            f'width="{fmt(bounds.width)}" height="{fmt(bounds.height)}" '
            f'fill="{self.color}" />'
        ]

        xs = self._pattern_steps(bounds.min_x, bounds.max_x)
        ys = self._pattern_steps(bounds.min_y, bounds.max_y)

        if self.pattern in (PatternStyle.LINES, PatternStyle.GRID):
            segments = [
                f"M {fmt(bounds.min_x)} {fmt(y)} L {fmt(bounds.max_x)} {fmt(y)}" for y in ys
            ]
            if self.pattern is PatternStyle.GRID:
                segments.extend(
                    f"M {fmt(x)} {fmt(bounds.min_y)} L {fmt(x)} {fmt(bounds.max_y)}" for x in xs
                )
            if segments:
                parts.append(
                    f'<path d="{" ".join(segments)}" fill="none" '
                    f'stroke="{self.pattern_color}" stroke-width="{fmt(self.LINE_WIDTH)}" />'
                )
        elif self.pattern is PatternStyle.DOTS:
            dots = [
                f'<circle cx="{fmt(x)}" cy="{fmt(y)}" r="{fmt(self.DOT_RADIUS)}" />'
                for y in ys
                for x in xs
            ]
            if dots:
                parts.append(f'<g fill="{self.pattern_color}">{"".join(dots)}</g>')

        return Svg(svg_data=f'<g class="background">{"".join(parts)}</g>', bounds=bounds)

    def draw_on(self, draw: ImageDraw.ImageDraw, bounds: Bounds, scale: float = 1.0) -> None:
        """Pillow ImageDraw에 배경 그리기 (PNG 내보내기용)."""
        draw.rectangle(
            [bounds.min_x * scale, bounds.min_y * scale, bounds.max_x * scale, bounds.max_y * scale],
            fill=self.color,
        )

        xs = self._pattern_steps(bounds.min_x, bounds.max_x)
        ys = self._pattern_steps(bounds.min_y, bounds.max_y)
        line_width = max(1, round(self.LINE_WIDTH * scale))

        if self.pattern in (PatternStyle.LINES, PatternStyle.GRID):
            for y in ys:
                draw.line(
                    [(bounds.min_x * scale, y * scale), (bounds.max_x * scale, y * scale)],
                    fill=self.pattern_color,
                    width=line_width,
                )
            if self.pattern is PatternStyle.GRID:
                for x in xs:
                    draw.line(
                        [(x * scale, bounds.min_y * scale), (x * scale, bounds.max_y * scale)],
                        fill=self.pattern_color,
                        width=line_width,
                    )
        elif self.pattern is PatternStyle.DOTS:
            r = self.DOT_RADIUS * scale
            for y in ys:
                for x in xs:
                    draw.ellipse(
                        [x * scale - r, y * scale - r, x * scale + r, y * scale + r],
                        fill=self.pattern_color,
                    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "color": self.color,
            "pattern": self.pattern.value,
            "pattern_size": float(self.pattern_size),
            "pattern_color": self.pattern_color,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Background":
        data = require_mapping(data, "background")
        default = cls()
        pattern = read_str(data, "pattern", default.pattern.value)
        try:
            pattern_value = PatternStyle(pattern)
        except ValueError:
            raise DecodeError(f"invalid background pattern: {pattern!r}")

        pattern_size = read_float(data, "pattern_size", default.pattern_size)
        if pattern_size < config.MIN_PATTERN_SIZE:
            raise DecodeError(
                f"background pattern_size must be at least {config.MIN_PATTERN_SIZE}, got {pattern_size!r}"
            )

        return cls(
            color=read_str(data, "color", default.color),
            pattern=pattern_value,
            pattern_size=pattern_size,
            pattern_color=read_str(data, "pattern_color", default.pattern_color),
        )
