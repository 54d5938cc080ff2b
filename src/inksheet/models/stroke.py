import math
from dataclasses import dataclass, field
from typing import Any

from PIL import ImageColor, ImageDraw

from inksheet.compose import Svg, fmt
from inksheet.exceptions import DecodeError
from inksheet.geometry import Bounds
from inksheet.models.fields import (
    read_float,
    read_int,
    read_point,
    read_str,
    require_mapping,
)


@dataclass
class Point:
    x: float
    y: float
    timestamp: int = 0

    @classmethod
    def from_list(cls, data: list) -> "Point":
        timestamp = int(data[2]) if len(data) > 2 else 0
        return cls(x=float(data[0]), y=float(data[1]), timestamp=timestamp)

    def to_list(self) -> list:
        return [float(self.x), float(self.y), self.timestamp]


@dataclass
class Stroke:
    points: list[Point]
    color: str = "#000000"
    width: float = 1.0
    opacity: int = 100

    @classmethod
    def from_path_data(
        cls,
        data: list[list],
        color: str = "#000000",
        width: float = 1.0,
        opacity: int = 100,
    ) -> "Stroke":
        points = [Point.from_list(p) for p in data]
        return cls(points=points, color=color, width=width, opacity=opacity)

    def bounds(self) -> Bounds | None:
        """굵기를 포함한 스트로크 영역. 점이 없으면 None."""
        if not self.points:
            return None

        half = self.width / 2
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return Bounds(min(xs) - half, min(ys) - half, max(xs) + half, max(ys) + half)

    def gen_svg(self) -> Svg:
        bounds = self.bounds()
        if bounds is None:
            return Svg(svg_data="", bounds=Bounds(0.0, 0.0, 0.0, 0.0))

        first = self.points[0]
        parts = [f"M {fmt(first.x)} {fmt(first.y)}"]
        # 점 하나짜리 스트로크도 round cap으로 점이 찍히도록 L을 최소 하나 둔다
        for p in self.points[1:] or self.points:
            parts.append(f"L {fmt(p.x)} {fmt(p.y)}")

        svg_data = (
            f'<path d="{" ".join(parts)}" fill="none" stroke="{self.color}" '
            f'stroke-width="{fmt(self.width)}" stroke-opacity="{fmt(self.opacity / 100)}" '
            f'stroke-linecap="round" stroke-linejoin="round" />'
        )
        return Svg(svg_data=svg_data, bounds=bounds)

    def draw_on(self, draw: ImageDraw.ImageDraw, scale: float = 1.0) -> None:
        if not self.points:
            return

        r, g, b = ImageColor.getrgb(self.color)[:3]
        fill = (r, g, b, round(self.opacity / 100 * 255))
        width = max(1, round(self.width * scale))
        xy = [(p.x * scale, p.y * scale) for p in self.points]

        if len(xy) == 1:
            x, y = xy[0]
            radius = width / 2
            draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=fill)
        else:
            draw.line(xy, fill=fill, width=width, joint="curve")

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_list() for p in self.points],
            "color": self.color,
            "width": float(self.width),
            "opacity": self.opacity,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Stroke":
        data = require_mapping(data, "stroke")
        points = data.get("points", [])
        if not isinstance(points, list):
            raise DecodeError(f"invalid type for `points`: expected array, got {points!r}")

        return cls.from_path_data(
            [read_point(p) for p in points],
            color=read_str(data, "color", "#000000"),
            width=read_float(data, "width", 1.0),
            opacity=read_int(data, "opacity", 100),
        )


@dataclass
class StrokesState:
    """스트로크 컬렉션.

    시트가 사용하는 인터페이스(높이 계산, 스트로크별 SVG, 제자리 교체,
    구조적 직렬화)만 제공한다.
    """

    strokes: list[Stroke] = field(default_factory=list)

    def insert_stroke(self, stroke: Stroke) -> None:
        self.strokes.append(stroke)

    def clear(self) -> None:
        self.strokes.clear()

    def calc_height(self) -> int:
        """모든 스트로크를 담는 데 필요한 높이 (px, 올림). 비어 있으면 0."""
        max_y = 0.0
        for stroke in self.strokes:
            bounds = stroke.bounds()
            if bounds is not None:
                max_y = max(max_y, bounds.max_y)
        return math.ceil(max_y)

    def gen_svgs_for_strokes(self) -> list[Svg]:
        """컬렉션 순서대로 스트로크마다 SVG 조각 하나씩."""
        return [stroke.gen_svg() for stroke in self.strokes]

    def import_state(self, other: "StrokesState") -> None:
        """other의 스트로크로 제자리 교체 (리스트 identity 유지)."""
        self.strokes[:] = [
            Stroke(
                points=[Point(p.x, p.y, p.timestamp) for p in s.points],
                color=s.color,
                width=s.width,
                opacity=s.opacity,
            )
            for s in other.strokes
        ]

    def to_dict(self) -> dict[str, Any]:
        return {"strokes": [s.to_dict() for s in self.strokes]}

    @classmethod
    def from_dict(cls, data: Any) -> "StrokesState":
        data = require_mapping(data, "strokes_state")
        strokes = data.get("strokes", [])
        if not isinstance(strokes, list):
            raise DecodeError(f"invalid type for `strokes`: expected array, got {strokes!r}")
        return cls(strokes=[Stroke.from_dict(s) for s in strokes])
