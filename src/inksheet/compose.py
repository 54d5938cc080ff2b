"""SVG 조각(fragment) 타입과 문서 루트 생성."""

from dataclasses import dataclass

from inksheet import config
from inksheet.geometry import Bounds

SVG_NS = "http://www.w3.org/2000/svg"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>'


@dataclass
class Svg:
    """하위 엔티티 하나가 기여하는 SVG 조각."""

    svg_data: str
    bounds: Bounds


def fmt(value: float, *, decimals: int = config.SVG_FLOAT_DECIMALS) -> str:
    """float를 결정적인 SVG 숫자 문자열로 변환."""
    text = f"{float(value):.{decimals}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def wrap_svg_root(
    svg_data: str,
    bounds: Bounds | None = None,
    viewbox: Bounds | None = None,
    preserve_aspectratio: bool = True,
) -> str:
    """SVG 조각들을 하나의 <svg> 루트로 감싼다.

    Args:
        svg_data: 루트 안에 넣을 SVG 텍스트
        bounds: 루트의 x/y/width/height. None이면 생략
        viewbox: viewBox 영역. None이면 생략
        preserve_aspectratio: False면 preserveAspectRatio="none"
    """
    attrs = [f'xmlns="{SVG_NS}"']
    if bounds is not None:
        attrs.append(f'x="{fmt(bounds.min_x)}"')
        attrs.append(f'y="{fmt(bounds.min_y)}"')
        attrs.append(f'width="{fmt(bounds.width)}"')
        attrs.append(f'height="{fmt(bounds.height)}"')
    if viewbox is not None:
        attrs.append(
            f'viewBox="{fmt(viewbox.min_x)} {fmt(viewbox.min_y)} '
            f'{fmt(viewbox.width)} {fmt(viewbox.height)}"'
        )
    attrs.append(f'preserveAspectRatio="{"xMidYMid" if preserve_aspectratio else "none"}"')

    return f"<svg {' '.join(attrs)}>\n{svg_data}\n</svg>"
