# src/inksheet/raster.py
import io

from PIL import Image, ImageDraw

from inksheet.geometry import Bounds
from inksheet.models import Background, StrokesState


def render_png(
    bounds: Bounds,
    background: Background,
    strokes_state: StrokesState,
    scale: float = 1.0,
) -> bytes:
    """배경과 스트로크를 PNG 바이트로 래스터화.

    Args:
        bounds: 시트 영역 (원점 기준)
        background: 배경
        strokes_state: 스트로크 컬렉션
        scale: 출력 배율

    Returns:
        PNG 인코딩된 바이트
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")

    size = (max(1, round(bounds.width * scale)), max(1, round(bounds.height * scale)))
    image = Image.new("RGB", size, background.color)
    # RGBA 모드로 그려야 스트로크 opacity가 배경과 합성됨
    draw = ImageDraw.Draw(image, "RGBA")

    background.draw_on(draw, bounds, scale)
    for stroke in strokes_state.strokes:
        stroke.draw_on(draw, scale)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
