import io
import xml.etree.ElementTree as ET

from PIL import Image

from inksheet.compose import SVG_NS, XML_HEADER, fmt, wrap_svg_root
from inksheet.geometry import Bounds
from inksheet.models import Point, Stroke


def test_fmt():
    assert fmt(794.0) == "794"
    assert fmt(0.5) == "0.5"
    assert fmt(-0.0001) == "0"
    assert fmt(1.23456) == "1.235"


def test_wrap_svg_root():
    bounds = Bounds(0.0, 0.0, 100.0, 50.0)

    svg = wrap_svg_root("<g />", bounds, bounds, preserve_aspectratio=False)

    assert svg.startswith(f'<svg xmlns="{SVG_NS}"')
    assert 'width="100" height="50"' in svg
    assert 'viewBox="0 0 100 50"' in svg
    assert 'preserveAspectRatio="none"' in svg
    assert "<g />" in svg
    assert svg.endswith("</svg>")


def test_gen_svgs_background_first(sheet_with_strokes):
    """배경 조각이 첫 번째, 스트로크는 컬렉션 순서대로."""
    svgs = sheet_with_strokes.gen_svgs()

    assert len(svgs) == 4
    assert 'class="background"' in svgs[0].svg_data
    assert "#ff0000" in svgs[1].svg_data
    assert "#00ff00" in svgs[2].svg_data
    assert "#0000ff" in svgs[3].svg_data


def test_gen_svgs_background_covers_loosened_bounds(sheet):
    svgs = sheet.gen_svgs()

    assert len(svgs) == 1
    assert svgs[0].bounds == sheet.bounds().loosened(1.0)


def test_gen_svg_document(sheet_with_strokes):
    document = sheet_with_strokes.gen_svg_document()
    width, height = sheet_with_strokes.width, sheet_with_strokes.height

    assert document.startswith(XML_HEADER)
    root = ET.fromstring(document.split("\n", 1)[1])
    assert root.tag == f"{{{SVG_NS}}}svg"
    assert root.get("width") == str(width)
    assert root.get("height") == str(height)
    assert root.get("viewBox") == f"0 0 {width} {height}"
    assert len(root.findall(f"{{{SVG_NS}}}path")) == 3


def test_export_sheet_as_svg(sheet_with_strokes, tmp_path):
    output_path = tmp_path / "sheet.svg"

    future = sheet_with_strokes.export_sheet_as_svg(output_path)

    assert future.result() == output_path
    assert output_path.read_text(encoding="utf-8") == sheet_with_strokes.gen_svg_document()


def test_export_sheet_as_png(sheet, tmp_path):
    sheet.strokes_state.insert_stroke(
        Stroke(points=[Point(100, 100), Point(200, 100)], color="#000000", width=4.0)
    )
    sheet.resize_endless()
    output_path = tmp_path / "sheet.png"

    sheet.export_sheet_as_png(output_path).result()

    image = Image.open(io.BytesIO(output_path.read_bytes()))
    assert image.size == (sheet.width, sheet.height)
    assert image.convert("RGB").getpixel((150, 100)) == (0, 0, 0)
    assert image.convert("RGB").getpixel((10, 10)) == (255, 255, 255)


def test_export_sheet_as_png_scaled(sheet, tmp_path):
    output_path = tmp_path / "sheet@2x.png"

    sheet.export_sheet_as_png(output_path, scale=2.0).result()

    image = Image.open(output_path)
    assert image.size == (2 * sheet.width, 2 * sheet.height)
