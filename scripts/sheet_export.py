#!/usr/bin/env python3
"""CLI for inksheet."""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from inksheet import Sheet, SheetError
from inksheet.fileio import FileType


def _print_info(sheet: Sheet) -> None:
    fmt = sheet.format
    mode = "endless" if sheet.endless_sheet else "paginated"
    print(f"version: {sheet.version}")
    print(f"mode: {mode}")
    print(f"size: {sheet.width} x {sheet.height} px (padding bottom {sheet.padding_bottom})")
    print(f"format: {fmt.width} x {fmt.height} px @ {fmt.dpi:g} dpi, {fmt.orientation.value}")
    print(f"pages: {sheet.calc_n_pages()}")
    print(f"strokes: {len(sheet.strokes_state.strokes)}")


def main():
    parser = argparse.ArgumentParser(description="저장된 시트를 SVG/PNG로 내보내기")
    parser.add_argument("input", help="입력 시트 파일 (.inksheet)")
    parser.add_argument("output", nargs="?", help="출력 파일 (.svg, .png, .inksheet)")
    parser.add_argument("--scale", type=float, default=1.0, help="PNG 출력 배율")
    parser.add_argument("--paginated", action="store_true", help="페이지 모드로 전환 후 내보내기")
    parser.add_argument("--info", action="store_true", help="시트 정보 출력")
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"오류: {input_path}를 찾을 수 없습니다.")
        sys.exit(1)

    sheet = Sheet()
    try:
        sheet.open_sheet_from_file(input_path)
    except SheetError as e:
        print(f"오류: {input_path.name}를 열 수 없습니다: {e}")
        sys.exit(1)

    if args.paginated:
        sheet.set_endless_sheet(False)

    if args.info:
        _print_info(sheet)

    if args.output is None:
        return

    output_path = Path(args.output)
    file_type = FileType.lookup_file_type(output_path)

    print(f"내보내는 중: {input_path.name} -> {output_path.name}")
    if file_type is FileType.SVG:
        future = sheet.export_sheet_as_svg(output_path)
    elif file_type is FileType.PNG:
        future = sheet.export_sheet_as_png(output_path, scale=args.scale)
    elif file_type is FileType.NATIVE:
        future = sheet.save_sheet_to_file(output_path)
    else:
        print(f"오류: 지원하지 않는 출력 형식입니다: {output_path.suffix}")
        sys.exit(1)

    try:
        future.result()
    except OSError as e:
        print(f"오류: {output_path}에 쓸 수 없습니다: {e}")
        sys.exit(1)

    print(f"완료: {output_path}")


if __name__ == "__main__":
    main()
