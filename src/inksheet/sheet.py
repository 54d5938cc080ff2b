import logging
import math
from concurrent.futures import Future
from pathlib import Path

from inksheet.codec import SheetRecord, decode_record, encode_record
from inksheet.compose import XML_HEADER, Svg, wrap_svg_root
from inksheet.exceptions import DecodeError, UnsupportedFileTypeError
from inksheet.fileio import (
    FileType,
    compress_to_gzip,
    decompress_from_gzip,
    ensure_file_type,
    replace_file_async,
)
from inksheet.geometry import Bounds
from inksheet.models import Background, Format, MeasureUnit, StrokesState
from inksheet.raster import render_png

_logger = logging.getLogger(__name__)


class Sheet:
    """시트 문서: 지오메트리, 용지 포맷, 배경, 스트로크 컬렉션.

    format/background/strokes_state 객체는 시트 수명 동안 identity가
    유지된다. 불러오기는 객체를 바꾸지 않고 내용만 교체한다.

    모드:
        endless: height = 콘텐츠 높이 + padding_bottom
        paginated: height = format.height의 양의 정수배
    """

    def __init__(self):
        record = SheetRecord()
        self.version: str = record.version
        self._strokes_state = record.strokes_state
        self._format = record.format
        self._background = record.background
        self.width: int = record.width
        self.height: int = record.height
        self._padding_bottom: int = record.padding_bottom
        self._endless_sheet: bool = record.endless_sheet
        self.format_borders: bool = record.format_borders

    @property
    def strokes_state(self) -> StrokesState:
        return self._strokes_state

    @property
    def format(self) -> Format:
        return self._format

    @property
    def background(self) -> Background:
        return self._background

    @property
    def padding_bottom(self) -> int:
        return self._padding_bottom

    @padding_bottom.setter
    def padding_bottom(self, padding_bottom: int) -> None:
        self._padding_bottom = padding_bottom
        self.resize_endless()

    @property
    def endless_sheet(self) -> bool:
        return self._endless_sheet

    def set_endless_sheet(self, endless_sheet: bool) -> None:
        """모드 변경 후 즉시 resize_to_format() 호출."""
        self._endless_sheet = endless_sheet
        self.resize_to_format()

    def bounds(self) -> Bounds:
        return Bounds(0.0, 0.0, float(self.width), float(self.height))

    def resize_endless(self) -> bool:
        """endless 모드에서 콘텐츠에 맞게 높이 조정.

        Returns:
            높이가 바뀌었으면 True. paginated 모드에서는 항상 False.
        """
        if not self._endless_sheet:
            return False

        new_height = self._strokes_state.calc_height() + self._padding_bottom
        if new_height == self.height:
            return False

        _logger.debug("resizing endless sheet height %d -> %d", self.height, new_height)
        self.height = new_height
        return True

    def resize_to_format(self) -> None:
        """현재 모드에 맞게 높이 재계산."""
        if self._endless_sheet:
            self.resize_endless()
            return

        format_height = self._format.height
        if format_height <= 0:
            _logger.error("cannot paginate sheet with format height %d", format_height)
            return

        # +1: 빈 콘텐츠에서도 최소 한 페이지
        content_height = self._strokes_state.calc_height() + 1
        self.height = math.ceil(content_height / format_height) * format_height

    def calc_n_pages(self) -> int:
        if self._format.height > 0:
            return self.height // self._format.height
        return 0

    def _rescale_to_dpi(self, old_dpi: float, new_dpi: float) -> None:
        """DPI 변경 후 시트 크기를 새 픽셀 공간으로 변환하고 다시 맞춤.

        변환이 resize보다 먼저여야 한다.
        """
        self.width = round(
            MeasureUnit.convert_measurement(self.width, MeasureUnit.PX, old_dpi, MeasureUnit.PX, new_dpi)
        )
        self.height = round(
            MeasureUnit.convert_measurement(self.height, MeasureUnit.PX, old_dpi, MeasureUnit.PX, new_dpi)
        )
        self.resize_to_format()

    def set_format_dpi(self, dpi: float) -> None:
        old_dpi = self._format.dpi
        if self._format.set_dpi(dpi):
            self._rescale_to_dpi(old_dpi, dpi)

    def import_format(self, other: Format) -> None:
        old_dpi = self._format.dpi
        if self._format.import_format(other):
            self._rescale_to_dpi(old_dpi, other.dpi)

    def to_record(self) -> SheetRecord:
        return SheetRecord(
            version=self.version,
            strokes_state=self._strokes_state,
            format=self._format,
            background=self._background,
            width=self.width,
            height=self.height,
            padding_bottom=self._padding_bottom,
            endless_sheet=self._endless_sheet,
            format_borders=self.format_borders,
        )

    @classmethod
    def from_record(cls, record: SheetRecord) -> "Sheet":
        """레코드 값을 그대로 가진 시트 생성. resize는 하지 않음."""
        sheet = cls()
        sheet.version = record.version
        sheet._strokes_state.import_state(record.strokes_state)
        sheet._format.import_format(record.format)
        sheet._background.import_background(record.background)
        sheet.width = record.width
        sheet.height = record.height
        sheet._padding_bottom = record.padding_bottom
        sheet._endless_sheet = record.endless_sheet
        sheet.format_borders = record.format_borders
        return sheet

    def encode(self) -> str:
        return encode_record(self.to_record())

    @classmethod
    def decode(cls, text: str) -> "Sheet":
        return cls.from_record(decode_record(text))

    def import_sheet(self, other: "Sheet") -> None:
        """other의 내용을 제자리에서 가져온 뒤 모드에 맞게 다시 맞춤.

        모드 맞춤은 사본에서 먼저 끝내고 결과만 복사한다. 맞춤 중 예외가
        나면 현재 시트는 바뀌지 않는다.
        """
        staged = Sheet.from_record(other.to_record())
        staged.set_endless_sheet(staged.endless_sheet)
        self._assign_from(staged)

    def _assign_from(self, other: "Sheet") -> None:
        self.version = other.version
        self._strokes_state.import_state(other.strokes_state)
        # width/height를 바로 덮어쓰므로 DPI 변환은 하지 않음
        self._format.import_format(other.format)
        self._background.import_background(other.background)
        self.width = other.width
        self.height = other.height
        self._padding_bottom = other.padding_bottom
        self._endless_sheet = other.endless_sheet
        self.format_borders = other.format_borders

    def open_sheet_from_bytes(self, data: bytes) -> None:
        """압축된 시트 바이트를 불러와 현재 시트에 적용.

        실패하면 현재 시트는 바뀌지 않는다.

        Raises:
            DecompressionError: 압축 해제 실패
            DecodeError: 레코드가 올바르지 않음
        """
        decompressed = decompress_from_gzip(data)
        try:
            text = decompressed.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Sheet record is not valid UTF-8: {e}")

        sheet = Sheet.decode(text)
        try:
            self.import_sheet(sheet)
        except (OverflowError, ValueError) as e:
            # 유한하지만 극단적인 좌표는 높이 계산에서 넘칠 수 있음
            raise DecodeError(f"Sheet geometry out of range: {e}")

    def open_sheet_from_file(self, path: Path | str) -> None:
        self.open_sheet_from_bytes(Path(path).read_bytes())

    def save_sheet_to_file(self, path: Path | str) -> Future | None:
        """네이티브 포맷으로 비동기 저장.

        Returns:
            쓰기 Future. 파일 타입이 맞지 않으면 아무것도 쓰지 않고 None.
        """
        path = Path(path)
        try:
            ensure_file_type(path, FileType.NATIVE)
        except UnsupportedFileTypeError as e:
            _logger.error("invalid file type for saving sheet in native format: %s", e)
            return None

        compressed = compress_to_gzip(self.encode().encode("utf-8"), path.name)
        return replace_file_async(path, compressed, "save_sheet_to_file")

    def gen_svgs(self) -> list[Svg]:
        """배경 조각이 먼저, 그 뒤로 컬렉션 순서대로 스트로크 조각."""
        # 가장자리 스트로크가 잘리지 않도록 1px 여유
        svgs = [self._background.gen_svg(self.bounds().loosened(1.0))]
        svgs.extend(self._strokes_state.gen_svgs_for_strokes())
        return svgs

    def gen_svg_document(self) -> str:
        bounds = self.bounds()
        svg_data = "\n".join(svg.svg_data for svg in self.gen_svgs())
        svg_data = wrap_svg_root(svg_data, bounds, bounds, preserve_aspectratio=True)
        return f"{XML_HEADER}\n{svg_data}\n"

    def export_sheet_as_svg(self, path: Path | str) -> Future:
        return replace_file_async(
            path, self.gen_svg_document().encode("utf-8"), "export_sheet_as_svg"
        )

    def export_sheet_as_png(self, path: Path | str, scale: float = 1.0) -> Future:
        png = render_png(self.bounds(), self._background, self._strokes_state, scale)
        return replace_file_async(path, png, "export_sheet_as_png")
