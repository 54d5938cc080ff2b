# src/inksheet/fileio.py
import gzip
import io
import logging
import zlib
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from pathlib import Path

from inksheet import config
from inksheet.exceptions import DecompressionError, UnsupportedFileTypeError

_logger = logging.getLogger(__name__)

# 워커 하나: 같은 파일에 대한 쓰기 순서가 요청 순서대로 유지됨
_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="inksheet-io")


class FileType(Enum):
    NATIVE = config.NATIVE_FILE_EXTENSION
    SVG = ".svg"
    PNG = ".png"
    UNKNOWN = ""

    @classmethod
    def lookup_file_type(cls, path: Path | str) -> "FileType":
        suffix = Path(path).suffix.lower()
        for file_type in cls:
            if file_type is not cls.UNKNOWN and file_type.value == suffix:
                return file_type
        return cls.UNKNOWN


def ensure_file_type(path: Path | str, expected: FileType) -> None:
    """path가 expected 타입이 아니면 UnsupportedFileTypeError."""
    actual = FileType.lookup_file_type(path)
    if actual is not expected:
        raise UnsupportedFileTypeError(
            f"invalid file type for {Path(path).name}: expected {expected.name}, got {actual.name}"
        )


def compress_to_gzip(data: bytes, file_name: str) -> bytes:
    """gzip 압축. file_name은 gzip 헤더의 원본 파일명으로 들어감."""
    buffer = io.BytesIO()
    with gzip.GzipFile(filename=file_name, mode="wb", fileobj=buffer) as gz:
        gz.write(data)
    return buffer.getvalue()


def decompress_from_gzip(data: bytes) -> bytes:
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionError(f"Failed to decompress sheet data: {e}")


def _replace_file(path: Path, data: bytes) -> Path:
    with open(path, "wb") as f:
        f.write(data)
    return path


def replace_file_async(path: Path | str, data: bytes, operation: str) -> "Future[Path]":
    """백그라운드에서 파일을 data로 교체.

    실패는 done 콜백에서 로그로만 보고되고 Future에 예외로 남는다.
    재시도/롤백/타임아웃/취소는 없다.

    Args:
        path: 대상 파일 경로
        data: 기록할 바이트
        operation: 로그에 남길 호출 작업 이름

    Returns:
        완료 시 대상 경로를 결과로 가지는 Future
    """
    path = Path(path)
    future = _executor.submit(_replace_file, path, data)

    def _report(done: "Future[Path]") -> None:
        error = done.exception()
        if error is not None:
            _logger.error("replace_file() failed in %s() with Err %s", operation, error)
        else:
            _logger.debug("%s() wrote %d bytes to %s", operation, len(data), path)

    future.add_done_callback(_report)
    return future
