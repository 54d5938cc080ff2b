import pytest

from inksheet.exceptions import (
    DecodeError,
    DecompressionError,
    SheetError,
    UnsupportedFileTypeError,
)


def test_decompression_error():
    with pytest.raises(DecompressionError) as exc_info:
        raise DecompressionError("not a gzip file")

    assert "not a gzip file" in str(exc_info.value)


def test_decode_error():
    with pytest.raises(DecodeError) as exc_info:
        raise DecodeError("duplicate field `width`")

    assert "duplicate field `width`" in str(exc_info.value)


def test_exceptions_inherit_from_sheet_error():
    assert issubclass(DecompressionError, SheetError)
    assert issubclass(DecodeError, SheetError)
    assert issubclass(UnsupportedFileTypeError, SheetError)
    assert issubclass(SheetError, Exception)
