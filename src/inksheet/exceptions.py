class SheetError(Exception):
    """Base exception for inksheet."""

    pass


class DecompressionError(SheetError):
    """Raised when the compressed sheet bytes are corrupt."""

    pass


class DecodeError(SheetError):
    """Raised when the document record is malformed."""

    pass


class UnsupportedFileTypeError(SheetError):
    """Raised when a file has the wrong type for the requested operation."""

    pass
