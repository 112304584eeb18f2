class ConversionError(Exception):
    """Base error for a CSV document that cannot be converted."""


class EmptyDocumentError(ConversionError, ValueError):
    """Raised when no usable lines remain to parse."""

    def __init__(self, message: str = "CSV document is empty"):
        super().__init__(message)


class InvalidUploadError(ConversionError):
    """Raised when an uploaded file does not look like a CSV document."""


class UploadTooLargeError(InvalidUploadError):
    """Raised when an upload exceeds the configured size limit."""
