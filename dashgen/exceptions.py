"""
Error taxonomy for DashGen.

Ingestion errors abort the pipeline and are reported to the caller.
Memory errors are raised by pattern stores and always recovered by
the pattern memory layer.
"""


class DashGenError(Exception):
    """Base exception for all DashGen errors."""
    pass


class IngestionError(DashGenError):
    """Base exception for errors raised while loading an uploaded file."""
    pass


class UnsupportedFormatError(IngestionError):
    """Raised when the file extension has no registered parser."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension or '<none>'}")


class EmptyDatasetError(IngestionError):
    """Raised when a file parses to zero usable rows."""
    pass


class ParseError(IngestionError):
    """Raised when CSV, JSON or spreadsheet content is malformed."""
    pass


class MemoryUnavailableError(DashGenError):
    """Raised when the pattern store cannot be read or written."""
    pass
