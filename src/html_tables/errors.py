"""Exceptions raised while extracting tables from HTML.

Span-class errors (``InvalidCellSpanError``, ``OverlapSpanError``) only ever
disqualify a single table; the orchestrator catches them and moves on.
``InvalidURLError`` on the document URL is fatal for the whole call.
"""


class TableExtractorError(Exception):
    """Base class for all extraction errors.  Carries the offending raw value."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class InvalidCellSpanError(TableExtractorError):
    """A colspan/rowspan attribute is not a number, or a colspan overflows the grid."""


class OverlapSpanError(TableExtractorError):
    """A rowspan projected from an earlier row collides with a colspan placement."""


class InvalidURLError(TableExtractorError, ValueError):
    """The document URL cannot be used as a base for resolution or ids."""
