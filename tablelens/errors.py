"""Exceptions raised for caller mistakes; malformed table data never raises."""


class TableLensError(ValueError):
    """Base class for tablelens argument errors."""


class UnsupportedFormatError(TableLensError):
    """An export or source format tablelens does not handle."""


class SourceReadError(TableLensError):
    """A source file could not be decoded into table rows."""
