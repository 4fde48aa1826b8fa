"""Errors raised for malformed input at the public entry points."""

from typing import Optional


class InvalidInputError(ValueError):
    """A request parameter could not be parsed or is missing."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class CsvImportError(ValueError):
    """A CSV upload was rejected; ``row`` is the file line number (header is row 1)."""

    def __init__(self, message: str, row: Optional[int] = None) -> None:
        super().__init__(message if row is None else f"Row {row}: {message}")
        self.row = row
