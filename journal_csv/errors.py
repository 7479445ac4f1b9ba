from __future__ import annotations

from typing import Optional


class CSVImportError(Exception):
    """Base for every failure the decoder can report."""

    kind = "import_error"
    row: Optional[int] = None


class InvalidHeader(CSVImportError):
    kind = "invalid_header"

    def __init__(self) -> None:
        super().__init__("The file is not a journal export: the header row does not match.")


class InvalidRow(CSVImportError):
    kind = "invalid_row"

    def __init__(self, index: int) -> None:
        self.row = index
        super().__init__(f"Row {index} could not be read.")


class ParseFailure(CSVImportError):
    kind = "parse_failure"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"The file could not be read: {reason}")
