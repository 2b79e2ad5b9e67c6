"""Exceptions raised at the dashboard's fallible boundaries."""

from __future__ import annotations

from typing import Optional


class SigamiError(Exception):
    """Base error. Carries a human-readable message and a machine code."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or "SIGAMI_ERROR"
        super().__init__(self.message)


class SpreadsheetImportError(SigamiError):
    """The uploaded spreadsheet could not be decoded into rows."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message, "IMPORT_ERROR")
        self.filename = filename
