"""
errors.py — Error taxonomy for the dictionary build.

Recoverable (logged, the run continues):
  - MalformedRecord: an input line is not a usable JSON entry
  - EntryRenderError: a single entry could not be rendered

Fatal:
  - OutputDirectoryError: ./output could not be cleared or created
  - OutputWriteError: a document, static page or manifest could not be written
"""

from typing import Optional


class WiktDictError(Exception):
    """Base class for all build errors."""


class MalformedRecord(WiktDictError):
    """An input line failed to parse or lacks a usable headword."""

    def __init__(self, message: str, line_num: Optional[int] = None):
        self.line_num = line_num
        if line_num is not None:
            message = f"line {line_num}: {message}"
        super().__init__(message)


class EntryRenderError(WiktDictError):
    """Rendering one entry failed because of an unexpected data shape."""

    def __init__(self, word: str, detail: str):
        self.word = word
        self.detail = detail
        super().__init__(f"cannot render {word!r}: {detail}")


class OutputDirectoryError(WiktDictError):
    """The output directory could not be cleared or created."""


class OutputWriteError(WiktDictError):
    """A file in the output directory could not be written."""
