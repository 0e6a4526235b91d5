#!/usr/bin/env python
"""
Extraction Errors

Exception hierarchy raised while ingesting an MRCLAM dataset folder. Every
error derives from ExtractionError so callers can catch the whole family,
and most also derive from the closest builtin so generic handlers keep
working (a missing file is still an OSError, a bad number still a ValueError).

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple


class ExtractionError(Exception):
    """Base class for every failure raised by the extraction pipeline."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class PathNotFoundError(ExtractionError, FileNotFoundError):
    """The dataset directory itself does not exist."""


class FileOpenError(ExtractionError, OSError):
    """An expected data file is missing or cannot be read."""


class CapacityExceededError(ExtractionError):
    """A fixed-capacity table received more data lines than it can hold."""


class UnresolvedReferenceError(ExtractionError):
    """A record refers to a barcode that was never populated."""


class MalformedFieldError(ExtractionError, ValueError):
    """A field is missing or cannot be parsed as its expected numeric type."""

    def __init__(self, message: str, path: Optional[Path] = None, line_no: Optional[int] = None):
        if line_no is not None:
            message = f"{message} (line {line_no})"
        super().__init__(message, path)
        self.line_no = line_no


class NotInitializedError(ExtractionError, RuntimeError):
    """Dataset accessors were used before a successful extraction."""


class DatasetExtractionError(ExtractionError):
    """
    Raised once all extraction steps have run and at least one failed.

    Attributes:
        errors: every step failure, in the order the steps were attempted
    """

    def __init__(self, errors: Iterable[ExtractionError], path: Optional[Path] = None):
        self.errors: Tuple[ExtractionError, ...] = tuple(errors)
        lines = [f"Unable to extract data from dataset ({len(self.errors)} failed step(s))"]
        lines += [f"  - {type(e).__name__}: {e}" for e in self.errors]
        super().__init__("\n".join(lines), path)

    def of_type(self, kind: type) -> Tuple[ExtractionError, ...]:
        """Return the collected errors that are instances of ``kind``."""
        return tuple(e for e in self.errors if isinstance(e, kind))
