#!/usr/bin/env python
"""
Record Tokenizer

Every MRCLAM data file shares one line format: ``#`` starts a comment line,
fields are separated by tabs and any other whitespace is padding. This module
turns such lines into Record objects whose fields are converted on demand.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, TextIO, Tuple

from .errors import FileOpenError, MalformedFieldError

# Whitespace other than the tab field separator.
_PADDING = re.compile(r"[^\S\t]+")


@dataclass(frozen=True)
class Record:
    """One tokenized data line, with enough context to report parse errors."""

    fields: Tuple[str, ...]
    source: Optional[Path] = None
    line_no: Optional[int] = None

    def __len__(self) -> int:
        return len(self.fields)

    def _text(self, index: int, name: str) -> str:
        if index < 0 or index >= len(self.fields):
            raise MalformedFieldError(
                f"Missing field {index} ({name}): line has {len(self.fields)} field(s)",
                self.source,
                self.line_no,
            )
        return self.fields[index]

    def float_field(self, index: int, name: str = "value") -> float:
        text = self._text(index, name)
        try:
            value = float(text)
        except ValueError:
            raise MalformedFieldError(f"Field {index} ({name}) is not a number: {text!r}", self.source, self.line_no) from None
        if not math.isfinite(value):
            raise MalformedFieldError(f"Field {index} ({name}) is not finite: {text!r}", self.source, self.line_no)
        return value

    def int_field(self, index: int, name: str = "value") -> int:
        """
        Parse an integer field.

        Integral decimal spellings such as ``"5.0"`` are accepted since some
        exports write ids as floats; ``"5.7"`` is rejected.
        """
        text = self._text(index, name)
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            value = float("nan")
        if not value.is_integer():
            raise MalformedFieldError(f"Field {index} ({name}) is not an integer: {text!r}", self.source, self.line_no)
        return int(value)


class RecordTokenizer:
    """Splits raw text lines of a data file into Records."""

    comment_prefix = "#"
    separator = "\t"

    def split(self, line: str) -> Optional[Tuple[str, ...]]:
        """
        Split one raw line into its ordered tab-separated fields.

        Returns None for comment lines and for lines that are empty once the
        padding is removed. Empty leading or trailing fields are kept.
        """
        if line.startswith(self.comment_prefix):
            return None
        line = _PADDING.sub("", line)
        if not line.strip(self.separator):
            return None
        return tuple(line.split(self.separator))

    def records(self, handle: TextIO, source: Optional[Path] = None) -> Iterator[Record]:
        """Yield a Record for every data line read from an open text handle."""
        try:
            for line_no, line in enumerate(handle, start=1):
                fields = self.split(line)
                if fields is not None:
                    yield Record(fields, source, line_no)
        except UnicodeDecodeError as e:
            raise MalformedFieldError(f"File is not ASCII text: {e}", source) from e


def open_data_file(path: Path, kind: str) -> TextIO:
    """
    Open a dataset file for reading, converting OS failures to FileOpenError.

    Args:
        path: file to open
        kind: human readable file kind used in the error message (e.g. "Odometry")
    """
    try:
        return open(path, "r", encoding="ascii", newline="")
    except OSError as e:
        raise FileOpenError(f"Unable to open {kind} file: {path} ({e.strerror or e})", path) from e
