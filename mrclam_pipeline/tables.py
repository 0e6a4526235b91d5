#!/usr/bin/env python
"""
Shared Dataset Tables

Parsers for the two files shared by all robots:

- Barcodes.dat: subject index -> barcode code
- Landmark_Groundtruth.dat: landmark positions, each resolved to its barcode

Both tables are read-only mappings keyed by the 1-based id used in the files.
A missing entry is reported as absent (None), never as a zero sentinel, so a
barcode code of 0 stays a legitimate value.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional

from .errors import CapacityExceededError, MalformedFieldError, UnresolvedReferenceError
from .tokenizer import RecordTokenizer, open_data_file

logger = logging.getLogger(__name__)

BARCODES_FILE = "Barcodes.dat"
LANDMARKS_FILE = "Landmark_Groundtruth.dat"


class BarcodeTable(Mapping):
    """
    Fixed-capacity table of barcode codes keyed by subject index (1..capacity).

    Behaves as a read-only ``Mapping[int, int]``; ``lookup`` is the
    bounds-checked accessor that returns None for unset or out-of-range ids.
    """

    def __init__(self, entries: Optional[Dict[int, int]] = None, capacity: int = 20):
        entries = dict(entries or {})
        if len(entries) > capacity:
            raise CapacityExceededError(f"{len(entries)} barcodes exceed capacity {capacity}")
        for index in entries:
            if not 1 <= index <= capacity:
                raise MalformedFieldError(f"Barcode index {index} outside 1..{capacity}")
        self._entries = entries
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def __getitem__(self, index: int) -> int:
        return self._entries[index]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"BarcodeTable({len(self)}/{self.capacity} entries)"

    def lookup(self, index: int) -> Optional[int]:
        """Return the code stored for ``index`` or None if it was never set."""
        if not 1 <= index <= self.capacity:
            return None
        return self._entries.get(index)

    def codes(self) -> frozenset:
        """Set of every barcode code present in the table."""
        return frozenset(self._entries.values())

    @classmethod
    def parse(cls, path: Path, capacity: int = 20) -> "BarcodeTable":
        """
        Parse a Barcodes.dat file.

        Args:
            path: the barcode file
            capacity: maximum number of data lines accepted

        Raises:
            FileOpenError: if the file cannot be opened
            CapacityExceededError: if the file holds more than ``capacity`` data lines
            MalformedFieldError: if a field is missing, not an integer, or the index is out of range
        """
        path = Path(path)
        tokenizer = RecordTokenizer()
        entries: Dict[int, int] = {}
        n_lines = 0

        with open_data_file(path, "barcodes") as f:
            for rec in tokenizer.records(f, path):
                n_lines += 1
                if n_lines > capacity:
                    raise CapacityExceededError(
                        f"Total read barcodes exceeds capacity {capacity}: {path}", path
                    )
                index = rec.int_field(0, "index")
                code = rec.int_field(1, "code")
                if not 1 <= index <= capacity:
                    raise MalformedFieldError(
                        f"Barcode index {index} outside 1..{capacity}", path, rec.line_no
                    )
                if index in entries:
                    logger.warning("%s line %d: barcode index %d set twice, keeping the last value",
                                   path, rec.line_no, index)
                entries[index] = code

        return cls(entries, capacity)


@dataclass(frozen=True)
class Landmark:
    """Stationary landmark with known position [m] and its standard deviation."""
    id: int
    barcode: int
    x: float
    y: float
    x_std_dev: float
    y_std_dev: float


class LandmarkCatalog(Mapping):
    """Read-only ``Mapping[int, Landmark]`` keyed by landmark id."""

    def __init__(self, landmarks: Optional[Dict[int, Landmark]] = None, capacity: int = 15):
        landmarks = dict(landmarks or {})
        if len(landmarks) > capacity:
            raise CapacityExceededError(f"{len(landmarks)} landmarks exceed capacity {capacity}")
        self._landmarks = landmarks
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def __getitem__(self, landmark_id: int) -> Landmark:
        return self._landmarks[landmark_id]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._landmarks))

    def __len__(self) -> int:
        return len(self._landmarks)

    def __hash__(self) -> int:
        return hash(frozenset(self._landmarks.items()))

    def __repr__(self) -> str:
        return f"LandmarkCatalog({len(self)}/{self.capacity} landmarks)"

    def lookup(self, landmark_id: int) -> Optional[Landmark]:
        return self._landmarks.get(landmark_id)

    def by_barcode(self, barcode: int) -> Optional[Landmark]:
        """Return the landmark carrying ``barcode``, if any."""
        for lm in self._landmarks.values():
            if lm.barcode == barcode:
                return lm
        return None

    @classmethod
    def parse(cls, path: Path, barcodes: BarcodeTable, capacity: int = 15) -> "LandmarkCatalog":
        """
        Parse a Landmark_Groundtruth.dat file, resolving each id through ``barcodes``.

        ``barcodes`` must already be populated: every landmark id has to map
        to a barcode entry. Nothing is returned unless the whole file parses.

        Raises:
            FileOpenError: if the file cannot be opened
            UnresolvedReferenceError: if a landmark id has no barcode
            CapacityExceededError: beyond ``capacity`` data lines
            MalformedFieldError: if a field is missing or not numeric
        """
        path = Path(path)
        tokenizer = RecordTokenizer()
        landmarks: Dict[int, Landmark] = {}
        n_lines = 0

        with open_data_file(path, "landmarks") as f:
            for rec in tokenizer.records(f, path):
                n_lines += 1
                if n_lines > capacity:
                    raise CapacityExceededError(
                        f"Total read landmarks exceeds capacity {capacity}: {path}", path
                    )
                landmark_id = rec.int_field(0, "id")
                barcode = barcodes.lookup(landmark_id)
                if barcode is None:
                    raise UnresolvedReferenceError(
                        f"Landmark {landmark_id} (line {rec.line_no}) has no barcode set in the barcode table",
                        path,
                    )
                if landmark_id in landmarks:
                    logger.warning("%s line %d: landmark %d listed twice, keeping the last entry",
                                   path, rec.line_no, landmark_id)
                landmarks[landmark_id] = Landmark(
                    id=landmark_id,
                    barcode=barcode,
                    x=rec.float_field(1, "x"),
                    y=rec.float_field(2, "y"),
                    x_std_dev=rec.float_field(3, "x_std_dev"),
                    y_std_dev=rec.float_field(4, "y_std_dev"),
                )

        return cls(landmarks, capacity)
