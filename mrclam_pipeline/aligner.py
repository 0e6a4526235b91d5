#!/usr/bin/env python
"""
Measurement Aligner

Robot<N>_Measurement.dat holds one line per sighting (time, subject, range,
bearing). Sightings taken at the same instant do not always share the exact
same timestamp, so lines whose time falls within a tolerance window of an
existing epoch's anchor are merged into that epoch.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import bisect
import logging
import math
from pathlib import Path
from typing import AbstractSet, List, Optional, Tuple

from .errors import UnresolvedReferenceError
from .models import MeasurementEpoch
from .streams import MEASUREMENT_SUFFIX, robot_file
from .tokenizer import RecordTokenizer, open_data_file

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.05


class _EpochBuilder:
    """Mutable epoch used while a file is being merged."""

    __slots__ = ("time", "subjects", "ranges", "bearings")

    def __init__(self, time: float):
        self.time = time
        self.subjects: List[int] = []
        self.ranges: List[float] = []
        self.bearings: List[float] = []

    def add(self, subject: int, rng: float, bearing: float) -> None:
        self.subjects.append(subject)
        self.ranges.append(rng)
        self.bearings.append(bearing)

    def freeze(self) -> MeasurementEpoch:
        return MeasurementEpoch(self.time, tuple(self.subjects), tuple(self.ranges), tuple(self.bearings))


class EpochMerger:
    """
    Groups sightings into epochs by anchor time.

    A sighting joins the earliest-created epoch whose anchor lies in
    ``[time - tolerance, time + tolerance]``; otherwise it opens a new epoch
    anchored at its own time. Anchors are kept in a sorted index so candidate
    epochs are found by bisection instead of scanning every epoch.
    """

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE):
        if tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {tolerance}")
        self.tolerance = tolerance
        self._epochs: List[_EpochBuilder] = []
        # sorted (anchor_time, creation_index)
        self._anchors: List[Tuple[float, int]] = []

    def _find(self, time: float) -> Optional[_EpochBuilder]:
        lo = bisect.bisect_left(self._anchors, (time - self.tolerance, -1))
        best = None
        for anchor, idx in self._anchors[lo:]:
            if anchor > time + self.tolerance:
                break
            if not anchor >= time - self.tolerance:
                continue
            if best is None or idx < best:
                best = idx
        return None if best is None else self._epochs[best]

    def add(self, time: float, subject: int, rng: float, bearing: float) -> None:
        if not math.isfinite(time):
            raise ValueError(f"epoch time must be finite, got {time}")
        epoch = self._find(time)
        if epoch is None:
            epoch = _EpochBuilder(time)
            bisect.insort(self._anchors, (time, len(self._epochs)))
            self._epochs.append(epoch)
        epoch.add(subject, rng, bearing)

    def __len__(self) -> int:
        return len(self._epochs)

    def epochs(self) -> Tuple[MeasurementEpoch, ...]:
        """Return the merged epochs in creation order."""
        return tuple(e.freeze() for e in self._epochs)


class MeasurementAligner:
    """
    Parses measurement files into merged MeasurementEpochs.

    Args:
        dataset_folder: folder holding the Robot<N>_Measurement.dat files
        tolerance: half-width of the merge window in seconds
        known_subjects: when given, every measured subject must be in this set;
            None disables the check
    """

    def __init__(
        self,
        dataset_folder: Path,
        tolerance: float = DEFAULT_TOLERANCE,
        known_subjects: Optional[AbstractSet[int]] = None,
    ):
        self.dataset_folder = Path(dataset_folder)
        self.tolerance = tolerance
        self.known_subjects = known_subjects
        self.tokenizer = RecordTokenizer()

    def parse(self, robot_id: int) -> Tuple[MeasurementEpoch, ...]:
        """
        Read ``Robot<robot_id+1>_Measurement.dat`` and merge it into epochs.

        Raises:
            FileOpenError: if the file is missing or unreadable
            MalformedFieldError: if a line lacks one of the four fields
            UnresolvedReferenceError: if subject checking is enabled and a
                subject is unknown
        """
        path = robot_file(self.dataset_folder, robot_id, MEASUREMENT_SUFFIX)
        merger = EpochMerger(self.tolerance)
        n_lines = 0

        with open_data_file(path, "measurement") as f:
            for rec in self.tokenizer.records(f, path):
                time = rec.float_field(0, "time")
                subject = rec.int_field(1, "subject")
                rng = rec.float_field(2, "range")
                bearing = rec.float_field(3, "bearing")
                if self.known_subjects is not None and subject not in self.known_subjects:
                    raise UnresolvedReferenceError(
                        f"Measurement subject {subject} (line {rec.line_no}) is not a known barcode", path
                    )
                merger.add(time, subject, rng, bearing)
                n_lines += 1

        logger.debug("%s: merged %d sightings into %d epochs", path, n_lines, len(merger))
        return merger.epochs()
