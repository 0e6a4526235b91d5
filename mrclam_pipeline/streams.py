#!/usr/bin/env python
"""
Robot Stream Reader

Reads the per-robot groundtruth and odometry logs:

- Robot<N>_Groundtruth.dat: time, x, y, orientation
- Robot<N>_Odometry.dat: time, forward_velocity, angular_velocity

<N> is the 1-based ordinal of the 0-based robot id. Samples are returned in
file order; time is expected to be non-decreasing but is not enforced.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import logging
from pathlib import Path
from typing import Callable, List, Tuple, TypeVar

from .models import GroundtruthSample, OdometrySample
from .tokenizer import Record, RecordTokenizer, open_data_file

logger = logging.getLogger(__name__)

GROUNDTRUTH_SUFFIX = "_Groundtruth.dat"
ODOMETRY_SUFFIX = "_Odometry.dat"
MEASUREMENT_SUFFIX = "_Measurement.dat"

T = TypeVar("T")


def robot_file(dataset_folder: Path, robot_id: int, suffix: str) -> Path:
    """Return the path of a robot-specific file, e.g. ``<root>/Robot1_Odometry.dat`` for robot 0."""
    if robot_id < 0:
        raise ValueError(f"robot_id must be >= 0, got {robot_id}")
    return Path(dataset_folder) / f"Robot{robot_id + 1}{suffix}"


class RobotStreamReader:
    """
    Parses the groundtruth and odometry files of individual robots.

    Each call re-reads the file and returns a new tuple, so re-parsing a robot
    replaces its previous sequence wholesale.
    """

    def __init__(self, dataset_folder: Path):
        self.dataset_folder = Path(dataset_folder)
        self.tokenizer = RecordTokenizer()

    def _read(self, path: Path, kind: str, build: Callable[[Record], T]) -> Tuple[T, ...]:
        samples: List[T] = []
        last_time = None
        with open_data_file(path, kind) as f:
            for rec in self.tokenizer.records(f, path):
                sample = build(rec)
                if last_time is not None and sample.time < last_time:
                    logger.debug("%s line %d: time %.3f goes back from %.3f", path, rec.line_no, sample.time, last_time)
                last_time = sample.time
                samples.append(sample)
        return tuple(samples)

    def parse_groundtruth(self, robot_id: int) -> Tuple[GroundtruthSample, ...]:
        """
        Read ``Robot<robot_id+1>_Groundtruth.dat``.

        Raises:
            FileOpenError: if the file is missing or unreadable
            MalformedFieldError: if a line lacks one of the four fields
        """
        path = robot_file(self.dataset_folder, robot_id, GROUNDTRUTH_SUFFIX)
        return self._read(
            path,
            "groundtruth",
            lambda rec: GroundtruthSample(
                time=rec.float_field(0, "time"),
                x=rec.float_field(1, "x"),
                y=rec.float_field(2, "y"),
                orientation=rec.float_field(3, "orientation"),
            ),
        )

    def parse_odometry(self, robot_id: int) -> Tuple[OdometrySample, ...]:
        """
        Read ``Robot<robot_id+1>_Odometry.dat``.

        Raises:
            FileOpenError: if the file is missing or unreadable
            MalformedFieldError: if a line lacks one of the three fields
        """
        path = robot_file(self.dataset_folder, robot_id, ODOMETRY_SUFFIX)
        return self._read(
            path,
            "odometry",
            lambda rec: OdometrySample(
                time=rec.float_field(0, "time"),
                forward_velocity=rec.float_field(1, "forward_velocity"),
                angular_velocity=rec.float_field(2, "angular_velocity"),
            ),
        )
