#!/usr/bin/env python
"""
MRCLAM Data Model

Immutable records produced by the extraction pipeline. Samples are frozen
dataclasses, sequences are tuples, so a Dataset can be shared freely once
extraction succeeds.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import numpy as np
import pandas as pd

from .common import frames
from .tables import BarcodeTable, LandmarkCatalog


@dataclass(frozen=True)
class GroundtruthSample:
    """Externally measured pose: time [s], x/y [m], orientation [rad]."""
    time: float
    x: float
    y: float
    orientation: float


@dataclass(frozen=True)
class OdometrySample:
    """Commanded velocities: time [s], forward [m/s], angular [rad/s]."""
    time: float
    forward_velocity: float
    angular_velocity: float


@dataclass(frozen=True)
class MeasurementEpoch:
    """
    All sightings a robot made at effectively the same instant.

    subjects, ranges and bearings are parallel: index i of each describes
    one sighting. time is the anchor of the first line merged into the epoch.
    """
    time: float
    subjects: Tuple[int, ...]
    ranges: Tuple[float, ...]
    bearings: Tuple[float, ...]

    def __post_init__(self):
        if not (len(self.subjects) == len(self.ranges) == len(self.bearings)):
            raise ValueError(
                f"Epoch at t={self.time}: subjects/ranges/bearings lengths differ "
                f"({len(self.subjects)}/{len(self.ranges)}/{len(self.bearings)})"
            )

    def __len__(self) -> int:
        return len(self.subjects)

    def sightings(self) -> List[Tuple[int, float, float]]:
        """Return the epoch as (subject, range, bearing) triples."""
        return list(zip(self.subjects, self.ranges, self.bearings))


@dataclass(frozen=True)
class RobotRecord:
    """Groundtruth, odometry and merged measurements of one robot."""
    robot_id: int
    groundtruth: Tuple[GroundtruthSample, ...] = ()
    odometry: Tuple[OdometrySample, ...] = ()
    measurements: Tuple[MeasurementEpoch, ...] = ()

    @property
    def ordinal(self) -> int:
        """1-based robot number used in file names."""
        return self.robot_id + 1

    def groundtruth_array(self) -> np.ndarray:
        return frames.groundtruth_array(self.groundtruth)

    def odometry_array(self) -> np.ndarray:
        return frames.odometry_array(self.odometry)

    def groundtruth_frame(self) -> pd.DataFrame:
        return frames.groundtruth_frame(self.groundtruth)

    def odometry_frame(self) -> pd.DataFrame:
        return frames.odometry_frame(self.odometry)

    def measurements_frame(self) -> pd.DataFrame:
        return frames.measurements_frame(self.measurements)


@dataclass(frozen=True)
class Dataset:
    """
    Fully validated contents of one dataset folder.

    Only ever constructed after every extraction step succeeded.
    """
    root: Path
    barcodes: BarcodeTable
    landmarks: LandmarkCatalog
    robots: Tuple[RobotRecord, ...] = field(default_factory=tuple)

    def robot(self, robot_id: int) -> RobotRecord:
        """Return the record of a 0-based robot id."""
        if not 0 <= robot_id < len(self.robots):
            raise IndexError(f"robot_id {robot_id} out of range 0..{len(self.robots) - 1}")
        return self.robots[robot_id]

    def landmarks_frame(self) -> pd.DataFrame:
        return frames.landmarks_frame(self.landmarks.values())
