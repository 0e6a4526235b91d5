#!/usr/bin/env python
"""
Tabular Views

Helpers converting extracted sample sequences into numpy arrays and pandas
DataFrames for estimators and analysis notebooks. Every view is a copy: the
arrays are additionally flagged read-only so they cannot be mistaken for a
handle onto the dataset.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

GROUNDTRUTH_DTYPE = np.dtype(
    [("time", np.float64), ("x", np.float64), ("y", np.float64), ("orientation", np.float64)]
)
ODOMETRY_DTYPE = np.dtype(
    [("time", np.float64), ("forward_velocity", np.float64), ("angular_velocity", np.float64)]
)
MEASUREMENT_COLUMNS = ["epoch", "time", "subject", "range", "bearing"]
LANDMARK_COLUMNS = ["barcode", "x", "y", "x_std_dev", "y_std_dev"]


def _records_array(samples: Sequence, dtype: np.dtype) -> np.ndarray:
    arr = np.array(
        [tuple(getattr(s, name) for name in dtype.names) for s in samples],
        dtype=dtype,
    )
    arr.flags.writeable = False
    return arr


def groundtruth_array(samples: Sequence) -> np.ndarray:
    """Structured array with fields time, x, y, orientation."""
    return _records_array(samples, GROUNDTRUTH_DTYPE)


def odometry_array(samples: Sequence) -> np.ndarray:
    """Structured array with fields time, forward_velocity, angular_velocity."""
    return _records_array(samples, ODOMETRY_DTYPE)


def groundtruth_frame(samples: Sequence) -> pd.DataFrame:
    return pd.DataFrame(np.array(groundtruth_array(samples)))


def odometry_frame(samples: Sequence) -> pd.DataFrame:
    return pd.DataFrame(np.array(odometry_array(samples)))


def measurements_frame(epochs: Sequence) -> pd.DataFrame:
    """
    Long-form table with one row per sighting.

    The ``epoch`` column is the index of the merged epoch the sighting belongs
    to and ``time`` is that epoch's anchor time.
    """
    rows = [
        (i, epoch.time, subject, rng, bearing)
        for i, epoch in enumerate(epochs)
        for subject, rng, bearing in zip(epoch.subjects, epoch.ranges, epoch.bearings)
    ]
    df = pd.DataFrame(rows, columns=MEASUREMENT_COLUMNS)
    return df.astype({"epoch": np.int64, "time": np.float64, "subject": np.int64,
                      "range": np.float64, "bearing": np.float64})


def landmarks_frame(landmarks: Iterable) -> pd.DataFrame:
    """Landmark table indexed by landmark id."""
    rows = {lm.id: [lm.barcode, lm.x, lm.y, lm.x_std_dev, lm.y_std_dev] for lm in landmarks}
    df = pd.DataFrame.from_dict(rows, orient="index", columns=LANDMARK_COLUMNS)
    df.index.name = "id"
    return df.sort_index()
