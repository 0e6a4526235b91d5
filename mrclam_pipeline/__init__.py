#!/usr/bin/env python
"""
MRCLAM Dataset Pipeline

Reads the UTIAS multi-robot cooperative localization and mapping (MRCLAM)
dataset folders into validated, immutable Python objects: the barcode table,
the landmark catalog and per-robot groundtruth, odometry and measurement
epochs ready for an estimator.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

__version__ = "0.1.0"
__author__ = "Xiangyu Fu"
__email__ = "xiangyu.fu@tum.de"
__license__ = "MIT"

from .config_model import ExtractorConfig
from .errors import (
    CapacityExceededError,
    DatasetExtractionError,
    ExtractionError,
    FileOpenError,
    MalformedFieldError,
    NotInitializedError,
    PathNotFoundError,
    UnresolvedReferenceError,
)
from .extractor import DataExtractor
from .models import Dataset, GroundtruthSample, MeasurementEpoch, OdometrySample, RobotRecord
from .tables import BarcodeTable, Landmark, LandmarkCatalog

__all__ = [
    "ExtractorConfig",
    "DataExtractor",
    "Dataset",
    "RobotRecord",
    "GroundtruthSample",
    "OdometrySample",
    "MeasurementEpoch",
    "BarcodeTable",
    "Landmark",
    "LandmarkCatalog",
    "ExtractionError",
    "PathNotFoundError",
    "FileOpenError",
    "CapacityExceededError",
    "UnresolvedReferenceError",
    "MalformedFieldError",
    "NotInitializedError",
    "DatasetExtractionError",
]
