#!/usr/bin/env python
"""
MRCLAM Data Extractor

This module orchestrates the extraction of a complete MRCLAM dataset folder:

1. Barcodes.dat -> BarcodeTable
2. Landmark_Groundtruth.dat -> LandmarkCatalog (needs the barcode table)
3. For every robot: groundtruth, odometry and merged measurements

Every step is attempted even when an earlier one failed, so a single run
reports every problem in the folder. Only when all steps have run does the
extractor raise one DatasetExtractionError carrying the collected failures.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, TypeVar

from tqdm import tqdm

from .aligner import MeasurementAligner
from .config_model import ExtractorConfig
from .errors import DatasetExtractionError, ExtractionError, NotInitializedError, PathNotFoundError
from .models import Dataset, RobotRecord
from .streams import RobotStreamReader
from .tables import BARCODES_FILE, LANDMARKS_FILE, BarcodeTable, LandmarkCatalog

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataExtractor:
    """
    Extracts barcodes, landmarks and per-robot streams from a dataset folder.

    The extractor is the sole writer while a dataset is being built. After a
    successful ``extract`` the resulting Dataset is immutable and the
    ``barcodes``, ``landmarks`` and ``robots`` accessors become available;
    before that (or after a failed extraction) they raise NotInitializedError.
    """

    def __init__(self, cfg: ExtractorConfig):
        """
        Initialize the extractor.

        Args:
            cfg: Extraction configuration holding the dataset folder and table capacities
        """
        self.cfg = cfg
        self._dataset: Optional[Dataset] = None

    @classmethod
    def from_path(cls, dataset_folder, sample_period: float = 0.02) -> "DataExtractor":
        """
        Build an extractor with default capacities and extract immediately.

        ``sample_period`` is validated and kept in the configuration; it is
        reserved for stream resampling and has no effect on extraction.
        """
        extractor = cls(ExtractorConfig(dataset_folder=dataset_folder, sample_period=sample_period))
        extractor.extract()
        return extractor

    # --- accessors -------------------------------------------------------

    @property
    def dataset(self) -> Dataset:
        if self._dataset is None:
            raise NotInitializedError(
                "Dataset has not been extracted. Call extract() successfully before accessing data."
            )
        return self._dataset

    @property
    def barcodes(self) -> BarcodeTable:
        return self.dataset.barcodes

    @property
    def landmarks(self) -> LandmarkCatalog:
        return self.dataset.landmarks

    @property
    def robots(self) -> Tuple[RobotRecord, ...]:
        return self.dataset.robots

    @property
    def is_initialized(self) -> bool:
        return self._dataset is not None

    # --- extraction ------------------------------------------------------

    def _step(self, errors: List[ExtractionError], description: str, fn: Callable[[], T]) -> Optional[T]:
        """Run one extraction step, recording its failure instead of propagating it."""
        try:
            result = fn()
        except ExtractionError as e:
            logger.error("[%s] %s", description, e)
            errors.append(e)
            return None
        if self.cfg.verbose:
            size = len(result) if hasattr(result, "__len__") else "?"
            logger.info("[%s] ok (%s entries)", description, size)
        return result

    def extract(self, dataset_folder: Optional[Path] = None) -> Dataset:
        """
        Extract every file of the dataset folder.

        Args:
            dataset_folder: folder to read; defaults to ``cfg.dataset_folder``

        Returns:
            Dataset: the fully populated, immutable dataset

        Raises:
            PathNotFoundError: if the folder does not exist (raised before any parsing)
            DatasetExtractionError: if one or more steps failed; ``errors``
                lists every failure in step order
        """
        root = Path(dataset_folder if dataset_folder is not None else self.cfg.dataset_folder)
        self._dataset = None

        if not root.is_dir():
            raise PathNotFoundError(f"Dataset file path does not exist: {root}", root)

        cfg = self.cfg
        errors: List[ExtractionError] = []

        barcodes = self._step(
            errors, "barcodes", lambda: BarcodeTable.parse(root / BARCODES_FILE, cfg.total_barcodes)
        )
        # Still attempt landmarks so their unresolved references are reported too.
        lookup_table = barcodes if barcodes is not None else BarcodeTable(capacity=cfg.total_barcodes)
        landmarks = self._step(
            errors,
            "landmarks",
            lambda: LandmarkCatalog.parse(root / LANDMARKS_FILE, lookup_table, cfg.total_landmarks),
        )

        known_subjects = None
        if cfg.validate_measurement_subjects:
            known_subjects = lookup_table.codes()

        streams = RobotStreamReader(root)
        aligner = MeasurementAligner(root, cfg.measurement_tolerance, known_subjects)

        robots: List[RobotRecord] = []
        robot_ids = range(cfg.total_robots)
        for robot_id in tqdm(robot_ids, desc="Reading robots", unit="robot", disable=not cfg.show_progress):
            ordinal = robot_id + 1
            groundtruth = self._step(errors, f"robot {ordinal} groundtruth", lambda: streams.parse_groundtruth(robot_id))
            odometry = self._step(errors, f"robot {ordinal} odometry", lambda: streams.parse_odometry(robot_id))
            measurements = self._step(errors, f"robot {ordinal} measurements", lambda: aligner.parse(robot_id))
            robots.append(
                RobotRecord(
                    robot_id=robot_id,
                    groundtruth=groundtruth or (),
                    odometry=odometry or (),
                    measurements=measurements or (),
                )
            )

        if errors:
            raise DatasetExtractionError(errors, root)

        self._dataset = Dataset(root=root, barcodes=barcodes, landmarks=landmarks, robots=tuple(robots))
        logger.info(
            "Extracted %s: %d barcodes, %d landmarks, %d robots",
            root, len(barcodes), len(landmarks), len(robots),
        )
        return self._dataset
