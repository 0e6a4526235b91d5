#!/usr/bin/env python
"""
MRCLAM Extraction Configuration Model

This module defines the configuration schema for the dataset extraction
pipeline using Pydantic. Table capacities and the measurement tolerance
window live here instead of being compile-time constants, so datasets with
a different number of robots or landmarks only need a different config.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExtractorConfig(BaseModel):
    """
    Configuration model for the MRCLAM dataset extractor.

    The defaults describe the published UTIAS multi-robot dataset: five
    robots, twenty barcodes (one per robot and landmark) and fifteen
    landmarks.
    """

    verbose: bool = Field(False, description="Enable verbose logging for debugging")
    show_progress: bool = Field(False, description="Show a progress bar while reading robot files")

    model_config = ConfigDict(validate_default=True, frozen=True)

    # === File Paths ===
    dataset_folder: Path = Field(
        ..., description="Path to the folder containing Barcodes.dat, Landmark_Groundtruth.dat and Robot<N>_*.dat"
    )

    # === Table Capacities ===
    total_robots: int = Field(5, gt=0, description="Number of robots, each with groundtruth, odometry and measurement files")
    total_barcodes: int = Field(20, gt=0, description="Capacity of the barcode table")
    total_landmarks: int = Field(15, gt=0, description="Capacity of the landmark catalog")

    # === Measurement Alignment ===
    measurement_tolerance: float = Field(
        0.05,
        ge=0.0,
        description="Half-width in seconds of the window used to merge measurement lines into one epoch",
    )
    validate_measurement_subjects: bool = Field(
        False,
        description="Reject measurements whose subject is not a barcode code listed in Barcodes.dat",
    )

    # === Reserved ===
    sample_period: float = Field(
        0.02,
        gt=0.0,
        description="Sample period in seconds reserved for stream resampling; not used by extraction",
    )

    @field_validator("dataset_folder", mode="before")
    @classmethod
    def _validate_paths(cls, v) -> Path:
        """
        Convert string paths to Path objects and expand ``~``.

        Existence is not checked here: a missing dataset folder is reported
        by the extractor as a PathNotFoundError.
        """
        if v is None:
            raise ValueError("dataset_folder is required")
        return Path(v).expanduser()

    @classmethod
    def load_from_yaml(cls, path: Path) -> "ExtractorConfig":
        """
        Load configuration from a YAML file and validate it.

        Args:
            path: Path to the YAML configuration file

        Returns:
            ExtractorConfig: Validated configuration instance

        Raises:
            ValidationError: If the configuration is invalid
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If the YAML file is malformed
        """
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
        return cls(**raw)
