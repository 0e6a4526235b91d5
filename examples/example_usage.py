#!/usr/bin/env python
"""
Example Usage of MRCLAM Dataset Pipeline

This script demonstrates how to use the extractor programmatically instead
of using the command line interface.

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import logging
from pathlib import Path

from mrclam_pipeline import DataExtractor, DatasetExtractionError, ExtractorConfig, FileOpenError


def setup_logging():
    """Setup logging for the example."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )


def main():
    """
    Example usage of the extraction pipeline.

    This demonstrates:
    1. Loading configuration from YAML
    2. Extracting the whole dataset folder
    3. Inspecting the collected errors when extraction fails
    4. Turning robot streams into DataFrames
    """
    setup_logging()
    logger = logging.getLogger(__name__)

    config_path = Path("config/config.yaml")
    if not config_path.exists():
        logger.error("Configuration file not found. Please copy config/example_config.yaml to config/config.yaml")
        return

    cfg = ExtractorConfig.load_from_yaml(config_path)
    extractor = DataExtractor(cfg)

    try:
        dataset = extractor.extract()
    except DatasetExtractionError as e:
        missing = [str(err.path) for err in e.of_type(FileOpenError)]
        logger.error("Extraction failed; missing files: %s", missing or "none")
        return

    logger.info("Landmarks:\n%s", dataset.landmarks_frame())
    for robot in dataset.robots:
        gt = robot.groundtruth_frame()
        meas = robot.measurements_frame()
        logger.info(
            "Robot%d: groundtruth %.1fs..%.1fs, %d sightings of %d distinct subjects",
            robot.ordinal, gt["time"].min(), gt["time"].max(), len(meas), meas["subject"].nunique(),
        )


if __name__ == "__main__":
    main()
