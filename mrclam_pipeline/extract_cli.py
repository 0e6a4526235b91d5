#!/usr/bin/env python
"""
MRCLAM Extraction Command Line Interface

Loads an extraction config, reads the whole dataset folder and logs a short
summary of what was extracted. Every failing file is reported before the
command exits with a non-zero status.

Usage:
    extract-mrclam --config config/config.yaml [--dataset path/to/MRCLAM_Dataset1]

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from omegaconf import OmegaConf
from pydantic import ValidationError

from mrclam_pipeline.config_model import ExtractorConfig
from mrclam_pipeline.errors import DatasetExtractionError, ExtractionError
from mrclam_pipeline.extractor import DataExtractor

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "config.yaml"


def setup_logging(level: int = logging.INFO):
    """
    Configure root logger with appropriate formatting.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_config(config_path: Path, dataset: Optional[str] = None) -> ExtractorConfig:
    """Load a YAML config through OmegaConf, optionally overriding the dataset folder."""
    plain_cfg = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    if dataset is not None:
        plain_cfg["dataset_folder"] = dataset
    return ExtractorConfig.model_validate(plain_cfg)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for dataset extraction.

    Returns:
        0 on success, 1 if the config is invalid or extraction failed
    """
    parser = argparse.ArgumentParser(description="Extract an MRCLAM multi-robot localization dataset")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG, help="Path to config YAML")
    parser.add_argument("--dataset", type=str, help="Dataset folder, overrides dataset_folder from the config")
    args = parser.parse_args(argv)

    # Load and validate config
    try:
        cfg = load_config(args.config, args.dataset)
    except ValidationError as e:
        setup_logging()
        logging.error("Configuration validation failed:\n%s", e)
        return 1
    except FileNotFoundError:
        setup_logging()
        logging.error("Configuration file not found: %s (copy config/example_config.yaml)", args.config)
        return 1

    setup_logging(logging.DEBUG if cfg.verbose else logging.INFO)

    extractor = DataExtractor(cfg)
    try:
        dataset = extractor.extract()
    except DatasetExtractionError as e:
        logging.error("Extraction of %s failed with %d error(s)", cfg.dataset_folder, len(e.errors))
        return 1
    except ExtractionError as e:
        logging.error("Extraction of %s failed: %s", cfg.dataset_folder, e)
        return 1

    for robot in dataset.robots:
        n_sightings = sum(len(epoch) for epoch in robot.measurements)
        logging.info(
            "Robot%d: %d groundtruth, %d odometry, %d measurement epochs (%d sightings)",
            robot.ordinal, len(robot.groundtruth), len(robot.odometry), len(robot.measurements), n_sightings,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
