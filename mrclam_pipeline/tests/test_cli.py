from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from mrclam_pipeline.config_model import ExtractorConfig
from mrclam_pipeline.extract_cli import load_config, main


def _write_config(path: Path, **values) -> Path:
    path.write_text(yaml.safe_dump(values), encoding="utf-8")
    return path


def test_main_succeeds_on_valid_dataset(tmp_path: Path, dataset_dir: Path) -> None:
    cfg = _write_config(
        tmp_path / "config.yaml",
        dataset_folder=str(dataset_dir), total_robots=2, total_barcodes=6, total_landmarks=4,
    )
    assert main(["--config", str(cfg)]) == 0


def test_main_reports_failed_extraction(tmp_path: Path, dataset_dir: Path) -> None:
    (dataset_dir / "Landmark_Groundtruth.dat").unlink()
    cfg = _write_config(tmp_path / "config.yaml", dataset_folder=str(dataset_dir), total_robots=2)
    assert main(["--config", str(cfg)]) == 1


def test_main_rejects_invalid_config(tmp_path: Path) -> None:
    cfg = _write_config(tmp_path / "config.yaml", dataset_folder=str(tmp_path), total_robots=0)
    assert main(["--config", str(cfg)]) == 1


def test_dataset_override(tmp_path: Path, dataset_dir: Path) -> None:
    cfg = _write_config(tmp_path / "config.yaml", dataset_folder="/somewhere/else")
    loaded = load_config(cfg, str(dataset_dir))
    assert loaded.dataset_folder == dataset_dir
    assert loaded.measurement_tolerance == pytest.approx(0.05)


def test_load_from_yaml(tmp_path: Path) -> None:
    cfg = _write_config(tmp_path / "config.yaml", dataset_folder="~/MRCLAM_Dataset1", sample_period=0.1)
    loaded = ExtractorConfig.load_from_yaml(cfg)
    assert loaded.dataset_folder == Path("~/MRCLAM_Dataset1").expanduser()
    assert loaded.sample_period == pytest.approx(0.1)
    with pytest.raises(ValidationError):
        ExtractorConfig(dataset_folder=tmp_path, sample_period=0.0)


def test_main_reports_missing_config_file(tmp_path: Path) -> None:
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
