from pathlib import Path

import pytest

BARCODES = {1: 5, 2: 14, 3: 41, 4: 32, 5: 23, 6: 72}
LANDMARKS = {
    3: (1.0, 2.0, 0.01, 0.02),
    4: (-1.5, 0.5, 0.01, 0.01),
    5: (3.25, -2.0, 0.02, 0.02),
    6: (0.0, 4.0, 0.03, 0.01),
}


def _write(path: Path, header: str, rows) -> None:
    lines = [f"# {header}"]
    lines += ["\t".join(f" {v} " for v in row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="ascii")


def write_dataset(root: Path, n_robots: int = 2) -> Path:
    """Write a small MRCLAM-style dataset folder and return it."""
    root.mkdir(parents=True, exist_ok=True)
    _write(root / "Barcodes.dat", "Subject #    Barcode #", sorted(BARCODES.items()))
    _write(
        root / "Landmark_Groundtruth.dat",
        "Subject #    x [m]    y [m]    x std-dev [m]    y std-dev [m]",
        [(i, *v) for i, v in sorted(LANDMARKS.items())],
    )
    for k in range(n_robots):
        n = k + 1
        t0 = 1248272272.0 + k
        _write(
            root / f"Robot{n}_Groundtruth.dat",
            "Time [s]    x [m]    y [m]    orientation [rad]",
            [(f"{t0 + 0.001 * i:.3f}", 0.1 * i, -0.2 * i, 0.01 * n) for i in range(5)],
        )
        _write(
            root / f"Robot{n}_Odometry.dat",
            "Time [s]    Forward Velocity [m/s]    Angular Velocity[rad/s]",
            [(f"{t0 + 0.02 * i:.3f}", 0.1, -0.05 * n) for i in range(4)],
        )
        _write(
            root / f"Robot{n}_Measurement.dat",
            "Time [s]    Subject #    range [m]    bearing [rad]",
            [
                (f"{t0 + 0.00:.3f}", 41, 1.2, 0.3),
                (f"{t0 + 0.03:.3f}", 32, 2.0, -0.1),
                (f"{t0 + 0.50:.3f}", 23, 0.8, 0.0),
            ],
        )
    return root


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "MRCLAM_Dataset1")
