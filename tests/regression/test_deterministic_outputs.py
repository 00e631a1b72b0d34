from pathlib import Path

import pytest

from pan_quality.cli import parse_args, run_command
from pan_quality.ingest.csv_import import read_csv_values
from pan_quality.pipeline.clean_classify import clean_and_classify


def _run_once(data_dir: Path, run_id: str) -> None:
    args = parse_args(
        [
            "all",
            "--config-dir",
            "config",
            "--data-dir",
            str(data_dir),
            "--run-date",
            "2026-10-18",
            "--run-id",
            run_id,
        ]
    )
    assert run_command(args) == 0


@pytest.mark.regression
def test_classified_outputs_are_byte_stable_for_same_inputs(tmp_path: Path):
    first = tmp_path / "first"
    second = tmp_path / "second"

    _run_once(first, "run-a")
    _run_once(second, "run-b")

    first_bytes = (first / "out" / "sample_classified.csv").read_bytes()
    second_bytes = (second / "out" / "sample_classified.csv").read_bytes()
    assert first_bytes == second_bytes


@pytest.mark.regression
def test_sample_snapshot():
    results, excluded = clean_and_classify(read_csv_values(Path("fixtures/sample_pan.csv"), "pan_number"))

    assert excluded == 3
    assert sorted((r.cleaned_value, r.status) for r in results) == [
        ("AABCD1234E", "Invalid"),
        ("ABCDE1234F", "Invalid"),
        ("ABCDX1243F", "Valid"),
        ("AHGVE1276F", "Valid"),
        ("BKMNP4826Q", "Valid"),
        ("INVALID", "Invalid"),
        ("PQRST5678K", "Invalid"),
    ]
