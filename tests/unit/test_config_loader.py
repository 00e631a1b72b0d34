from pathlib import Path

import pytest

from pan_quality.common.config_loader import load_all_configs, resolve_datasets
from pan_quality.common.errors import ConfigError

PIPELINE_YAML = """version: "1"
classification:
  workers: 1
datasets:
  - name: first
    source:
      type: csv
      path: first.csv
      column: pan_number
    output:
      classified_filename: first_classified.csv
  - name: second
    source:
      type: xlsx
      path: second.xlsx
      column: PAN
    output:
      classified_filename: second_classified.csv
"""


def _write_base(tmp_path: Path) -> Path:
    base = tmp_path / "base"
    base.mkdir()
    (base / "pipeline.yml").write_text(PIPELINE_YAML, encoding="utf-8")
    return base


def test_load_all_configs_from_repo_config_dir():
    bundle = load_all_configs(Path("config"))
    assert "sample" in bundle.datasets
    assert bundle.classification["workers"] >= 1
    assert bundle.http["max_attempts"] > 0


def test_load_all_configs_indexes_datasets_by_name(tmp_path: Path):
    bundle = load_all_configs(_write_base(tmp_path))

    assert list(bundle.datasets) == ["first", "second"]
    assert bundle.datasets["second"]["source"]["type"] == "xlsx"
    assert bundle.http == {}


def test_resolve_datasets(tmp_path: Path):
    bundle = load_all_configs(_write_base(tmp_path))

    assert resolve_datasets(bundle, "all") == ["first", "second"]
    assert resolve_datasets(bundle, "second") == ["second"]
    with pytest.raises(ConfigError):
        resolve_datasets(bundle, "third")


def test_load_all_configs_applies_overlay_values(tmp_path: Path):
    base = _write_base(tmp_path)
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "pipeline.yml").write_text("classification:\n  workers: 4\n", encoding="utf-8")

    bundle = load_all_configs(base, overlay_config_dir=overlay)

    assert bundle.classification["workers"] == 4
    assert set(bundle.datasets) == {"first", "second"}


def test_load_all_configs_ignores_empty_overlay_file(tmp_path: Path):
    base = _write_base(tmp_path)
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "pipeline.yml").write_text("", encoding="utf-8")

    bundle = load_all_configs(base, overlay_config_dir=overlay)
    assert bundle.classification["workers"] == 1


def test_load_all_configs_rejects_non_mapping_overlay(tmp_path: Path):
    base = _write_base(tmp_path)
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "pipeline.yml").write_text("- not\n- a\n- mapping\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_all_configs(base, overlay_config_dir=overlay)


def test_load_all_configs_requires_pipeline_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_all_configs(tmp_path)
