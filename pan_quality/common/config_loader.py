"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pan_quality.common.errors import ConfigError
from pan_quality.common.fs import read_yaml
from pan_quality.common.schema import validate_pipeline_config

PIPELINE_CONFIG_FILENAME = "pipeline.yml"


@dataclass(frozen=True)
class ConfigBundle:
    datasets: dict[str, dict]
    classification: dict
    http: dict


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_all_configs(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / PIPELINE_CONFIG_FILENAME

    cfg = validate_pipeline_config(
        _load_yaml_with_overlay(config_dir / PIPELINE_CONFIG_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )
    datasets = {dataset["name"]: dataset for dataset in cfg["datasets"]}
    return ConfigBundle(
        datasets=datasets,
        classification=cfg["classification"],
        http=cfg.get("http") or {},
    )


def resolve_datasets(bundle: ConfigBundle, target: str) -> list[str]:
    if target == "all":
        return list(bundle.datasets)
    if target not in bundle.datasets:
        raise ConfigError(f"Unknown dataset: {target}")
    return [target]
