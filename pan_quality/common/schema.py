"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from pan_quality.common.constants import SOURCE_TYPES
from pan_quality.common.errors import ConfigError

SOURCE_KEYS_BY_TYPE = {
    "csv": ({"type", "path", "column"}, {"type", "path", "column"}),
    "xlsx": ({"type", "path", "column"}, {"type", "path", "column", "sheet"}),
    "http": ({"type", "url", "column"}, {"type", "url", "column"}),
}


def _assert_mapping(obj: object, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    _assert_mapping(obj, ctx)
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_source_config(source: dict, ctx: str, *, allow_unknown: bool = False) -> dict:
    _assert_required_keys(source, {"type"}, ctx)
    source_type = source["type"]
    if source_type not in SOURCE_TYPES:
        raise ConfigError(f"Unsupported source type in {ctx}: {source_type}")

    required, known = SOURCE_KEYS_BY_TYPE[source_type]
    _assert_required_keys(source, required, ctx)
    _assert_no_unknown_keys(source, known, ctx, allow_unknown)
    return source


def validate_dataset_config(cfg: dict, ctx: str, *, allow_unknown: bool = False) -> dict:
    required = {"name", "source", "output"}
    _assert_required_keys(cfg, required, ctx)
    _assert_no_unknown_keys(cfg, required, ctx, allow_unknown)

    if not isinstance(cfg["name"], str) or not cfg["name"].strip():
        raise ConfigError(f"{ctx}.name must be a non-empty string")
    validate_source_config(cfg["source"], f"{ctx}.source", allow_unknown=allow_unknown)
    _assert_required_keys(cfg["output"], {"classified_filename"}, f"{ctx}.output")
    _assert_no_unknown_keys(cfg["output"], {"classified_filename"}, f"{ctx}.output", allow_unknown)
    return cfg


def validate_pipeline_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"version", "classification", "datasets"}
    top_known = top_required | {"http"}
    _assert_required_keys(cfg, top_required, "pipeline config")
    _assert_no_unknown_keys(cfg, top_known, "pipeline config", allow_unknown)

    _assert_required_keys(cfg["classification"], {"workers"}, "classification")
    workers = cfg["classification"]["workers"]
    if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
        raise ConfigError("classification.workers must be a positive integer")

    if "http" in cfg:
        _assert_mapping(cfg["http"], "http")

    if not isinstance(cfg["datasets"], list) or not cfg["datasets"]:
        raise ConfigError("datasets must be a non-empty list")

    names: list[str] = []
    for idx, dataset in enumerate(cfg["datasets"]):
        validate_dataset_config(dataset, f"datasets[{idx}]", allow_unknown=allow_unknown)
        names.append(dataset["name"])

    dupes = {name for name in names if names.count(name) > 1}
    if dupes:
        raise ConfigError(f"Duplicate dataset names: {', '.join(sorted(dupes))}")

    return cfg
