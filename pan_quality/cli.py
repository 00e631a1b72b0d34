"""CLI entrypoint for the PAN quality pipeline."""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from pan_quality.common.config_loader import ConfigBundle, load_all_configs, resolve_datasets
from pan_quality.common.constants import EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS, STAGES, STATUS_VALID
from pan_quality.common.errors import ContractError, PipelineError
from pan_quality.common.ids import generate_run_id
from pan_quality.common.logging import build_logger, close_logger, log_event
from pan_quality.common.pan import DIGIT_BLOCK, LETTER_BLOCK, matches_pan_format
from pan_quality.common.patterns import has_adjacent_repeat, is_strict_ascending_sequence
from pan_quality.common.time_utils import parse_run_date
from pan_quality.ingest.runner import run_ingest
from pan_quality.pipeline.clean_classify import classify_value, clean_value, run_classify
from pan_quality.pipeline.export import run_export
from pan_quality.pipeline.reports import write_run_summary
from pan_quality.pipeline.validate import run_report


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=[*STAGES, "all", "check"])
    parser.add_argument("--dataset", default="all")
    parser.add_argument("--run-date", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--strict", action="store_true")
    parser.add_argument("--value", default=None, help="candidate PAN for the check command")
    args = parser.parse_args(argv)
    if args.command == "check" and args.value is None:
        parser.error("check requires --value")
    return args


def check_value(value: str) -> dict:
    cleaned = clean_value(value)
    if cleaned is None:
        return {
            "value": value,
            "cleaned_value": None,
            "status": None,
            "reasons": ["MISSING_VALUE"],
            "adjacent_repeat": False,
            "sequential_letters": False,
            "sequential_digits": False,
        }

    result = classify_value(cleaned)
    segmented = matches_pan_format(cleaned)
    return {
        "value": value,
        "cleaned_value": cleaned,
        "status": result.status,
        "reasons": list(result.reasons),
        "adjacent_repeat": has_adjacent_repeat(cleaned),
        "sequential_letters": segmented and is_strict_ascending_sequence(cleaned[LETTER_BLOCK]),
        "sequential_digits": segmented and is_strict_ascending_sequence(cleaned[DIGIT_BLOCK]),
    }


def execute_stage(
    stage: str,
    dataset_name: str,
    cfg: dict,
    bundle: ConfigBundle,
    data_dir: Path,
    run_id: str,
    run_date: str,
) -> dict:
    if stage == "ingest":
        payload = run_ingest(dataset_name, cfg, data_dir, run_id, run_date, http_settings=bundle.http)
        return {"rows_out": payload["row_count"]}
    if stage == "classify":
        payload = run_classify(dataset_name, data_dir, run_id, workers=bundle.classification["workers"])
        return {"rows_in": payload["raw_row_count"], "rows_out": payload["unique_values"]}
    if stage == "export":
        run_export(dataset_name, cfg, data_dir)
        return {}
    if stage == "report":
        run_report(dataset_name, cfg, data_dir, run_id, run_date)
        return {}
    raise ValueError(f"Unknown stage: {stage}")


def run_command(args: argparse.Namespace) -> int:
    if args.command == "check":
        verdict = check_value(args.value)
        print(json.dumps(verdict, ensure_ascii=False, sort_keys=True))
        return EXIT_SUCCESS if verdict["status"] == STATUS_VALID else EXIT_PARTIAL

    run_id = args.run_id or generate_run_id()
    run_date = parse_run_date(args.run_date)
    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    data_dir = Path(args.data_dir)

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    try:
        bundle = load_all_configs(config_dir, overlay_config_dir=overlay_config_dir)
        datasets = resolve_datasets(bundle, args.dataset)
        stages = STAGES if args.command == "all" else (args.command,)

        had_partial_failure = False
        failed: set[str] = set()

        for stage in stages:
            log_event(logger, "stage start", run_id=run_id, stage=stage, event="STAGE_START", status="ok")
            for dataset_name in datasets:
                if dataset_name in failed:
                    continue
                started = time.monotonic()
                try:
                    counts = execute_stage(stage, dataset_name, bundle.datasets[dataset_name], bundle, data_dir, run_id, run_date)
                except PipelineError as exc:
                    had_partial_failure = True
                    failed.add(dataset_name)
                    log_event(
                        logger,
                        f"stage failed for dataset {dataset_name}: {exc}",
                        run_id=run_id,
                        stage=stage,
                        dataset=dataset_name,
                        event="STAGE_FAIL",
                        status="error",
                        error_code=exc.error_code,
                    )
                    if isinstance(exc, ContractError) or args.strict:
                        return EXIT_HARD_FAIL
                    continue
                except Exception:
                    had_partial_failure = True
                    failed.add(dataset_name)
                    logger.exception(
                        f"unexpected failure for dataset {dataset_name}",
                        extra={
                            "run_id": run_id,
                            "stage": stage,
                            "dataset": dataset_name,
                            "event": "STAGE_FAIL",
                            "status": "error",
                            "error_code": "UNEXPECTED_ERROR",
                        },
                    )
                    if args.strict:
                        return EXIT_HARD_FAIL
                    continue
                log_event(
                    logger,
                    f"dataset {dataset_name} done",
                    run_id=run_id,
                    stage=stage,
                    dataset=dataset_name,
                    event="DATASET_DONE",
                    status="ok",
                    duration_ms=int((time.monotonic() - started) * 1000),
                    **counts,
                )
            log_event(logger, "stage end", run_id=run_id, stage=stage, event="STAGE_END", status="ok")

        if "report" in stages:
            write_run_summary(data_dir, run_id=run_id, run_date=run_date, datasets=datasets)
        if had_partial_failure:
            return EXIT_PARTIAL
        return EXIT_SUCCESS
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
