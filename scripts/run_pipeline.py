#!/usr/bin/env python3
"""Score companies from a JSON file of financial statements.

Usage:
    python -m scripts.run_pipeline statements.json
    python -m scripts.run_pipeline statements.json --benchmarks industry.json
    python -m scripts.run_pipeline statements.json --json-logs --log-level DEBUG
    python -m scripts.run_pipeline statements.json --output report.json

Input format:
    A JSON array of statement objects (``period``, ``assets``,
    ``liabilities``, ...).  Statements are grouped by ``company_id``; each
    group is assessed on its latest period with the rest as history.

Pipeline steps (per company):
    1. ratios:   liquidity, leverage, profitability, efficiency
    2. fraud:    Benford's Law, earnings quality, receivables, assets, accruals
    3. risks:    financial, liquidity, operational, market
    4. forecast: Altman Z-Score, revenue forecast, profitability trend
    5. score:    weighted final score and AAA..D rating
"""

import argparse
import json
import math
import sys
import time
from collections import OrderedDict
from pathlib import Path
from typing import Any

from pydantic import ValidationError

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from finrisk.config import Settings
from finrisk.errors import FinRiskError
from finrisk.facade import AssessmentFacade
from finrisk.logging_config import get_logger, setup_logging_from_settings

logger = get_logger("pipeline")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the financial risk scoring pipeline.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("statements", type=Path, help="JSON file with statements")
    parser.add_argument(
        "--benchmarks",
        type=Path,
        default=None,
        help="JSON object of industry averages (currentRatio, debtToEquity, profitMargin, roe)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the assessment JSON here instead of stdout",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--log-level", default=None, help="Override FINRISK_LOG_LEVEL")
    return parser.parse_args(argv)


def group_by_company(records: list[dict]) -> list[list[dict]]:
    """Split statement records into per-company histories, first-seen order."""
    groups: "OrderedDict[object, list[dict]]" = OrderedDict()
    for record in records:
        groups.setdefault(record.get("company_id"), []).append(record)
    return list(groups.values())


def json_safe(value: Any) -> Any:
    """Replace non-finite floats with "Infinity" / "-Infinity" / "NaN" strings.

    A zero-liability Z-Score or a non-positive-equity leverage ratio is
    legitimately infinite; strict JSON has no literal for it.
    """
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = Settings()
    overrides = {}
    if args.json_logs:
        overrides["json_logs"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = settings.model_copy(update=overrides)
    # Logs go to stderr so the report on stdout stays valid JSON
    setup_logging_from_settings(settings, stream=sys.stderr)

    try:
        records = json.loads(args.statements.read_text(encoding="utf-8"))
        benchmarks = None
        if args.benchmarks:
            benchmarks = json.loads(args.benchmarks.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.error("invalid_input", reason=str(exc))
        return 1
    if not isinstance(records, list):
        logger.error("invalid_input", reason="expected a JSON array of statements")
        return 1

    portfolio = group_by_company(records)
    logger.info(
        "pipeline_started",
        app=settings.app_name,
        source=str(args.statements),
        statements=len(records),
        companies=len(portfolio),
    )

    t0 = time.time()
    try:
        with AssessmentFacade(settings=settings) as facade:
            results = facade.assess_portfolio(portfolio, benchmarks)
    except (FinRiskError, ValidationError) as exc:
        logger.error("pipeline_failed", error=str(exc), error_type=type(exc).__name__)
        return 1

    payload = json.dumps(json_safe(results), ensure_ascii=False, indent=2, default=str, allow_nan=False)
    if args.output:
        args.output.write_text(payload, encoding="utf-8")
    else:
        print(payload)

    for r in results:
        logger.info(
            "company_scored",
            company_id=r["company_id"],
            period=r["period"],
            final_score=r["weighted_score"]["final_score"],
            rating=r["weighted_score"]["rating"],
        )
    logger.info("pipeline_completed", companies=len(results), seconds=round(time.time() - t0, 2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
