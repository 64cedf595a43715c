from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from timeoff.analysis import Analytics
from timeoff.config import Config, cfg
from timeoff.filters import ALL, FilterCriteria
from timeoff.intervals import to_date
from timeoff.models import CATEGORIES
from timeoff.reporting import Reporter
from timeoff.sources import (
    JsonDataSource,
    MockDataSource,
    MockSourceConfig,
    TenantRegistry,
    TimeOffDataSource,
    load_snapshot,
)


def default_data_source(config: Config) -> TimeOffDataSource:
    """Seeded synthetic data for demos and local runs."""
    return MockDataSource(MockSourceConfig(seed=config.SEED))


def run_report(
    config: Config | None = None,
    source: TimeOffDataSource | None = None,
    reporter: Reporter | None = None,
    today: Any = None,
    month: tuple[int, int] | None = None,
    validate_config: bool = True,
    threshold: float | None = None,
    limit: int | None = None,
    criteria: FilterCriteria | None = None,
) -> Analytics:
    """
    Load a snapshot and render the time-off report for it.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `timeoff.config.cfg` when omitted.
    source:
        Data source to read from. Defaults to the seeded mock data source.
    reporter:
        Custom reporter instance. Defaults to `Reporter(config)`.
    today:
        Date used to mark "today" in the calendar. Defaults to the current date.
    month:
        Optional (year, month) calendar to print alongside the report.
    threshold / limit:
        Override COVERAGE_THRESHOLD / BUSIEST_DAY_LIMIT for this run.
    criteria:
        Optional display filters; when any is active the filtered day
        listing is printed and written to filtered_days.csv.

    Returns
    -------
    Analytics
        Every derived view computed for the snapshot.
    """
    cfg_obj = config or cfg
    if threshold is not None or limit is not None:
        cfg_obj = replace(
            cfg_obj,
            COVERAGE_THRESHOLD=(
                cfg_obj.COVERAGE_THRESHOLD if threshold is None else threshold
            ),
            BUSIEST_DAY_LIMIT=cfg_obj.BUSIEST_DAY_LIMIT if limit is None else limit,
        )
    if validate_config:
        cfg_obj.validate()

    data_source = source or default_data_source(cfg_obj)
    snapshot = load_snapshot(data_source, cfg_obj.DATE_FROM, cfg_obj.DATE_TO)

    active_reporter = reporter or Reporter(cfg_obj)
    return active_reporter.render(
        snapshot,
        to_date(today) if today is not None else date.today(),
        month=month,
        criteria=criteria,
    )


def _parse_month(value: str) -> tuple[int, int]:
    try:
        year_s, month_s = value.split("-", 1)
        year, month = int(year_s), int(month_s)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM, got {value!r}") from exc
    if not (1 <= month <= 12):
        raise argparse.ArgumentTypeError(f"Month out of range in {value!r}")
    return year, month


def _parse_category(value: str) -> str:
    category = value.upper()
    if value.lower() == ALL:
        return ALL
    if category not in CATEGORIES:
        raise argparse.ArgumentTypeError(
            f"Unknown category {value!r} (expected one of {', '.join(CATEGORIES)} or all)"
        )
    return category


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Time-off analytics report.")
    src = parser.add_mutually_exclusive_group()
    src.add_argument("--tenant", help="Tenant id to load from the tenants file.")
    src.add_argument("--json", type=Path, help="Read employees/divisions/events from a JSON file.")
    parser.add_argument(
        "--tenants-file",
        type=Path,
        default=None,
        help="Path to tenants.json (defaults to Config.TENANTS_FILE).",
    )
    parser.add_argument("--from", dest="date_from", help="Window start (YYYY-MM-DD).")
    parser.add_argument("--to", dest="date_to", help="Window end (YYYY-MM-DD).")
    parser.add_argument("--threshold", type=float, help="Coverage-gap threshold in [0, 1].")
    parser.add_argument("--limit", type=int, help="Number of busiest days to list.")
    parser.add_argument("--month", type=_parse_month, help="Print a calendar for YYYY-MM.")
    parser.add_argument("--today", help="Override today's date (YYYY-MM-DD).")
    parser.add_argument("--output-dir", type=Path, help="Directory for PDF/PNG/CSV outputs.")
    parser.add_argument("--no-plots", action="store_true", help="Skip charts.")
    parser.add_argument("--seed", type=int, help="Seed for the mock data source.")

    flt = parser.add_argument_group("filters", "Print and export a filtered day listing.")
    flt.add_argument("--division", default=ALL, help="Event division id, or 'all'.")
    flt.add_argument(
        "--category", type=_parse_category, default=ALL, help="Leave category, or 'all'."
    )
    flt.add_argument("--name", default="", help="Case-insensitive employee name substring.")
    flt.add_argument("--day-from", help="First day of the filtered listing (YYYY-MM-DD).")
    flt.add_argument("--day-to", help="Last day of the filtered listing (YYYY-MM-DD).")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> Analytics:
    """CLI entry point."""
    args = parse_args(argv)

    overrides: dict[str, Any] = {"ENABLE_PLOTS": cfg.ENABLE_PLOTS and not args.no_plots}
    if args.tenants_file is not None:
        overrides["TENANTS_FILE"] = args.tenants_file
    if args.date_from:
        overrides["DATE_FROM"] = args.date_from
    if args.date_to:
        overrides["DATE_TO"] = args.date_to
    if args.threshold is not None:
        overrides["COVERAGE_THRESHOLD"] = args.threshold
    if args.limit is not None:
        overrides["BUSIEST_DAY_LIMIT"] = args.limit
    if args.output_dir is not None:
        overrides["OUTPUT_DIR"] = args.output_dir
    if args.seed is not None:
        overrides["SEED"] = args.seed
    config = replace(cfg, **overrides)
    try:
        config.validate()
        criteria = FilterCriteria(
            division_id=args.division,
            category=args.category,
            name_query=args.name,
            date_from=args.day_from,
            date_to=args.day_to,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid options: {exc}") from exc

    source: TimeOffDataSource | None = None
    if args.tenant:
        registry = TenantRegistry(config.TENANTS_FILE, config.TENANT_CACHE_TTL_SEC)
        source = registry.data_source_for(args.tenant)
        if source is None:
            raise SystemExit(f"Tenant '{args.tenant}' has no data source configured.")
    elif args.json:
        source = JsonDataSource(args.json)

    return run_report(
        config=config,
        source=source,
        today=args.today,
        month=args.month,
        validate_config=False,
        criteria=criteria,
    )


def cli() -> None:
    """Console-script wrapper; `main` returns the analytics for library callers."""
    main()


if __name__ == "__main__":
    cli()
