"""Command-line interface for the reporting pipeline.

Provides subcommands: `import`, `delete`, `monthly`, `trailing`, `trends`,
`yearly`, `fixed-costs`, `payments` and `kpi`. Each command is implemented as
a `cmd_*` function that accepts an argparse namespace and the report service.
"""
from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

import pandas as pd
from dotenv import load_dotenv

from bizops_pipeline.aggregate.frames import summaries_frame, trends_frame, yearly_frame
from bizops_pipeline.aggregate.summary import profit_margins
from bizops_pipeline.aggregate.trends import compute_trends, year_over_year_trends
from bizops_pipeline.clean.load_clean import import_records, read_source
from bizops_pipeline.config import get_settings
from bizops_pipeline.errors import BizOpsError, InvalidReportRequestError
from bizops_pipeline.logging_config import configure_logging
from bizops_pipeline.models import ReportFilters
from bizops_pipeline.service import PAYMENT_COLLECTIONS, RECORD_COLLECTIONS, ReportService
from bizops_pipeline.store import COLLECTIONS, open_repositories

log = logging.getLogger(__name__)

REPORT_COLLECTIONS = (*RECORD_COLLECTIONS, "fixed_costs")


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _filters(args: argparse.Namespace) -> ReportFilters | None:
    """Build report filters from the common filter options, if any were given."""
    values = {
        "start_date": getattr(args, "start_date", None),
        "end_date": getattr(args, "end_date", None),
        "employee_id": getattr(args, "employee_id", None),
        "category": getattr(args, "category", None),
    }
    values = {k: v for k, v in values.items() if v is not None}
    return ReportFilters(**values) if values else None


def _print_frame(pdf: pd.DataFrame) -> None:
    if pdf.empty:
        print("(no rows)")
    else:
        print(pdf.to_string(index=False))


# --------------------------------------------------
# DATA
# --------------------------------------------------
def cmd_import(args: argparse.Namespace, service: ReportService) -> None:
    """Import a CSV/JSON export into a collection."""
    ddf = read_source(Path(args.file))
    good, bad = import_records(ddf, service.repositories[args.collection])
    print(f"imported={good} rejected={bad}")


def cmd_delete(args: argparse.Namespace, service: ReportService) -> None:
    """Delete one record by id."""
    service.repositories[args.collection].delete(args.id)
    print(f"deleted {args.id}")


# --------------------------------------------------
# REPORTS
# --------------------------------------------------
def cmd_monthly(args: argparse.Namespace, service: ReportService) -> None:
    """Print the twelve monthly summaries of a year."""
    summaries = service.monthly_summaries(args.collection, args.year, _filters(args))
    _print_frame(summaries_frame(summaries))


def cmd_trailing(args: argparse.Namespace, service: ReportService) -> None:
    """Print summaries for the trailing window."""
    summaries = service.trailing_summaries(args.collection, args.months, args.today, _filters(args))
    _print_frame(summaries_frame(summaries))


def cmd_trends(args: argparse.Namespace, service: ReportService) -> None:
    """Print month-over-month (or year-over-year) changes."""
    summaries = service.trailing_summaries(args.collection, args.months, args.today, _filters(args))
    trends = year_over_year_trends(summaries) if args.year_over_year else compute_trends(summaries)
    _print_frame(trends_frame(trends))


def cmd_yearly(args: argparse.Namespace, service: ReportService) -> None:
    """Print yearly totals with profit margins."""
    yearly = service.yearly_summaries(args.collection, args.from_year, args.to_year, _filters(args))
    pdf = yearly_frame(yearly)
    if not pdf.empty:
        margins = pd.DataFrame([profit_margins(y) for y in yearly])
        pdf = pd.concat([pdf, margins], axis=1)
    _print_frame(pdf)


def cmd_fixed_costs(args: argparse.Namespace, service: ReportService) -> None:
    """Print the fixed-cost breakdown for the trailing window."""
    _print_frame(summaries_frame(service.fixed_cost_summaries(args.months, args.today)))


def cmd_payments(args: argparse.Namespace, service: ReportService) -> None:
    """List payments for one payee or one payroll month."""
    if args.payee_id is not None:
        if args.collection == "employee_payments":
            payments = service.employee_payments(args.payee_id)
        else:
            payments = service.contractor_payments(args.payee_id)
        if args.month is not None:
            payments = [p for p in payments if p.month == args.month]
    elif args.month is not None:
        payments = service.payments_for_month(args.collection, args.month)
    else:
        raise InvalidReportRequestError("payments needs --payee-id or --month")
    _print_frame(pd.DataFrame([p.model_dump() for p in payments]))


def cmd_kpi(args: argparse.Namespace, service: ReportService) -> None:
    """Print overall and per-category KPI progress."""
    overview = service.kpi_overview(args.user_id)
    rows = [{"category": "overall", **overview["overall"].model_dump()}]
    rows += [{"category": c, **p.model_dump()} for c, p in overview["by_category"].items()]
    _print_frame(pd.DataFrame(rows))


COMMANDS = {
    "import": cmd_import,
    "delete": cmd_delete,
    "monthly": cmd_monthly,
    "trailing": cmd_trailing,
    "trends": cmd_trends,
    "yearly": cmd_yearly,
    "fixed-costs": cmd_fixed_costs,
    "payments": cmd_payments,
    "kpi": cmd_kpi,
}


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _add_filter_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--start-date", type=date.fromisoformat, default=None)
    p.add_argument("--end-date", type=date.fromisoformat, default=None)
    p.add_argument("--employee-id", default=None)
    p.add_argument("--category", default=None)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="bizops")
    p.add_argument("--log-file", type=Path, default=Path("logs/bizops.log"))
    p.add_argument("--log-level", default=None, help="overrides BIZOPS_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_import = sub.add_parser("import")
    p_import.add_argument("--collection", choices=sorted(COLLECTIONS), required=True)
    p_import.add_argument("--file", required=True)

    p_delete = sub.add_parser("delete")
    p_delete.add_argument("--collection", choices=sorted(COLLECTIONS), required=True)
    p_delete.add_argument("--id", required=True)

    p_monthly = sub.add_parser("monthly")
    p_monthly.add_argument("--collection", choices=RECORD_COLLECTIONS, default="sales")
    p_monthly.add_argument("--year", type=int, default=date.today().year)
    _add_filter_options(p_monthly)

    for name in ("trailing", "trends"):
        p_window = sub.add_parser(name)
        p_window.add_argument("--collection", choices=REPORT_COLLECTIONS, default="sales")
        p_window.add_argument("--months", type=int, default=None)
        p_window.add_argument("--today", type=date.fromisoformat, default=None)
        _add_filter_options(p_window)
        if name == "trends":
            p_window.add_argument("--year-over-year", action="store_true")

    p_yearly = sub.add_parser("yearly")
    p_yearly.add_argument("--collection", choices=RECORD_COLLECTIONS, default="sales")
    p_yearly.add_argument("--from-year", type=int, default=date.today().year)
    p_yearly.add_argument("--to-year", type=int, default=date.today().year)
    _add_filter_options(p_yearly)

    p_fixed = sub.add_parser("fixed-costs")
    p_fixed.add_argument("--months", type=int, default=None)
    p_fixed.add_argument("--today", type=date.fromisoformat, default=None)

    p_payments = sub.add_parser("payments")
    p_payments.add_argument("--collection", choices=PAYMENT_COLLECTIONS, default="employee_payments")
    p_payments.add_argument("--payee-id", default=None)
    p_payments.add_argument("--month", default=None)

    p_kpi = sub.add_parser("kpi")
    p_kpi.add_argument("--user-id", default=None)

    return p


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    settings = get_settings()
    service = ReportService(open_repositories(settings), settings.trailing_months)

    try:
        COMMANDS[args.cmd](args, service)
    except BizOpsError as exc:
        log.error("%s failed: %s", args.cmd, exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
