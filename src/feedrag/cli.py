"""Command-line interface for the fee drag estimator."""
from __future__ import annotations

import argparse
import logging

from .computation import (
    TABLE_HEADER,
    break_even_or_none,
    calculate_fees_on_capital,
    resolve_use_numpy,
    table_rows,
)
from .config import DEFAULT_INPUTS, DEFAULT_LOCALE, SUPPORTED_LOCALES
from .errors import FeeDragError
from .i18n import MessageCatalog, format_decimal
from .logging_config import setup_logging
from .parsing import parse_config
from .reporting import export_csv, render_table

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show how annual fees erode compounded investment returns."
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--cli", action="store_true", help="Run in CLI mode")
    mode.add_argument("--gui", action="store_true", help="Run GUI")
    parser.add_argument("--capital", default=f"{DEFAULT_INPUTS['capital']:.0f}", help="Starting capital")
    parser.add_argument(
        "--return",
        dest="return_pct",
        default=f"{DEFAULT_INPUTS['return_pct']:g}",
        help="Gross annual return in % (e.g., 7)",
    )
    parser.add_argument("--years", default=str(DEFAULT_INPUTS["years"]), help="Horizon in years")
    parser.add_argument(
        "--fee", dest="fee_pct", default=f"{DEFAULT_INPUTS['fee_pct']:g}", help="Base annual fee in %"
    )
    parser.add_argument(
        "--locale",
        choices=list(SUPPORTED_LOCALES),
        default=DEFAULT_LOCALE,
        help="Language and currency symbol for labels",
    )
    parser.add_argument(
        "--engine",
        choices=["auto", "numpy", "python"],
        default="auto",
        help="Computation engine: auto uses NumPy",
    )
    parser.add_argument(
        "--loose-fees",
        action="store_true",
        help="Do not cap the higher fee scenario one point below the return",
    )
    parser.add_argument("--start-year", type=int, default=None, help="Label of the first year (default: this year)")
    parser.add_argument("--csv", default="", help="Export the yearly table to this CSV path")
    parser.add_argument("--plot", action="store_true", help="Open the interactive chart (CLI)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def _show_plot(result, catalog: MessageCatalog) -> None:
    import matplotlib.pyplot as plt

    from .chart import ChartSession

    fig = plt.figure(figsize=(10, 6))
    session = ChartSession(fig.canvas, catalog)
    session.render(result)
    plt.show()


def run_cli(args: argparse.Namespace) -> None:
    setup_logging(verbose=args.verbose)
    catalog = MessageCatalog(args.locale)
    try:
        config = parse_config(
            args.capital, args.return_pct, args.years, args.fee_pct, locale=args.locale
        )
        result = calculate_fees_on_capital(
            config,
            current_year=args.start_year,
            use_numpy=resolve_use_numpy(args.engine),
            strict=not args.loose_fees,
        )
    except FeeDragError as exc:
        logger.debug("Rejected configuration", exc_info=True)
        build_parser().exit(2, f"Error: {exc}\n")

    scenarios = result.scenarios
    print(
        catalog.instant(
            "SCENARIOS",
            lower=format_decimal(scenarios.lower_pct, catalog.locale),
            base=format_decimal(scenarios.base_pct, catalog.locale),
            higher=format_decimal(scenarios.higher_pct, catalog.locale),
        )
    )
    print()
    rows = table_rows(result)
    for line in render_table(TABLE_HEADER, rows, catalog.currency):
        print(line)
    print()

    years = break_even_or_none(config)
    if years is None:
        print(catalog.instant("YEARS_TO_DOUBLE_UNDEFINED"))
    else:
        print(catalog.instant("YEARS_TO_DOUBLE", years=format_decimal(years, catalog.locale, 1)))

    if args.csv:
        export_csv(args.csv, TABLE_HEADER, rows)
        print(f"\nCSV exported to {args.csv}")

    if args.plot:
        _show_plot(result, catalog)


__all__ = ["build_parser", "run_cli"]
