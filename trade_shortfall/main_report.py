"""CLI entrypoint: compare realized trade profit with the best possible profit."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import matplotlib.pyplot as plt

from trade_shortfall.config import (
    DEFAULT_CANDLES_FILE,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_TRADES_FILE,
    MISSING_CANDLES_ERROR,
    MISSING_CANDLES_ZERO,
    ReportConfig,
)
from trade_shortfall.data.loader import rows_to_frame
from trade_shortfall.engine import ShortfallError, run_report
from trade_shortfall.report.metrics import plot_shortfall, summarize_report

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report realized vs. maximum possible gain per account and ticker.",
        epilog=(
            "Each account/ticker pair must have exactly one buy row and one sell row. "
            "A second buy or sell row for the same pair aborts the run (DuplicateLeg) "
            "and a pair missing either leg aborts it too (InsufficientData); no report is written."
        ),
    )
    parser.add_argument("--trades", default=str(DEFAULT_TRADES_FILE), help="Trade executions CSV (no header).")
    parser.add_argument("--candles", default=str(DEFAULT_CANDLES_FILE), help="Candle CSV (no header).")
    parser.add_argument("--output", default=str(DEFAULT_OUTPUT_FILE), help="Path to write the report CSV.")
    parser.add_argument(
        "--unsorted",
        action="store_true",
        help="Keep first-seen row order instead of sorting by account and ticker.",
    )
    parser.add_argument(
        "--collect-errors",
        action="store_true",
        help="List every malformed row before aborting instead of stopping at the first.",
    )
    parser.add_argument(
        "--missing-candles",
        choices=[MISSING_CANDLES_ZERO, MISSING_CANDLES_ERROR],
        default=MISSING_CANDLES_ZERO,
        help="How to treat traded tickers with no candle rows.",
    )
    parser.add_argument("--plot", default=None, help="Optional path to save a per-account gain chart (PNG).")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...).")
    return parser.parse_args(argv)


def run(cfg: ReportConfig, plot_path: Optional[str] = None):
    try:
        rows = run_report(cfg)
    except ShortfallError as exc:
        logger.error("Report aborted: %s", exc)
        raise SystemExit(f"Error: {exc}") from exc

    report_df = rows_to_frame(rows)
    summary = summarize_report(report_df)
    print(f"Shortfall report written to {cfg.output_path}")
    print(f"Positions: {summary['rows']} across {summary['accounts']} accounts")
    print(f"Realized gain: {summary['realized_gain']:.2f}")
    print(f"Max possible gain: {summary['max_gain']:.2f}")
    print(f"Total shortfall: {summary['shortfall']:.2f}")
    worst = summary["worst"]
    if worst:
        print(f"Largest shortfall: account {worst['account_id']} {worst['ticker']} ({worst['shortfall']:.2f})")

    if plot_path and not report_df.empty:
        fig = plot_shortfall(report_df)
        fig.savefig(plot_path)
        plt.close(fig)
        print(f"Saved chart to {plot_path}")
    return report_df


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    cfg = ReportConfig(
        trades_path=args.trades,
        candles_path=args.candles,
        output_path=args.output,
        sort_output=not args.unsorted,
        collect_errors=args.collect_errors,
        missing_candles=args.missing_candles,
    )
    run(cfg, plot_path=args.plot)


if __name__ == "__main__":
    main()
