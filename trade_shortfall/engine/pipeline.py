"""Run the full report: accumulate trades, reduce candles, join."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from trade_shortfall.config import ReportConfig
from trade_shortfall.data.loader import read_rows, write_rows
from trade_shortfall.engine.candles import reduce_candles
from trade_shortfall.engine.join import format_rows, join_positions
from trade_shortfall.engine.trades import accumulate_trades

logger = logging.getLogger(__name__)


def build_report(
    trade_rows: Sequence[Sequence[str]],
    candle_rows: Sequence[Sequence[str]],
    config: Optional[ReportConfig] = None,
) -> List[List[str]]:
    """Turn raw trade and candle rows into formatted output rows."""
    cfg = config or ReportConfig()
    trades = accumulate_trades(trade_rows, cfg.trade_layout, cfg.collect_errors)
    summaries = reduce_candles(candle_rows, cfg.candle_layout, cfg.collect_errors)
    rows = join_positions(trades, summaries, missing_candles=cfg.missing_candles, sort_output=cfg.sort_output)
    return format_rows(rows, cfg.decimal_places)


def run_report(config: Optional[ReportConfig] = None) -> List[List[str]]:
    """Read both inputs, build the report and write it to ``config.output_path``.

    Nothing is written if any stage fails.
    """
    cfg = config or ReportConfig()
    logger.info("Reading trades from %s", cfg.trades_path)
    trade_rows = read_rows(cfg.trades_path)
    logger.info("Reading candles from %s", cfg.candles_path)
    candle_rows = read_rows(cfg.candles_path)

    output = build_report(trade_rows, candle_rows, cfg)
    target: Path = write_rows(output, cfg.output_path)
    logger.info("Wrote %d rows to %s", len(output), target)
    return output
