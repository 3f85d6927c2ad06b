"""Aggregation engine for the trade shortfall report."""

from trade_shortfall.engine.candles import fold_candle, reduce_candles
from trade_shortfall.engine.errors import (
    DuplicateLeg,
    InsufficientData,
    IOFailure,
    MalformedRecord,
    ParseFailure,
    RecordErrors,
    ShortfallError,
)
from trade_shortfall.engine.join import compute_row, format_rows, join_positions
from trade_shortfall.engine.pipeline import build_report, run_report
from trade_shortfall.engine.trades import accumulate_trades, add_trade
from trade_shortfall.engine.types import AccountPosition, CandleRecord, PriceSummary, ShortfallRow, TradeRecord

__all__ = [
    "accumulate_trades",
    "add_trade",
    "reduce_candles",
    "fold_candle",
    "join_positions",
    "compute_row",
    "format_rows",
    "build_report",
    "run_report",
    "AccountPosition",
    "CandleRecord",
    "PriceSummary",
    "ShortfallRow",
    "TradeRecord",
    "ShortfallError",
    "IOFailure",
    "ParseFailure",
    "MalformedRecord",
    "RecordErrors",
    "InsufficientData",
    "DuplicateLeg",
]
