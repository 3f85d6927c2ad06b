"""Candle reducer: fold price-range observations into one summary per ticker."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from trade_shortfall.config import CandleLayout
from trade_shortfall.engine.records import parse_candle_row, parse_rows
from trade_shortfall.engine.types import CandleRecord, PriceSummary

logger = logging.getLogger(__name__)


def fold_candle(summary: Optional[PriceSummary], candle: CandleRecord) -> PriceSummary:
    """Return the summary updated with one candle.

    Strict comparisons: on ties the earlier observation keeps its time label.
    """
    if summary is None:
        return PriceSummary.from_candle(candle)

    result = PriceSummary(
        min_price=summary.min_price,
        max_price=summary.max_price,
        time_min=summary.time_min,
        time_max=summary.time_max,
    )
    if candle.max_price > result.max_price:
        result.max_price = candle.max_price
        result.time_max = candle.time
    if candle.min_price < result.min_price:
        result.min_price = candle.min_price
        result.time_min = candle.time
    return result


def reduce_candles(
    rows: Sequence[Sequence[str]],
    layout: CandleLayout = CandleLayout(),
    collect_errors: bool = False,
) -> Dict[str, PriceSummary]:
    """Build ``{ticker: PriceSummary}`` from raw candle rows."""
    summaries: Dict[str, PriceSummary] = {}
    for _, candle in parse_rows(rows, parse_candle_row, layout, "candle", collect_errors):
        summaries[candle.ticker] = fold_candle(summaries.get(candle.ticker), candle)

    logger.info("Reduced %d candle rows into %d instrument summaries", len(rows), len(summaries))
    return summaries
