"""Output joiner: combine positions with instrument summaries into report rows."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from trade_shortfall.config import DEFAULT_DECIMAL_PLACES, MISSING_CANDLES_ERROR, MISSING_CANDLES_ZERO
from trade_shortfall.engine.errors import InsufficientData
from trade_shortfall.engine.trades import TradeBook
from trade_shortfall.engine.types import AccountPosition, PriceSummary, ShortfallRow

logger = logging.getLogger(__name__)


def compute_row(position: AccountPosition, summary: PriceSummary) -> ShortfallRow:
    """Realized gain, best possible gain and the gap between them."""
    if not position.is_complete:
        raise InsufficientData(position.account_id, position.ticker, " and ".join(position.missing_legs()) + " leg")

    user_diff = position.sell_price - position.buy_price
    max_diff = summary.spread
    return ShortfallRow(
        account_id=position.account_id,
        ticker=position.ticker,
        user_diff=user_diff,
        max_diff=max_diff,
        lost=max_diff - user_diff,
        time_max=summary.time_max,
        time_min=summary.time_min,
    )


def _summary_for(
    ticker: str,
    summaries: Mapping[str, PriceSummary],
    missing_candles: str,
    warned: set,
) -> PriceSummary:
    summary: Optional[PriceSummary] = summaries.get(ticker)
    if summary is not None:
        return summary
    if missing_candles == MISSING_CANDLES_ERROR:
        raise InsufficientData(None, ticker, "candle data")
    if ticker not in warned:
        logger.warning("No candle data for %s; using a zero price range", ticker)
        warned.add(ticker)
    return PriceSummary.empty()


def join_positions(
    trades: TradeBook,
    summaries: Mapping[str, PriceSummary],
    missing_candles: str = MISSING_CANDLES_ZERO,
    sort_output: bool = True,
) -> List[ShortfallRow]:
    """One row per (account, ticker) pair present in ``trades``.

    Tickers that only appear in ``summaries`` produce no rows.
    """
    rows: List[ShortfallRow] = []
    warned: set = set()
    for positions in trades.values():
        for ticker, position in positions.items():
            summary = _summary_for(ticker, summaries, missing_candles, warned)
            rows.append(compute_row(position, summary))

    if sort_output:
        rows.sort(key=lambda row: (row.account_id, row.ticker))
    logger.info("Joined %d positions with %d instrument summaries", len(rows), len(summaries))
    return rows


def format_rows(rows: List[ShortfallRow], decimal_places: int = DEFAULT_DECIMAL_PLACES) -> List[List[str]]:
    return [row.to_fields(decimal_places) for row in rows]
