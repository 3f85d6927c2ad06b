"""Trade accumulator: group executed legs by account and ticker."""

from __future__ import annotations

import logging
from typing import Dict, Sequence

from trade_shortfall.config import TradeLayout
from trade_shortfall.engine.errors import DuplicateLeg
from trade_shortfall.engine.records import parse_rows, parse_trade_row
from trade_shortfall.engine.types import BUY, AccountPosition, TradeRecord

logger = logging.getLogger(__name__)

TradeBook = Dict[int, Dict[str, AccountPosition]]


def add_trade(book: TradeBook, record: TradeRecord, row_index: int) -> AccountPosition:
    """Record one trade row as the buy or sell leg of its position."""
    positions = book.setdefault(record.account_id, {})
    position = positions.get(record.ticker)
    if position is None:
        position = AccountPosition(account_id=record.account_id, ticker=record.ticker)
        positions[record.ticker] = position

    side = record.side
    price = record.price
    if side == BUY:
        if position.buy_price is not None:
            raise DuplicateLeg(record.account_id, record.ticker, side, row_index)
        position.buy_price = price
    else:
        if position.sell_price is not None:
            raise DuplicateLeg(record.account_id, record.ticker, side, row_index)
        position.sell_price = price
    position.legs.append((side, price))
    return position


def accumulate_trades(
    rows: Sequence[Sequence[str]],
    layout: TradeLayout = TradeLayout(),
    collect_errors: bool = False,
) -> TradeBook:
    """Build ``{account_id: {ticker: AccountPosition}}`` from raw trade rows.

    Args:
        rows: trade rows as text fields, no header.
        layout: column positions of the trade file.
        collect_errors: report all malformed rows together instead of the first.

    Returns:
        Nested mapping of positions in first-seen order.
    """
    book: TradeBook = {}
    for index, record in parse_rows(rows, parse_trade_row, layout, "trade", collect_errors):
        add_trade(book, record, index)

    pairs = sum(len(positions) for positions in book.values())
    logger.info("Accumulated %d trade rows into %d positions across %d accounts", len(rows), pairs, len(book))
    return book
