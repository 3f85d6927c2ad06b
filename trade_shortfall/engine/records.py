"""Row parsing for trade and candle inputs."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Sequence, Tuple, TypeVar

from trade_shortfall.config import CandleLayout, TradeLayout
from trade_shortfall.engine.errors import MalformedRecord, RecordErrors
from trade_shortfall.engine.types import CandleRecord, TradeRecord

R = TypeVar("R")

_ACCOUNT_ID = re.compile(r"[+-]?[0-9]+")


def _check_width(row: Sequence[str], index: int, width: int) -> None:
    if len(row) < width:
        raise MalformedRecord(index, "row", ",".join(row), f"expected at least {width} columns, got {len(row)}")


def parse_account_id(value: str, index: int) -> int:
    """Plain ASCII integer with an optional sign; no spaces or underscores."""
    if not _ACCOUNT_ID.fullmatch(value):
        raise MalformedRecord(index, "account id", value, "not an integer")
    return int(value)


def parse_price(value: str, index: int, field: str) -> Decimal:
    """Parse a decimal price, rejecting NaN and infinities."""
    try:
        price = Decimal(value.strip())
    except InvalidOperation:
        raise MalformedRecord(index, field, value, "not a decimal number") from None
    if not price.is_finite():
        raise MalformedRecord(index, field, value, "not a finite number")
    return price


def parse_trade_row(row: Sequence[str], index: int, layout: TradeLayout = TradeLayout()) -> TradeRecord:
    _check_width(row, index, layout.width)
    return TradeRecord(
        account_id=parse_account_id(row[layout.account_id], index),
        ticker=row[layout.ticker],
        buy_price=parse_price(row[layout.buy_price], index, "buy price"),
        sell_price=parse_price(row[layout.sell_price], index, "sell price"),
    )


def parse_candle_row(row: Sequence[str], index: int, layout: CandleLayout = CandleLayout()) -> CandleRecord:
    _check_width(row, index, layout.width)
    return CandleRecord(
        ticker=row[layout.ticker],
        time=row[layout.time],
        max_price=parse_price(row[layout.max_price], index, "max price"),
        min_price=parse_price(row[layout.min_price], index, "min price"),
    )


def parse_rows(
    rows: Sequence[Sequence[str]],
    parser: Callable[[Sequence[str], int, Any], R],
    layout: Any,
    source: str,
    collect_errors: bool = False,
) -> List[Tuple[int, R]]:
    """Parse every row, returning ``(row_index, record)`` pairs.

    By default the first malformed row is raised as-is. With ``collect_errors``
    every row is attempted and the failures are raised together as
    :class:`RecordErrors`.
    """
    parsed: List[Tuple[int, R]] = []
    errors: List[MalformedRecord] = []
    for index, row in enumerate(rows):
        try:
            parsed.append((index, parser(row, index, layout)))
        except MalformedRecord as exc:
            if not collect_errors:
                raise
            errors.append(exc)
    if errors:
        raise RecordErrors(source, errors)
    return parsed
