"""Dataclasses used by the shortfall engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

BUY = "buy"
SELL = "sell"


@dataclass(frozen=True)
class TradeRecord:
    account_id: int
    ticker: str
    buy_price: Decimal
    sell_price: Decimal

    @property
    def side(self) -> str:
        # Rows carrying both prices count as buys; zero/zero rows as sells.
        return BUY if self.buy_price != 0 else SELL

    @property
    def price(self) -> Decimal:
        return self.buy_price if self.side == BUY else self.sell_price


@dataclass(frozen=True)
class CandleRecord:
    ticker: str
    time: str
    max_price: Decimal
    min_price: Decimal


@dataclass
class PriceSummary:
    """Lowest low and highest high observed for one instrument."""

    min_price: Decimal
    max_price: Decimal
    time_min: str
    time_max: str

    @classmethod
    def from_candle(cls, candle: CandleRecord) -> "PriceSummary":
        return cls(
            min_price=candle.min_price,
            max_price=candle.max_price,
            time_min=candle.time,
            time_max=candle.time,
        )

    @classmethod
    def empty(cls) -> "PriceSummary":
        """Zero-valued summary used for traded instruments without candles."""
        return cls(min_price=Decimal(0), max_price=Decimal(0), time_min="", time_max="")

    @property
    def spread(self) -> Decimal:
        return self.max_price - self.min_price


@dataclass
class AccountPosition:
    """Buy and sell legs recorded for one (account, ticker) pair."""

    account_id: int
    ticker: str
    buy_price: Optional[Decimal] = None
    sell_price: Optional[Decimal] = None
    legs: List[Tuple[str, Decimal]] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.buy_price is not None and self.sell_price is not None

    def missing_legs(self) -> List[str]:
        missing = []
        if self.buy_price is None:
            missing.append(BUY)
        if self.sell_price is None:
            missing.append(SELL)
        return missing


@dataclass(frozen=True)
class ShortfallRow:
    account_id: int
    ticker: str
    user_diff: Decimal
    max_diff: Decimal
    lost: Decimal
    time_max: str
    time_min: str

    def to_fields(self, decimal_places: int = 2) -> List[str]:
        return [
            str(self.account_id),
            self.ticker,
            format_price(self.user_diff, decimal_places),
            format_price(self.max_diff, decimal_places),
            format_price(self.lost, decimal_places),
            self.time_max,
            self.time_min,
        ]


def format_price(value: Decimal, decimal_places: int = 2) -> str:
    """Fixed-point text, rounding halves away from zero (2.345 -> "2.35")."""
    rounded = value.quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_HALF_UP)
    return format(rounded, f".{decimal_places}f")
