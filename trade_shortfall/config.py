"""Global configuration for the trade shortfall report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_TRADES_FILE = Path("user_trades.csv")
DEFAULT_CANDLES_FILE = Path("candles_5m.csv")
DEFAULT_OUTPUT_FILE = Path("output.csv")
DEFAULT_DECIMAL_PLACES = 2

MISSING_CANDLES_ZERO = "zero"
MISSING_CANDLES_ERROR = "error"


@dataclass(frozen=True)
class TradeLayout:
    """Column positions in the trade executions file (no header row)."""

    account_id: int = 0
    ticker: int = 2
    buy_price: int = 3
    sell_price: int = 4

    @property
    def width(self) -> int:
        return max(self.account_id, self.ticker, self.buy_price, self.sell_price) + 1


@dataclass(frozen=True)
class CandleLayout:
    """Column positions in the candle file (no header row)."""

    ticker: int = 0
    time: int = 1
    max_price: int = 3
    min_price: int = 4

    @property
    def width(self) -> int:
        return max(self.ticker, self.time, self.max_price, self.min_price) + 1


@dataclass
class ReportConfig:
    trades_path: Path = DEFAULT_TRADES_FILE
    candles_path: Path = DEFAULT_CANDLES_FILE
    output_path: Path = DEFAULT_OUTPUT_FILE
    decimal_places: int = DEFAULT_DECIMAL_PLACES
    sort_output: bool = True  # order rows by (account, ticker)
    collect_errors: bool = False  # report every malformed row instead of the first
    missing_candles: str = MISSING_CANDLES_ZERO
    trade_layout: TradeLayout = field(default_factory=TradeLayout)
    candle_layout: CandleLayout = field(default_factory=CandleLayout)

    def __post_init__(self) -> None:
        self.trades_path = Path(self.trades_path)
        self.candles_path = Path(self.candles_path)
        self.output_path = Path(self.output_path)
        if self.missing_candles not in (MISSING_CANDLES_ZERO, MISSING_CANDLES_ERROR):
            raise ValueError(f"Unsupported missing_candles policy: {self.missing_candles}")
        if self.decimal_places < 0:
            raise ValueError("decimal_places must be non-negative")
