"""Exceptions raised while building a shortfall report.

Every error aborts the whole batch: no output file is written once one of
these has been raised.
"""

from __future__ import annotations

from typing import List, Optional


class ShortfallError(Exception):
    """Base class for report failures."""


class IOFailure(ShortfallError):
    """A source could not be read or a sink could not be created."""


class ParseFailure(ShortfallError):
    """The tabular structure of a source could not be read."""


class MalformedRecord(ShortfallError):
    """A field of a specific row cannot be converted to its expected type."""

    def __init__(self, row_index: int, field: str, value: Optional[str], reason: str = "") -> None:
        self.row_index = row_index
        self.field = field
        self.value = value
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"row {row_index}: invalid {field} {value!r}{detail}")


class RecordErrors(ShortfallError):
    """All malformed rows of a source, reported together."""

    def __init__(self, source: str, errors: List[MalformedRecord]) -> None:
        self.source = source
        self.errors = list(errors)
        lines = "\n".join(f"  {err}" for err in self.errors)
        super().__init__(f"{len(self.errors)} malformed {source} row(s):\n{lines}")


class InsufficientData(ShortfallError):
    """A position or instrument lacks data required to compute its row."""

    def __init__(self, account_id: Optional[int], ticker: str, missing: str) -> None:
        self.account_id = account_id
        self.ticker = ticker
        self.missing = missing
        owner = f"account {account_id} " if account_id is not None else ""
        super().__init__(f"{owner}{ticker}: missing {missing}")


class DuplicateLeg(ShortfallError):
    """A second buy (or sell) leg was recorded for the same account and ticker."""

    def __init__(self, account_id: int, ticker: str, side: str, row_index: int) -> None:
        self.account_id = account_id
        self.ticker = ticker
        self.side = side
        self.row_index = row_index
        super().__init__(f"row {row_index}: account {account_id} {ticker} already has a {side} leg")
