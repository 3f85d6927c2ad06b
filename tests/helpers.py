from pathlib import Path
from typing import List


def make_trade_rows() -> List[List[str]]:
    # account, unused, ticker, buy, sell
    return [
        ["1", "o-1", "X", "0", "12.5"],
        ["1", "o-2", "X", "10.0", "0"],
        ["2", "o-3", "Y", "3.00", "0"],
        ["2", "o-4", "Y", "0", "2.25"],
        ["1", "o-5", "Y", "2.00", "0"],
        ["1", "o-6", "Y", "0", "4.00"],
    ]


def make_candle_rows() -> List[List[str]]:
    # ticker, time, unused, max, min
    return [
        ["X", "t1", "v", "20", "5"],
        ["Y", "t1", "v", "4.5", "2.5"],
        ["X", "t2", "v", "15", "3"],
        ["Y", "t2", "v", "5.0", "1.5"],
        ["Z", "t1", "v", "100", "1"],
    ]


def write_csv(path: Path, rows: List[List[str]]) -> Path:
    path.write_text("".join(",".join(row) + "\n" for row in rows))
    return path
