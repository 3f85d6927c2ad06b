import io

import pytest

from tests.helpers import make_candle_rows, make_trade_rows, write_csv
from trade_shortfall.config import ReportConfig
from trade_shortfall.data.loader import read_rows, rows_to_frame, write_rows
from trade_shortfall.engine import IOFailure, MalformedRecord, ParseFailure, RecordErrors, build_report, run_report


def _config(tmp_path, trade_rows, candle_rows, **kwargs) -> ReportConfig:
    return ReportConfig(
        trades_path=write_csv(tmp_path / "trades.csv", trade_rows),
        candles_path=write_csv(tmp_path / "candles.csv", candle_rows),
        output_path=tmp_path / "output.csv",
        **kwargs,
    )


def test_read_rows_returns_text_fields(tmp_path):
    path = write_csv(tmp_path / "trades.csv", make_trade_rows())
    rows = read_rows(path)
    assert rows[0] == ["1", "o-1", "X", "0", "12.5"]
    assert len(rows) == 6


def test_read_rows_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    assert read_rows(path) == []


def test_read_rows_missing_file(tmp_path):
    with pytest.raises(IOFailure):
        read_rows(tmp_path / "nope.csv")


def test_read_rows_ragged_file(tmp_path):
    path = tmp_path / "ragged.csv"
    path.write_text("a,b,c\na,b,c,d\n")
    with pytest.raises(ParseFailure):
        read_rows(path)


@pytest.mark.parametrize(
    "text",
    [
        "1,o-1,X,0,12.5,extra\n1,o-2,X,10.0,0\n",
        "a,b,c,d\na,b,c\n",
        "a,b,c\n\na,b\n",
    ],
)
def test_read_rows_rejects_short_and_long_records(tmp_path, text):
    path = tmp_path / "ragged.csv"
    path.write_text(text)
    with pytest.raises(ParseFailure, match="fields"):
        read_rows(path)


def test_read_rows_accepts_uploaded_file():
    upload = io.BytesIO(b"X,t1,v,20,5\nX,t2,v,15,3\n")
    assert read_rows(upload) == [["X", "t1", "v", "20", "5"], ["X", "t2", "v", "15", "3"]]


def test_read_rows_rejects_ragged_upload():
    with pytest.raises(ParseFailure):
        read_rows(io.BytesIO(b"X,t1,v,20,5\nX,t2,v,15\n"))


def test_short_trade_record_prevents_output(tmp_path):
    cfg = _config(tmp_path, make_trade_rows() + [["1", "o-7", "Q", "1"]], make_candle_rows())
    with pytest.raises(ParseFailure):
        run_report(cfg)
    assert not cfg.output_path.exists()


def test_write_rows_to_missing_directory(tmp_path):
    with pytest.raises(IOFailure):
        write_rows([["1", "X"]], tmp_path / "missing" / "out.csv")


def test_run_report_writes_output(tmp_path):
    cfg = _config(tmp_path, make_trade_rows(), make_candle_rows())
    rows = run_report(cfg)
    assert cfg.output_path.read_text().splitlines() == [
        "1,X,2.50,17.00,14.50,t1,t2",
        "1,Y,2.00,3.50,1.50,t2,t2",
        "2,Y,-0.75,3.50,4.25,t2,t2",
    ]
    assert read_rows(cfg.output_path) == rows


def test_run_report_is_repeatable(tmp_path):
    cfg = _config(tmp_path, make_trade_rows(), make_candle_rows())
    first = run_report(cfg)
    second = run_report(cfg)
    assert first == second


def test_malformed_row_prevents_output(tmp_path):
    candles = make_candle_rows() + [["X", "t3", "v", "bad", "1"]]
    cfg = _config(tmp_path, make_trade_rows(), candles)
    with pytest.raises(MalformedRecord):
        run_report(cfg)
    assert not cfg.output_path.exists()


def test_collect_errors_prevents_output(tmp_path):
    trades = make_trade_rows() + [["x", "", "X", "1", "0"], ["1", "", "Q", "1", "y"]]
    cfg = _config(tmp_path, trades, make_candle_rows(), collect_errors=True)
    with pytest.raises(RecordErrors) as excinfo:
        run_report(cfg)
    assert len(excinfo.value.errors) == 2
    assert not cfg.output_path.exists()


def test_build_report_without_trades():
    assert build_report([], make_candle_rows()) == []


def test_rows_to_frame_types():
    df = rows_to_frame(build_report(make_trade_rows(), make_candle_rows()))
    assert list(df["account_id"]) == [1, 1, 2]
    assert df["shortfall"].sum() == pytest.approx(20.25)


def test_invalid_missing_candles_policy():
    with pytest.raises(ValueError):
        ReportConfig(missing_candles="skip")
