import matplotlib.pyplot as plt
import pytest

from tests.helpers import make_candle_rows, make_trade_rows, write_csv
from trade_shortfall.main_report import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.trades == "user_trades.csv"
    assert args.candles == "candles_5m.csv"
    assert args.output == "output.csv"
    assert args.missing_candles == "zero"


def test_cli_writes_report_and_chart(tmp_path, capsys):
    plt.close("all")
    trades = write_csv(tmp_path / "trades.csv", make_trade_rows())
    candles = write_csv(tmp_path / "candles.csv", make_candle_rows())
    output = tmp_path / "out.csv"
    chart = tmp_path / "chart.png"

    main(["--trades", str(trades), "--candles", str(candles), "--output", str(output), "--plot", str(chart)])

    assert output.read_text().splitlines()[0] == "1,X,2.50,17.00,14.50,t1,t2"
    assert chart.exists()
    assert plt.get_fignums() == []
    printed = capsys.readouterr().out
    assert "Total shortfall: 20.25" in printed


def test_cli_exits_on_malformed_input(tmp_path):
    trades = write_csv(tmp_path / "trades.csv", [["one", "", "X", "1", "0"]])
    candles = write_csv(tmp_path / "candles.csv", make_candle_rows())
    output = tmp_path / "out.csv"

    with pytest.raises(SystemExit) as excinfo:
        main(["--trades", str(trades), "--candles", str(candles), "--output", str(output)])
    assert "account id" in str(excinfo.value.code)
    assert not output.exists()


def test_help_describes_leg_rules(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--help"])
    printed = capsys.readouterr().out
    assert "DuplicateLeg" in printed
    assert "InsufficientData" in printed
