# test_run_momentum_analysis.py
# Walkthrough script smoke tests - synthetic data and stubbed source only

import run_momentum_analysis
from momentum_errors import InvalidSymbol


def test_synthetic_run(capsys):
    code = run_momentum_analysis.main(["TEST", "--synthetic", "--sector", "Healthcare"])
    out = capsys.readouterr().out

    assert code == 0
    assert "MOMENTUM ACCELERATION MODEL: TEST" in out
    assert "Model Signal:" in out
    assert "Acceleration: 2nd Order ROC" in out
    assert "Top Picks: Healthcare" in out


def test_sample_data_is_monthly_and_positive():
    df = run_momentum_analysis.load_sample_data(months=24)

    assert len(df) == 24
    assert (df["price"] > 0).all()
    assert df["date"].is_monotonic_increasing


def test_source_error_exit_code(monkeypatch, capsys):
    def refuse(self, symbol):
        raise InvalidSymbol("Invalid Ticker Symbol.")

    monkeypatch.setattr(run_momentum_analysis.AlphaVantageSource, "fetch_monthly", refuse)

    code = run_momentum_analysis.main(["ZZZZ"])

    assert code == 2
    assert "Invalid Ticker Symbol." in capsys.readouterr().out


def test_fmt():
    assert run_momentum_analysis.fmt(None) == "N/A"
    assert run_momentum_analysis.fmt(1.234, "%") == "+1.23%"


def test_blank_symbol_exit_code(capsys):
    code = run_momentum_analysis.main(["   "])

    assert code == 1
    assert "non-empty" in capsys.readouterr().out


def test_bars_only_on_acceleration_chart(capsys):
    run_momentum_analysis.main(["TEST", "--synthetic"])
    lines = capsys.readouterr().out.splitlines()

    velocity = next(line for line in lines if "Velocity: 1st Order ROC" in line)
    acceleration = next(line for line in lines if "Acceleration: 2nd Order ROC" in line)

    assert "zero@" in velocity
    assert "bars" not in velocity
    assert "bars" in acceleration
