"""Streamlit UI for building and browsing a trade shortfall report."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

# Ensure project root is on sys.path when launched via `streamlit run`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from trade_shortfall.config import MISSING_CANDLES_ERROR, MISSING_CANDLES_ZERO, ReportConfig
from trade_shortfall.data.loader import read_rows, rows_to_frame
from trade_shortfall.engine import ShortfallError, build_report
from trade_shortfall.report.metrics import plot_shortfall, shortfall_by_account, summarize_report


def _to_csv_bytes(rows: list) -> bytes:
    buffer = io.StringIO()
    pd.DataFrame(rows, dtype=str).to_csv(buffer, header=False, index=False, lineterminator="\n")
    return buffer.getvalue().encode("utf-8")


def main():
    st.title("Trade Shortfall Report")
    st.write("Realized gain per account and ticker vs. the best gain available in the candle window.")

    col1, col2 = st.columns(2)
    trades_file = col1.file_uploader("Trades CSV", type="csv")
    candles_file = col2.file_uploader("Candles CSV", type="csv")
    missing_candles = col1.selectbox("Tickers without candles", [MISSING_CANDLES_ZERO, MISSING_CANDLES_ERROR])
    collect_errors = col2.checkbox("List all malformed rows", value=True)

    if not st.button("Build report", type="primary"):
        return
    if trades_file is None or candles_file is None:
        st.warning("Upload both files first.")
        return

    cfg = ReportConfig(missing_candles=missing_candles, collect_errors=collect_errors)
    try:
        rows = build_report(read_rows(trades_file), read_rows(candles_file), cfg)
    except ShortfallError as exc:
        st.error(str(exc))
        return

    report_df = rows_to_frame(rows)
    if report_df.empty:
        st.warning("No positions in the trades file.")
        return

    summary = summarize_report(report_df)
    m1, m2, m3 = st.columns(3)
    m1.metric("Realized gain", f"{summary['realized_gain']:.2f}")
    m2.metric("Max possible gain", f"{summary['max_gain']:.2f}")
    m3.metric("Shortfall", f"{summary['shortfall']:.2f}")

    st.subheader("Positions")
    st.dataframe(report_df)

    st.subheader("By account")
    st.dataframe(shortfall_by_account(report_df))
    fig = plot_shortfall(report_df)
    st.pyplot(fig)
    plt.close(fig)

    st.download_button("Download report CSV", data=_to_csv_bytes(rows), file_name="output.csv", mime="text/csv")


if __name__ == "__main__":
    main()
