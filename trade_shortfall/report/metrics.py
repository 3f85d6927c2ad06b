"""Summary statistics and charts for a shortfall report."""

from __future__ import annotations

from typing import Any, Dict

import matplotlib.pyplot as plt
import pandas as pd


def shortfall_by_account(report_df: pd.DataFrame) -> pd.DataFrame:
    """Total realized gain, best gain and shortfall per account, worst first."""
    if report_df.empty:
        return pd.DataFrame(columns=["realized_gain", "max_gain", "shortfall", "positions"])
    grouped = report_df.groupby("account_id").agg(
        realized_gain=("realized_gain", "sum"),
        max_gain=("max_gain", "sum"),
        shortfall=("shortfall", "sum"),
        positions=("ticker", "count"),
    )
    return grouped.sort_values("shortfall", ascending=False)


def summarize_report(report_df: pd.DataFrame) -> Dict[str, Any]:
    if report_df.empty:
        return {
            "rows": 0,
            "accounts": 0,
            "realized_gain": 0.0,
            "max_gain": 0.0,
            "shortfall": 0.0,
            "worst": None,
        }
    worst = report_df.loc[report_df["shortfall"].idxmax()]
    return {
        "rows": int(len(report_df)),
        "accounts": int(report_df["account_id"].nunique()),
        "realized_gain": float(report_df["realized_gain"].sum()),
        "max_gain": float(report_df["max_gain"].sum()),
        "shortfall": float(report_df["shortfall"].sum()),
        "worst": {
            "account_id": int(worst["account_id"]),
            "ticker": worst["ticker"],
            "shortfall": float(worst["shortfall"]),
        },
    }


def plot_shortfall(report_df: pd.DataFrame):
    """Bar chart of realized vs. best possible gain per account."""
    per_account = shortfall_by_account(report_df).sort_index()
    fig, ax = plt.subplots(figsize=(10, 6))
    labels = [str(idx) for idx in per_account.index]
    positions = range(len(labels))
    width = 0.4
    ax.bar([p - width / 2 for p in positions], per_account["realized_gain"], width=width, label="Realized gain")
    ax.bar([p + width / 2 for p in positions], per_account["max_gain"], width=width, label="Max possible gain")
    ax.set_xticks(list(positions))
    ax.set_xticklabels(labels)
    ax.legend()
    ax.set_title("Realized vs. Possible Gain by Account")
    ax.set_xlabel("Account")
    ax.set_ylabel("Gain")
    fig.tight_layout()
    return fig
