"""Realized vs. best-possible trade profit per account and instrument."""

from trade_shortfall.config import ReportConfig
from trade_shortfall.engine import build_report, run_report

__all__ = ["ReportConfig", "build_report", "run_report"]
