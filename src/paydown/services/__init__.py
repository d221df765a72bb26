"""Service module exports."""

from . import debts, engine, export_csv, loans, runway, strategies, summary

__all__ = [
    "debts",
    "engine",
    "export_csv",
    "loans",
    "runway",
    "strategies",
    "summary",
]
