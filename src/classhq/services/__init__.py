"""Service module exports."""

from . import auth, export_csv, funds, ledger, reports, roster_import, seed

__all__ = [
    "auth",
    "export_csv",
    "funds",
    "ledger",
    "reports",
    "roster_import",
    "seed",
]
