"""Personal betting ledger: bet records, period filters and profit statistics."""

__version__ = "0.1.0"
