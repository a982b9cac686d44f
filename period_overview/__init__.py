"""Time-bucketed money movement overviews for ledger entities."""

__version__ = "0.1.0"
