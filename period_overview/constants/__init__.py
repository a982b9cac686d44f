"""Shared constants."""

from period_overview.constants.error_ids import ErrorIds

__all__ = ["ErrorIds"]
