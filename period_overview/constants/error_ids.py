"""Stable identifiers attached to error and warning logs."""


class ErrorIds:
    """Error ids used as the `error_id` field of structured logs."""

    OVERVIEW_CURRENCY_NOT_FOUND = "OVERVIEW_CURRENCY_NOT_FOUND"
    OVERVIEW_STATISTIC_SAVE_FAILED = "OVERVIEW_STATISTIC_SAVE_FAILED"
    OVERVIEW_STATISTIC_READ_FAILED = "OVERVIEW_STATISTIC_READ_FAILED"
