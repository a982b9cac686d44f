"""Utility functions and helpers."""

from .exceptions import (
    ConfigurationError,
    CurrencyNotFoundError,
    OverviewError,
    raise_configuration_error,
    raise_currency_not_found,
)

__all__ = [
    "ConfigurationError",
    "CurrencyNotFoundError",
    "OverviewError",
    "raise_configuration_error",
    "raise_currency_not_found",
]
