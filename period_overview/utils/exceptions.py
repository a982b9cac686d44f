"""Engine exceptions and raise helpers."""

from typing import NoReturn


class OverviewError(Exception):
    """Base exception for period overview failures."""

    pass


class ConfigurationError(OverviewError):
    """Unrecognised entity kind, bucket type, model name or granularity.

    Terminal: callers must not retry and no partial result is returned.
    """

    pass


class CurrencyNotFoundError(OverviewError, LookupError):
    """Raised when a currency id or code is unknown to the currency directory."""

    pass


def raise_configuration_error(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise ConfigurationError(detail) from cause


def raise_currency_not_found(identifier: int | str, *, cause: Exception | None = None) -> NoReturn:
    raise CurrencyNotFoundError(f"Currency {identifier!r} not found") from cause
