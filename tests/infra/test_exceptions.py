"""Unit tests for exception utilities."""

import pytest

from period_overview.utils.exceptions import (
    ConfigurationError,
    CurrencyNotFoundError,
    OverviewError,
    raise_configuration_error,
    raise_currency_not_found,
)


class TestRaiseConfigurationError:
    def test_basic_usage(self):
        with pytest.raises(ConfigurationError) as exc_info:
            raise_configuration_error("Cannot deal with period type 'x'")
        assert str(exc_info.value) == "Cannot deal with period type 'x'"
        assert isinstance(exc_info.value, OverviewError)

    def test_preserves_cause(self):
        original = ValueError("'x' is not a valid BucketType")
        with pytest.raises(ConfigurationError) as exc_info:
            raise_configuration_error("Cannot deal with period type 'x'", cause=original)
        assert exc_info.value.__cause__ is original


class TestRaiseCurrencyNotFound:
    def test_basic_usage(self):
        with pytest.raises(CurrencyNotFoundError) as exc_info:
            raise_currency_not_found("XYZ")
        assert str(exc_info.value) == "Currency 'XYZ' not found"

    def test_is_lookup_error(self):
        with pytest.raises(LookupError):
            raise_currency_not_found(7)

    def test_preserves_cause(self):
        original = KeyError(7)
        with pytest.raises(CurrencyNotFoundError) as exc_info:
            raise_currency_not_found(7, cause=original)
        assert exc_info.value.__cause__ is original
