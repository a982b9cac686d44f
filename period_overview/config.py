"""Engine configuration using Pydantic Settings.

Environment Variable Strategy:
- Every field has a development default for local/CI convenience
- Deployments override through environment variables or a `.env` file
"""

from functools import cached_property

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_comma_list(value: str | list[str] | None, default: list[str]) -> list[str]:
    """Parse comma-separated string into list."""
    if value is None:
        return default
    if isinstance(value, list):
        return value
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(
        default="development", validation_alias=AliasChoices("ENVIRONMENT", "ENV")
    )
    debug: bool = False

    # Statistic store
    database_url: str = Field(
        default="sqlite:///./period_overview.db",
        validation_alias="DATABASE_URL",
    )

    # Reporting currency and the "convert to primary" preference
    primary_currency: str = Field(default="EUR", validation_alias="PRIMARY_CURRENCY")
    convert_to_primary: bool = Field(default=False, validation_alias="CONVERT_TO_PRIMARY")

    # Granularity handed to the calendar partitioner (1D, 1W, 1M, 3M, 6M, 1Y)
    view_range: str = Field(default="1M", validation_alias="VIEW_RANGE")

    # Keys in balance oracle output that are not currency codes
    # Env format: SPECIAL_BALANCE_KEYS="balance,pc_balance"
    special_balance_keys_str: str | None = Field(default=None, validation_alias="SPECIAL_BALANCE_KEYS")

    # Transaction-type overviews only group journals for the first N periods
    transaction_overview_detail_limit: int = Field(
        default=10,
        validation_alias="TRANSACTION_OVERVIEW_DETAIL_LIMIT",
    )

    @cached_property
    def special_balance_keys(self) -> list[str]:
        """Parse special balance keys from env string or use defaults."""
        return parse_comma_list(self.special_balance_keys_str, ["balance", "pc_balance"])


settings = Settings()
