"""Currency reference data."""

from typing import Annotated

from pydantic import Field

from period_overview.schemas.base import FrozenModel


class CurrencyInfo(FrozenModel):
    """Immutable currency metadata as served by the currency directory."""

    id: int
    code: Annotated[str, Field(min_length=3, max_length=51)]
    name: str
    symbol: str
    decimal_places: Annotated[int, Field(ge=0, le=12)] = 2
