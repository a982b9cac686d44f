"""Base schema classes and shared types."""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


class FrozenModel(BaseModel):
    """Base for immutable value objects built fresh per request."""

    model_config = ConfigDict(frozen=True, from_attributes=True)


def reject_float(value: Any) -> Any:
    """Refuse binary floats for monetary fields; strings, ints and Decimals pass."""
    if isinstance(value, float):
        raise ValueError("monetary amounts must be given as decimal strings, not floats")
    return value


# Exact decimal money. Floats are rejected before Decimal coercion.
MonetaryAmount = Annotated[Decimal, BeforeValidator(reject_float)]

ZERO = Decimal("0")
