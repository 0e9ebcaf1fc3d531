"""Exact decimal money value."""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from wallet_transactions.exceptions import InvalidAmountError

logger = logging.getLogger(__name__)

AmountLike = Union[Decimal, int, str]


def to_decimal(value: Any) -> Decimal:
    """
    Convert an amount into an exact Decimal.
    
    Accepts Decimal, int and decimal text. Binary floats are refused because
    they cannot carry an exact amount; so are NaN and infinities.
    
    Raises:
        InvalidAmountError: If the value is not an exact, finite decimal
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmountError(
            f"Amount must be a Decimal, int or decimal string, got {type(value).__name__}"
        )
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidAmountError(f"Not a decimal amount: {value!r}") from None
    else:
        raise InvalidAmountError(
            f"Amount must be a Decimal, int or decimal string, got {type(value).__name__}"
        )
    
    if not result.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {value!r}")
    return result


def to_plain_string(amount: Decimal) -> str:
    """Format a Decimal as plain text, never in scientific notation.
    
    The exponent is kept as is, so trailing zeros survive: Decimal("12.50000")
    formats as "12.50000" and Decimal("1E+2") as "100".
    """
    return format(amount, "f")


class Money(BaseModel):
    """Currency code plus exact decimal amount.
    
    Equality is numeric, so Money of "12.50000" USD equals Money of 12.5 USD,
    while each keeps its own scale when formatted.
    """
    
    model_config = ConfigDict(frozen=True)
    
    currency: str = Field(..., min_length=1, description="ISO-4217 style currency code")
    amount: Decimal = Field(..., description="Exact decimal amount")
    
    @classmethod
    def of(cls, currency: str, amount: AmountLike) -> "Money":
        """Build a Money from a currency code and a Decimal, int or decimal text."""
        return cls(currency=currency, amount=amount)
    
    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        """Refuse floats and non-numeric text before pydantic coerces them."""
        return to_decimal(v)
    
    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> str:
        """Serialize amount as plain decimal text to preserve precision."""
        return to_plain_string(amount)
    
    @property
    def currency_code(self) -> str:
        return self.currency
    
    def plain_string(self) -> str:
        return to_plain_string(self.amount)
    
    def __str__(self) -> str:
        return f"{self.plain_string()} {self.currency}"
