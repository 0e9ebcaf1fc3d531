"""Transaction variants exchanged with the wallet service."""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol, Tuple, TypeVar, Union, overload, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from wallet_transactions.config import settings
from wallet_transactions.exceptions import InvalidAmountError
from wallet_transactions.models.money import Money, to_decimal, to_plain_string
from wallet_transactions.models.status import TransactionStatus, decode_status, encode_status
from wallet_transactions.models.user import UserRef
from wallet_transactions.utils.timestamp import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)


@runtime_checkable
class TransactionInfo(Protocol):
    """
    Read contract shared by every transaction variant and the envelope.

    Fields a variant cannot carry read as None (e.g. an outbound request
    has no id or status until the service creates it).
    """

    @property
    def id(self) -> Optional[str]: ...

    @property
    def created_at(self) -> Optional[datetime]: ...

    @property
    def amount(self) -> Money: ...

    @property
    def is_request(self) -> bool: ...

    @property
    def status(self) -> Optional[TransactionStatus]: ...

    @property
    def sender(self) -> Optional[UserRef]: ...

    @property
    def recipient(self) -> Optional[UserRef]: ...

    @property
    def recipient_address(self) -> Optional[str]: ...

    @property
    def notes(self) -> Optional[str]: ...

    @property
    def transaction_hash(self) -> Optional[str]: ...

    @property
    def idempotency_key(self) -> Optional[str]: ...


def _resolve_exclude_none(exclude_none: Optional[bool]) -> bool:
    return settings.wire_exclude_none if exclude_none is None else exclude_none


class ConfirmedTransaction(BaseModel):
    """Transaction as returned by the wallet service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, description="Transaction ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp (ISO8601)")
    amount: Money = Field(..., description="Transaction amount")
    is_request: bool = Field(False, alias="request", description="Whether this is a money request")
    status: Optional[TransactionStatus] = Field(None, description="Settlement status")
    sender: Optional[UserRef] = Field(None, description="Sending user")
    recipient: Optional[UserRef] = Field(None, description="Receiving user")
    recipient_address: Optional[str] = Field(None, description="Recipient wallet address or email")
    notes: Optional[str] = Field(None, description="Free-text notes")
    transaction_hash: Optional[str] = Field(None, alias="hsh", description="Network transaction hash")
    idempotency_key: Optional[str] = Field(None, alias="idem", description="Idempotency key")

    @field_validator("created_at", mode="before")
    @classmethod
    def validate_created_at(cls, v: Any) -> Any:
        """Parse ISO8601 text; malformed timestamps fail validation."""
        if isinstance(v, str):
            return parse_timestamp(v)
        return v

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> Optional[TransactionStatus]:
        if v is None or isinstance(v, TransactionStatus):
            return v
        return decode_status(v)

    @field_serializer("created_at")
    def serialize_created_at(self, created_at: Optional[datetime]) -> Optional[str]:
        return format_timestamp(created_at) if created_at is not None else None

    @field_serializer("status")
    def serialize_status(self, status: Optional[TransactionStatus]) -> Optional[str]:
        return encode_status(status) if status is not None else None

    def to_wire(self, exclude_none: Optional[bool] = None) -> Dict[str, Any]:
        """Serialize back to the inbound wire shape."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=_resolve_exclude_none(exclude_none),
        )


R = TypeVar("R", bound="TransactionRequest")


class TransactionRequest(BaseModel, ABC):
    """
    Outbound payload shared by money requests and sends.

    Instances are built with create_money_request() or
    create_send_money_request() and completed with the chainable with_*
    setters, which modify the instance in place. A request belongs to a
    single caller until it is submitted; do not share one across threads
    while it is still being built.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_assignment=True)

    amount_string: str = Field(..., frozen=True, description="Amount as plain decimal text")
    currency_iso: str = Field(
        ..., alias="amount_currency_iso", min_length=1, frozen=True, description="Currency code"
    )
    notes: Optional[str] = Field(None, description="Free-text notes")

    @property
    @abstractmethod
    def counterparty(self) -> str:
        """Email or address of the other side of the transfer."""

    @property
    def id(self) -> Optional[str]:
        return None

    @property
    def created_at(self) -> Optional[datetime]:
        return None

    @property
    def amount(self) -> Money:
        return Money.of(self.currency_iso, self.amount_string)

    @property
    def is_request(self) -> bool:
        return True

    @property
    def status(self) -> Optional[TransactionStatus]:
        return None

    @property
    def sender(self) -> Optional[UserRef]:
        return None

    @property
    def recipient(self) -> Optional[UserRef]:
        return None

    @property
    def recipient_address(self) -> Optional[str]:
        return None

    @property
    def transaction_hash(self) -> Optional[str]:
        return None

    def with_notes(self: R, notes: Optional[str]) -> R:
        self.notes = notes
        return self

    def to_wire(self, exclude_none: Optional[bool] = None) -> Dict[str, Any]:
        """
        Serialize to the outbound wire shape.

        Args:
            exclude_none: Drop unset optional fields. Defaults to the
                wire_exclude_none setting.

        Returns:
            Dictionary keyed by wire field names
        """
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=_resolve_exclude_none(exclude_none),
        )

    def to_json(self, exclude_none: Optional[bool] = None) -> str:
        return self.model_dump_json(
            by_alias=True,
            exclude_none=_resolve_exclude_none(exclude_none),
        )


class RequestMoneyRequest(TransactionRequest):
    """Ask another user to pay the given amount."""

    from_: str = Field(..., alias="from", frozen=True, description="User asked to pay")

    @property
    def counterparty(self) -> str:
        return self.from_

    @property
    def idempotency_key(self) -> Optional[str]:
        return None


class SendMoneyRequest(TransactionRequest):
    """Send the given amount to another user or address."""

    to: str = Field(..., frozen=True, description="Payee email or address")
    user_fee: Optional[str] = Field(None, description="Miner fee override")
    referrer_id: Optional[str] = Field(None, description="Referrer identifier")
    idempotency_key: Optional[str] = Field(None, alias="idem", description="Idempotency key")
    instant_buy: bool = Field(False, description="Buy the funds instead of drawing on balance")

    @property
    def counterparty(self) -> str:
        return self.to

    def with_user_fee(self, user_fee: Optional[str]) -> "SendMoneyRequest":
        self.user_fee = user_fee
        return self

    def with_referrer_id(self, referrer_id: Optional[str]) -> "SendMoneyRequest":
        self.referrer_id = referrer_id
        return self

    def with_idempotency_key(self, idempotency_key: Optional[str]) -> "SendMoneyRequest":
        self.idempotency_key = idempotency_key
        return self

    def with_instant_buy(self, instant_buy: bool) -> "SendMoneyRequest":
        self.instant_buy = instant_buy
        return self


TransactionVariant = Union[ConfirmedTransaction, RequestMoneyRequest, SendMoneyRequest]


def _normalize_amount(
    amount: Union[Money, Decimal, str],
    currency: Optional[str],
) -> Tuple[str, str]:
    """Reduce the accepted amount forms to a (currency, amount text) pair."""
    if isinstance(amount, Money):
        if currency is not None and currency != amount.currency:
            raise InvalidAmountError(
                f"Currency {currency!r} does not match money currency {amount.currency!r}"
            )
        return amount.currency, amount.plain_string()

    if currency is None:
        raise InvalidAmountError("A currency code is required unless amount is a Money")
    if not isinstance(currency, str):
        raise TypeError(f"Currency must be a string, got {type(currency).__name__}")
    if not currency:
        raise InvalidAmountError("Currency code must not be empty")

    if isinstance(amount, str):
        # Validated here, sent as written
        to_decimal(amount)
        return currency, amount.strip()
    return currency, to_plain_string(to_decimal(amount))


@overload
def create_money_request(from_: str, amount: Money, currency: Optional[str] = None) -> RequestMoneyRequest: ...


@overload
def create_money_request(from_: str, amount: Union[Decimal, str], currency: str) -> RequestMoneyRequest: ...


def create_money_request(from_, amount, currency=None):
    """
    Build a request asking ``from_`` to pay.

    Args:
        from_: Email or address of the user asked to pay
        amount: Money, Decimal, or decimal text
        currency: Currency code; required unless amount is a Money

    Returns:
        RequestMoneyRequest ready for with_notes()

    Raises:
        InvalidAmountError: If the amount is not an exact decimal or the
            currency is missing or inconsistent
    """
    currency_iso, amount_string = _normalize_amount(amount, currency)
    request = RequestMoneyRequest(from_=from_, currency_iso=currency_iso, amount_string=amount_string)
    logger.debug("Built money request from %s for %s %s", from_, amount_string, currency_iso)
    return request


@overload
def create_send_money_request(to: str, amount: Money, currency: Optional[str] = None) -> SendMoneyRequest: ...


@overload
def create_send_money_request(to: str, amount: Union[Decimal, str], currency: str) -> SendMoneyRequest: ...


def create_send_money_request(to, amount, currency=None):
    """
    Build a request sending money to ``to``.

    Accepts the same amount forms as create_money_request().
    """
    currency_iso, amount_string = _normalize_amount(amount, currency)
    request = SendMoneyRequest(to=to, currency_iso=currency_iso, amount_string=amount_string)
    logger.debug("Built send money request to %s for %s %s", to, amount_string, currency_iso)
    return request
