"""Response envelopes pairing a success flag and errors with a transaction."""
import json
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wallet_transactions.exceptions import TransactionDecodingError, TransactionUnavailableError
from wallet_transactions.models.money import Money
from wallet_transactions.models.status import TransactionStatus
from wallet_transactions.models.transaction import (
    ConfirmedTransaction,
    TransactionRequest,
    TransactionVariant,
)
from wallet_transactions.models.user import UserRef

logger = logging.getLogger(__name__)


class BaseResponse(BaseModel):
    """Success flag and error messages common to wallet service responses."""

    success: bool = Field(..., description="Whether the service accepted the call")
    errors: List[str] = Field(default_factory=list, description="Error messages reported by the service")

    @field_validator("errors", mode="before")
    @classmethod
    def validate_errors(cls, v: Any) -> Any:
        return [] if v is None else v


class TransactionEnvelope(BaseResponse):
    """
    A transaction together with the response status it arrived with.

    The envelope answers every transaction field by reading it from the
    inner transaction, so it can be passed anywhere a bare transaction is
    expected. Check ``success`` first: a failed response usually carries no
    transaction, and reading its fields raises TransactionUnavailableError.
    """

    model_config = ConfigDict(frozen=True)

    transaction: Optional[TransactionVariant] = Field(None, description="Wrapped transaction")

    @classmethod
    def from_wire(cls, payload: Union[str, bytes, bytearray, Mapping[str, Any]]) -> "TransactionEnvelope":
        """
        Decode a wallet service response.

        Args:
            payload: Raw JSON text/bytes or an already parsed mapping

        Returns:
            TransactionEnvelope holding a ConfirmedTransaction, or no
            transaction when the service omitted it or reported failure
            with a transaction that cannot be read

        Raises:
            TransactionDecodingError: If the payload is not valid JSON, is
                missing required fields, or carries unknown enum values
        """
        if isinstance(payload, (str, bytes, bytearray)):
            try:
                # Keep fractional numbers exact
                payload = json.loads(payload, parse_float=Decimal)
            except ValueError as e:
                logger.warning("Rejected malformed transaction JSON: %s", e)
                raise TransactionDecodingError(f"Malformed JSON: {e}") from e

        if not isinstance(payload, Mapping):
            raise TransactionDecodingError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        try:
            envelope = cls.model_validate(payload)
        except ValidationError as e:
            if payload.get("success") is not False:
                logger.warning("Rejected transaction payload: %s", e)
                raise TransactionDecodingError(str(e)) from e
            # Failed responses may carry a half-filled transaction; keep the errors
            logger.info("Dropping unreadable transaction from failed response: %s", e)
            envelope = cls._without_transaction(payload, e)

        if envelope.transaction is not None and not isinstance(envelope.transaction, ConfirmedTransaction):
            if envelope.success:
                raise TransactionDecodingError(
                    f"Expected a confirmed transaction, got {type(envelope.transaction).__name__}"
                )
            envelope = cls._without_transaction(payload)
        if not envelope.success:
            logger.info("Wallet service reported failure: %s", envelope.errors)
        return envelope

    @classmethod
    def _without_transaction(
        cls,
        payload: Mapping[str, Any],
        cause: Optional[Exception] = None,
    ) -> "TransactionEnvelope":
        """Decode only the success flag and errors of a failed response."""
        try:
            return cls.model_validate({**payload, "transaction": None})
        except ValidationError as e:
            logger.warning("Rejected transaction payload: %s", e)
            raise TransactionDecodingError(str(e)) from (cause or e)

    @classmethod
    def wrap(cls, transaction: TransactionVariant) -> "TransactionEnvelope":
        """Wrap a locally built transaction as a successful envelope."""
        return cls(success=True, errors=[], transaction=transaction)

    def to_submission(self, exclude_none: Optional[bool] = None) -> Dict[str, Any]:
        """Body for submitting the wrapped outbound request."""
        transaction = self._require_transaction()
        if not isinstance(transaction, TransactionRequest):
            raise TypeError(
                f"Only outbound requests can be submitted, got {type(transaction).__name__}"
            )
        return {"transaction": transaction.to_wire(exclude_none=exclude_none)}

    def _require_transaction(self) -> TransactionVariant:
        if self.transaction is None:
            raise TransactionUnavailableError(self.errors)
        return self.transaction

    @property
    def id(self) -> Optional[str]:
        return self._require_transaction().id

    @property
    def created_at(self) -> Optional[datetime]:
        return self._require_transaction().created_at

    @property
    def amount(self) -> Money:
        return self._require_transaction().amount

    @property
    def is_request(self) -> bool:
        return self._require_transaction().is_request

    @property
    def status(self) -> Optional[TransactionStatus]:
        return self._require_transaction().status

    @property
    def sender(self) -> Optional[UserRef]:
        return self._require_transaction().sender

    @property
    def recipient(self) -> Optional[UserRef]:
        return self._require_transaction().recipient

    @property
    def recipient_address(self) -> Optional[str]:
        return self._require_transaction().recipient_address

    @property
    def notes(self) -> Optional[str]:
        return self._require_transaction().notes

    @property
    def transaction_hash(self) -> Optional[str]:
        return self._require_transaction().transaction_hash

    @property
    def idempotency_key(self) -> Optional[str]:
        return self._require_transaction().idempotency_key
