"""Typed models for wallet service transactions."""
from .exceptions import (
    WalletTransactionError,
    TransactionDecodingError,
    UnrecognizedEnumValueError,
    InvalidAmountError,
    TransactionUnavailableError,
)
from .models import (
    Money,
    TransactionStatus,
    UserRef,
    TransactionInfo,
    ConfirmedTransaction,
    RequestMoneyRequest,
    SendMoneyRequest,
    TransactionVariant,
    TransactionEnvelope,
    create_money_request,
    create_send_money_request,
)

__version__ = "0.1.0"

__all__ = [
    "WalletTransactionError",
    "TransactionDecodingError",
    "UnrecognizedEnumValueError",
    "InvalidAmountError",
    "TransactionUnavailableError",
    "Money",
    "TransactionStatus",
    "UserRef",
    "TransactionInfo",
    "ConfirmedTransaction",
    "RequestMoneyRequest",
    "SendMoneyRequest",
    "TransactionVariant",
    "TransactionEnvelope",
    "create_money_request",
    "create_send_money_request",
]
