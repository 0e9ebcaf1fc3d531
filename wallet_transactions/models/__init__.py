from .money import Money
from .status import TransactionStatus, EnumFromStringHelper, decode_status, encode_status
from .user import UserRef
from .transaction import (
    TransactionInfo,
    ConfirmedTransaction,
    TransactionRequest,
    RequestMoneyRequest,
    SendMoneyRequest,
    TransactionVariant,
    create_money_request,
    create_send_money_request,
)
from .envelope import BaseResponse, TransactionEnvelope

__all__ = [
    "Money",
    "TransactionStatus",
    "EnumFromStringHelper",
    "decode_status",
    "encode_status",
    "UserRef",
    "TransactionInfo",
    "ConfirmedTransaction",
    "TransactionRequest",
    "RequestMoneyRequest",
    "SendMoneyRequest",
    "TransactionVariant",
    "create_money_request",
    "create_send_money_request",
    "BaseResponse",
    "TransactionEnvelope",
]
