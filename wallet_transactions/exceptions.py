"""Exceptions raised by the wallet transaction models."""
from typing import List, Optional


class WalletTransactionError(Exception):
    """Base class for all wallet transaction errors."""


class TransactionDecodingError(WalletTransactionError):
    """Raised when a wire payload cannot be decoded into a transaction."""


class UnrecognizedEnumValueError(WalletTransactionError, ValueError):
    """Raised when a wire string matches no member of a closed enumeration."""

    def __init__(self, enum_name: str, value: Optional[str]):
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"Unrecognized {enum_name} value: {value!r}")


class InvalidAmountError(WalletTransactionError, ValueError):
    """Raised when an amount cannot be represented as an exact decimal."""


class TransactionUnavailableError(WalletTransactionError):
    """
    Raised when reading transaction fields from an envelope that holds none.

    This happens for failed responses (``success=False``); the remote errors
    are kept on the exception.
    """

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        detail = "; ".join(self.errors) if self.errors else "no transaction in response"
        super().__init__(f"Transaction unavailable: {detail}")
