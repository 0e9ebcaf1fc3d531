"""Transaction status enumeration and its wire codec."""
import logging
from enum import Enum
from typing import Dict, Generic, Optional, Type, TypeVar

from wallet_transactions.exceptions import UnrecognizedEnumValueError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class EnumFromStringHelper(Generic[E]):
    """
    Case-insensitive lookup of enum members by name.
    
    The name table is built once, when the helper is created, and never
    changes afterwards, so lookups are safe from any thread.
    """
    
    def __init__(self, enum_cls: Type[E]):
        self.enum_cls = enum_cls
        self._members: Dict[str, E] = {
            member.name.lower(): member for member in enum_cls
        }
    
    def from_json_string(self, value: Optional[str]) -> E:
        """
        Resolve a wire string to an enum member.
        
        Args:
            value: Wire string, compared case-insensitively to member names
            
        Returns:
            Matching enum member
            
        Raises:
            UnrecognizedEnumValueError: If no member matches. There is no
                default member.
        """
        member = self._members.get(value.lower()) if isinstance(value, str) else None
        if member is None:
            logger.warning("Unrecognized %s value %r", self.enum_cls.__name__, value)
            raise UnrecognizedEnumValueError(self.enum_cls.__name__, value)
        return member
    
    def to_json_string(self, member: E) -> str:
        return member.name.lower()


class TransactionStatus(str, Enum):
    """Settlement state of a transaction."""
    
    PENDING = "pending"
    COMPLETE = "complete"


_STATUS_HELPER = EnumFromStringHelper(TransactionStatus)


def decode_status(raw: Optional[str]) -> TransactionStatus:
    """Decode a wire status string, e.g. "pending" or "COMPLETE"."""
    return _STATUS_HELPER.from_json_string(raw)


def encode_status(status: TransactionStatus) -> str:
    """Encode a status as its lowercase wire string."""
    return _STATUS_HELPER.to_json_string(status)
