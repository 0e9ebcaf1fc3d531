"""Timestamp parsing utilities."""
from datetime import datetime, timezone

from dateutil import parser


def parse_timestamp(s: str) -> datetime:
    """
    Parse a timestamp string into a datetime object.
    
    Supports multiple formats:
    - ISO format with "Z" suffix: "2024-01-02T09:10:00Z"
    - ISO format with timezone: "2024-01-02T09:10:00-08:00"
    - ISO format without timezone: "2024-01-02T09:10:00"
    - Space-separated: "2024-01-02 09:10:00"
    
    Naive values are assumed to be UTC.
    
    Args:
        s: Timestamp string
        
    Returns:
        timezone-aware datetime object
        
    Raises:
        ValueError: If timestamp cannot be parsed
    """
    if not isinstance(s, str):
        raise ValueError(f"Timestamp must be a string, got {type(s).__name__}")
    
    s = s.strip()
    if not s:
        raise ValueError("Empty timestamp string")
    
    # Convert trailing "Z" to "+00:00" for ISO format compatibility
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        try:
            dt = parser.isoparse(s)
        except (ValueError, OverflowError) as e:
            raise ValueError(
                f"Unable to parse timestamp: {s}. Expected ISO format "
                "(e.g., '2024-01-02T09:10:00Z' or '2024-01-02T09:10:00-08:00')"
            ) from e
    
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as ISO-8601 text, assuming UTC for naive values."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
