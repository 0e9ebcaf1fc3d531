from .timestamp import parse_timestamp, format_timestamp

__all__ = ["parse_timestamp", "format_timestamp"]
