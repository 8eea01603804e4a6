from .time import (
    format_file_stamp,
    format_log_timestamp,
    normalize_dt,
    now_utc,
    parse_rfc3339,
)

__all__ = [
    "now_utc",
    "normalize_dt",
    "parse_rfc3339",
    "format_log_timestamp",
    "format_file_stamp",
]
