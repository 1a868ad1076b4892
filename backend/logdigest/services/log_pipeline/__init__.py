# Log normalization and digest module
from .levels import CanonicalLevel, normalize_level
from .formats import LogFormat, detect_format
from .records import UnifiedLogRecord, convert_windows_log, to_windows_rows
from .parsers import parse_row
from .ingestion import ingest_csv, ingest_csv_as_windows_rows, ingest_csv_file, parse_csv_text
from .digest import DigestEntry, build_digest, MAX_DIGEST_ENTRIES
from .stats import LogStats, calculate_stats
from .pipeline import process_logs, process_csv_text

__all__ = [
    "CanonicalLevel",
    "normalize_level",
    "LogFormat",
    "detect_format",
    "UnifiedLogRecord",
    "convert_windows_log",
    "to_windows_rows",
    "parse_row",
    "ingest_csv",
    "ingest_csv_as_windows_rows",
    "ingest_csv_file",
    "parse_csv_text",
    "DigestEntry",
    "build_digest",
    "MAX_DIGEST_ENTRIES",
    "LogStats",
    "calculate_stats",
    "process_logs",
    "process_csv_text",
]
