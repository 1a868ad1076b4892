#ingestion.py - Reads a CSV export and turns every row into a UnifiedLogRecord.

from __future__ import annotations
import csv
import io
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, List, Optional, Sequence, Tuple, Union

from logdigest.core.logging import get_logger
from logdigest.errors import CSVParseError, EmptyFileError

from .formats import LogFormat, detect_format
from .levels import CanonicalLevel
from .parsers import parse_row, serialize_row
from .records import UnifiedLogRecord, to_windows_rows

logger = get_logger(__name__)

# How many data rows the detector gets to look at
DETECTION_SAMPLE_ROWS = 5


def _allow_large_fields() -> int:
    """Lift the csv module's default 128 KiB cell cap as far as the platform allows."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return limit
        except OverflowError:
            # C long is narrower than sys.maxsize on some platforms
            limit //= 10


FIELD_SIZE_LIMIT = _allow_large_fields()


def read_csv_rows(text: str) -> Tuple[List[str], List[Dict[str, Any]]]:
    """Split CSV text into its header and a list of row dicts. Blank lines are skipped."""
    if text.startswith("\ufeff"):
        text = text[1:]
    try:
        reader = csv.DictReader(io.StringIO(text))
        headers = list(reader.fieldnames or [])
        rows = [row for row in reader]
    except csv.Error as e:
        raise CSVParseError(f"CSV parsing error: {e}") from e
    return headers, rows


def fallback_record(row: Dict[str, Any], fmt: LogFormat) -> UnifiedLogRecord:
    """Minimal stand-in for a row its parser choked on."""
    return UnifiedLogRecord(
        timestamp=datetime.now(timezone.utc).isoformat(),
        component="unknown",
        level=CanonicalLevel.INFO.value,
        content=serialize_row(row),
        source=fmt.value,
    )


def parse_rows(
    headers: Sequence[str],
    rows: Sequence[Dict[str, Any]],
    fmt: LogFormat = LogFormat.AUTO,
    sample_size: int = DETECTION_SAMPLE_ROWS,
    filename: Optional[str] = None,
) -> Tuple[LogFormat, List[UnifiedLogRecord]]:
    """
    Detect the format once, then parse row by row.

    A row that blows up in its parser is swapped for a fallback record so one
    bad line never sinks the batch. Records with blank content are dropped.
    Input order is kept.
    """
    if not rows:
        raise EmptyFileError(filename)

    detected = LogFormat(fmt)
    if detected == LogFormat.AUTO:
        detected = detect_format(headers, rows[:sample_size])

    logger.info(f"Detected log format: {detected.value}")
    logger.info(f"Headers: {list(headers)}")

    records: List[UnifiedLogRecord] = []
    recovered = 0
    for line_number, row in enumerate(rows, start=2):
        try:
            record = parse_row(row, headers, detected)
        except Exception as e:
            logger.warning(f"Failed to parse row {line_number}: {row!r} ({e})")
            record = fallback_record(row, detected)
            recovered += 1

        if record.content and record.content.strip():
            records.append(record)

    dropped = len(rows) - len(records)
    logger.info(
        f"Parsed {len(records)} records from {len(rows)} rows "
        f"(recovered: {recovered}, dropped empty: {dropped})"
    )
    return detected, records


def parse_csv_text(
    text: str,
    fmt: LogFormat = LogFormat.AUTO,
    sample_size: int = DETECTION_SAMPLE_ROWS,
    filename: Optional[str] = None,
) -> Tuple[LogFormat, List[UnifiedLogRecord]]:
    """CSV text -> (format used, unified records). Raises EmptyFileError on a header-only file."""
    headers, rows = read_csv_rows(text)
    return parse_rows(headers, rows, fmt=fmt, sample_size=sample_size, filename=filename)


def ingest_csv(
    source: Union[str, IO[str]],
    fmt: LogFormat = LogFormat.AUTO,
    sample_size: int = DETECTION_SAMPLE_ROWS,
) -> List[UnifiedLogRecord]:
    """Main entry point: CSV text or an open text file -> unified records."""
    text = source if isinstance(source, str) else source.read()
    _, records = parse_csv_text(text, fmt=fmt, sample_size=sample_size)
    return records


def ingest_csv_file(path: str, fmt: LogFormat = LogFormat.AUTO) -> List[UnifiedLogRecord]:
    with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
        _, records = parse_csv_text(f.read(), fmt=fmt, filename=path)
        return records


def ingest_csv_as_windows_rows(
    source: Union[str, IO[str]],
    fmt: LogFormat = LogFormat.AUTO,
) -> List[Dict[str, str]]:
    """Ingest any supported CSV, then hand it back in the legacy Windows row shape."""
    return to_windows_rows(ingest_csv(source, fmt=fmt))
