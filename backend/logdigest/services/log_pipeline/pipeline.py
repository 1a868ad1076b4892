#pipeline.py - Runs the deterministic part of the flow in one call.

from __future__ import annotations
from typing import List, Tuple
from .formats import LogFormat
from .ingestion import parse_csv_text
from .digest import DigestEntry, build_digest, MAX_DIGEST_ENTRIES
from .stats import LogStats, calculate_stats
from .records import UnifiedLogRecord


# raw CSV -> ingestion.py -> records -> { digest.py, stats.py }
def process_logs(
    records: List[UnifiedLogRecord],
    limit: int = MAX_DIGEST_ENTRIES,
) -> Tuple[List[DigestEntry], LogStats]:
    return build_digest(records, limit=limit), calculate_stats(records)


def process_csv_text(
    text: str,
    fmt: LogFormat = LogFormat.AUTO,
    limit: int = MAX_DIGEST_ENTRIES,
) -> Tuple[LogFormat, List[DigestEntry], LogStats]:
    """
    Main entrypoint:
    CSV text -> (format used, bounded digest, stats)
    """
    detected, records = parse_csv_text(text, fmt=fmt)
    digest, stats = process_logs(records, limit=limit)
    return detected, digest, stats
