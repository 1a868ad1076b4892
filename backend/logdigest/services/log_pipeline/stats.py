#stats.py - Headline counters, computed straight from the records.

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Mapping, Union

from .digest import build_fingerprint
from .records import UnifiedLogRecord, to_unified


@dataclass(frozen=True)
class LogStats:
    total_logs: int
    unique_patterns: int
    error_count: int
    warning_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_stats(logs: Iterable[Union[UnifiedLogRecord, Mapping[str, Any]]]) -> LogStats:
    """
    Count everything, independent of the digest cap.

    Error/warning counts compare the lowercased level against the literals
    "error" and "warning". A level the normalizer passed through untouched
    (say "SEVERE") is counted as neither here, and ranks at the bottom of
    the digest tie-break too.
    """
    records = to_unified(logs)
    error_count = sum(1 for r in records if r.level.lower() == "error")
    warning_count = sum(1 for r in records if r.level.lower() == "warning")
    unique_patterns = len({build_fingerprint(r.component, r.level) for r in records})

    return LogStats(
        total_logs=len(records),
        unique_patterns=unique_patterns,
        error_count=error_count,
        warning_count=warning_count,
    )
