#records.py - The one card shape every log format is squeezed into.

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union


# Every parser returns this, whatever the source looked like.
# timestamp stays as the source wrote it; we never reparse it.
@dataclass(frozen=True)
class UnifiedLogRecord:
    timestamp: str
    component: str
    level: str
    content: str
    source: str
    hostname: Optional[str] = None
    pid: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Legacy export rows are dicts keyed LineId, Time, Component, Level, Content
def is_windows_legacy_row(row: Any) -> bool:
    return isinstance(row, Mapping) and "LineId" in row


def convert_windows_log(row: Mapping[str, Any]) -> UnifiedLogRecord:
    """Turn an old-style Windows row dict into a unified record, verbatim."""
    return UnifiedLogRecord(
        timestamp=str(row.get("Time") or ""),
        component=str(row.get("Component") or ""),
        level=str(row.get("Level") or ""),
        content=str(row.get("Content") or ""),
        source="Windows",
    )


def from_mapping(m: Mapping[str, Any]) -> UnifiedLogRecord:
    """Rebuild a record from its to_dict() shape. Missing text fields become ""."""
    def text(key: str) -> str:
        value = m.get(key)
        return "" if value is None else str(value)

    def optional(key: str) -> Optional[str]:
        value = m.get(key)
        return None if value is None else str(value)

    return UnifiedLogRecord(
        timestamp=text("timestamp"),
        component=text("component"),
        level=text("level"),
        content=text("content"),
        source=text("source"),
        hostname=optional("hostname"),
        pid=optional("pid"),
    )


def as_record(item: Union[UnifiedLogRecord, Mapping[str, Any]]) -> UnifiedLogRecord:
    if isinstance(item, UnifiedLogRecord):
        return item
    if is_windows_legacy_row(item):
        return convert_windows_log(item)
    if isinstance(item, Mapping):
        return from_mapping(item)
    raise TypeError(f"Expected UnifiedLogRecord or mapping, got {type(item).__name__}")


def to_unified(logs: Iterable[Union[UnifiedLogRecord, Mapping[str, Any]]]) -> List[UnifiedLogRecord]:
    """
    Accept unified records, their dict form, or legacy Windows row dicts.
    Each item is converted on its own, so mixed batches are fine.
    """
    return [as_record(item) for item in logs]


def to_windows_rows(records: Iterable[UnifiedLogRecord]) -> List[Dict[str, str]]:
    """Legacy export shape: one LineId/Time/Component/Level/Content row per record, LineId from 1."""
    return [
        {
            "LineId": str(i),
            "Time": r.timestamp,
            "Component": r.component,
            "Level": r.level,
            "Content": r.content,
        }
        for i, r in enumerate(records, start=1)
    ]
