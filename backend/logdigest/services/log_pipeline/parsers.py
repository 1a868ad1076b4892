#parsers.py - One small parser per log format, all producing the same UnifiedLogRecord.

from __future__ import annotations
import json
import re
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from .formats import LogFormat, detect_format
from .levels import CanonicalLevel, normalize_level
from .records import UnifiedLogRecord


Row = Mapping[str, Any]
# A field is a list of alias groups. Groups are tried in order until one
# yields a non-empty value; inside a group the first alias present in the
# header wins, even if its cell is blank.
AliasGroups = List[Tuple[str, ...]]


# Per-format header aliases, all lowercase. Kept as data so each format can be
# read (and tested) without following a chain of ifs.
FIELD_ALIASES: Dict[LogFormat, Dict[str, AliasGroups]] = {
    LogFormat.WINDOWS: {
        "timestamp": [("time",)],
        "component": [("component",)],
        "level": [("level",)],
        "content": [("content",)],
    },
    LogFormat.LINUX_SYSLOG: {
        "date": [("timestamp", "date")],
        "time": [("time",)],
        "component": [("program", "service"), ("component", "daemon"), ("logger",)],
        "level": [("level", "priority"), ("severity",)],
        "content": [("message", "msg"), ("content",)],
        "hostname": [("hostname", "host")],
        "pid": [("pid", "processid")],
    },
    LogFormat.APACHE: {
        "timestamp": [("timestamp", "time")],
        "status": [("status", "code")],
        "request": [("request", "uri")],
        "method": [("method",)],
        "referer": [("referer",)],
        "hostname": [("remotehost", "host")],
    },
    LogFormat.HADOOP: {
        "timestamp": [("logtime", "timestamp")],
        "component": [("logger", "component")],
        "level": [("level", "priority")],
        "content": [("message", "msg"), ("content",)],
    },
    LogFormat.SPARK: {
        "timestamp": [("timestamp", "time")],
        "component": [("logger", "component")],
        "level": [("level", "priority")],
        "content": [("message", "msg"), ("content",)],
    },
    LogFormat.OPENSSH: {
        "timestamp": [("timestamp", "date")],
        "content": [("message", "msg"), ("content",)],
        "hostname": [("hostname", "host")],
    },
}

# Value used when none of a field's aliases produced anything
FIELD_DEFAULTS: Dict[LogFormat, Dict[str, str]] = {
    LogFormat.LINUX_SYSLOG: {"component": "unknown"},
    LogFormat.HADOOP: {"component": "hadoop"},
    LogFormat.SPARK: {"component": "spark"},
}

SOURCE_TAGS: Dict[LogFormat, str] = {
    LogFormat.WINDOWS: "Windows",
    LogFormat.LINUX_SYSLOG: "Linux",
    LogFormat.APACHE: "Apache",
    LogFormat.HADOOP: "Hadoop",
    LogFormat.SPARK: "Spark",
    LogFormat.OPENSSH: "OpenSSH",
}

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class FieldReader:
    """Case-insensitive, alias-aware access to one CSV row."""

    def __init__(self, row: Row, headers: Sequence[str], fmt: LogFormat):
        self.row = row
        self.fmt = fmt
        # First spelling wins when a header appears twice with different case
        self.index: Dict[str, str] = {}
        for h in headers:
            self.index.setdefault(str(h).lower(), h)

    def cell(self, aliases: Tuple[str, ...]) -> str:
        for alias in aliases:
            header = self.index.get(alias)
            if header is not None:
                value = self.row.get(header)
                return "" if value is None else str(value)
        return ""

    def get(self, field: str) -> str:
        for group in FIELD_ALIASES[self.fmt].get(field, []):
            value = self.cell(group)
            if value:
                return value
        return FIELD_DEFAULTS.get(self.fmt, {}).get(field, "")


def serialize_row(row: Row) -> str:
    """Raw row as JSON, used when a row can't be parsed properly."""
    return json.dumps(dict(row), default=str, ensure_ascii=False)


def _leading_int(value: str):
    m = LEADING_INT_RE.match(value)
    return int(m.group(1)) if m else None


# Windows exports already use the right column names, so this is a straight copy.
# Level is left as written; missing cells come through as "".
def parse_windows(row: Row, headers: Sequence[str]) -> UnifiedLogRecord:
    f = FieldReader(row, headers, LogFormat.WINDOWS)
    return UnifiedLogRecord(
        timestamp=f.get("timestamp"),
        component=f.get("component"),
        level=f.get("level"),
        content=f.get("content"),
        source=SOURCE_TAGS[LogFormat.WINDOWS],
    )


def parse_linux_syslog(row: Row, headers: Sequence[str]) -> UnifiedLogRecord:
    """
    Syslog CSV exports come in a few shapes, e.g.
    - timestamp, hostname, program, level, message
    - date, time, hostname, service, message
    """
    f = FieldReader(row, headers, LogFormat.LINUX_SYSLOG)
    timestamp = f"{f.get('date')} {f.get('time')}".strip()
    return UnifiedLogRecord(
        timestamp=timestamp,
        component=f.get("component"),
        level=normalize_level(f.get("level") or CanonicalLevel.INFO.value),
        content=f.get("content"),
        source=SOURCE_TAGS[LogFormat.LINUX_SYSLOG],
        hostname=f.get("hostname"),
        pid=f.get("pid"),
    )


def apache_level(status: str) -> str:
    """5xx is an error, 4xx a warning, everything else (including junk) info."""
    code = _leading_int(status)
    if code is not None and code >= 500:
        return CanonicalLevel.ERROR.value
    if code is not None and code >= 400:
        return CanonicalLevel.WARNING.value
    return CanonicalLevel.INFO.value


# Access logs have no component or message column; we build both.
def parse_apache(row: Row, headers: Sequence[str]) -> UnifiedLogRecord:
    f = FieldReader(row, headers, LogFormat.APACHE)
    status = f.get("status")
    return UnifiedLogRecord(
        timestamp=f.get("timestamp"),
        component="apache",
        level=apache_level(status),
        content=f"{f.get('method')} {f.get('request')} - {status} - {f.get('referer')}",
        source=SOURCE_TAGS[LogFormat.APACHE],
        hostname=f.get("hostname"),
    )


def _parse_jvm_style(row: Row, headers: Sequence[str], fmt: LogFormat) -> UnifiedLogRecord:
    f = FieldReader(row, headers, fmt)
    return UnifiedLogRecord(
        timestamp=f.get("timestamp"),
        component=f.get("component"),
        level=normalize_level(f.get("level")),
        content=f.get("content"),
        source=SOURCE_TAGS[fmt],
    )


def parse_hadoop(row: Row, headers: Sequence[str]) -> UnifiedLogRecord:
    return _parse_jvm_style(row, headers, LogFormat.HADOOP)


def parse_spark(row: Row, headers: Sequence[str]) -> UnifiedLogRecord:
    return _parse_jvm_style(row, headers, LogFormat.SPARK)


def openssh_level(content: str) -> str:
    """sshd has no level column, so we read it off the message text."""
    text = content.lower()
    if "error" in text or "failed" in text:
        return CanonicalLevel.ERROR.value
    if "warning" in text:
        return CanonicalLevel.WARNING.value
    return CanonicalLevel.INFO.value


def parse_openssh(row: Row, headers: Sequence[str]) -> UnifiedLogRecord:
    f = FieldReader(row, headers, LogFormat.OPENSSH)
    content = f.get("content")
    return UnifiedLogRecord(
        timestamp=f.get("timestamp"),
        component="sshd",
        level=openssh_level(content),
        content=content,
        source=SOURCE_TAGS[LogFormat.OPENSSH],
        hostname=f.get("hostname"),
    )


PARSERS: Dict[LogFormat, Callable[[Row, Sequence[str]], UnifiedLogRecord]] = {
    LogFormat.WINDOWS: parse_windows,
    LogFormat.LINUX_SYSLOG: parse_linux_syslog,
    LogFormat.APACHE: parse_apache,
    LogFormat.HADOOP: parse_hadoop,
    LogFormat.SPARK: parse_spark,
    LogFormat.OPENSSH: parse_openssh,
}


def parse_generic(row: Row, headers: Sequence[str]) -> UnifiedLogRecord:
    """
    Best effort for rows we couldn't classify up front.

    Re-run detection on this one row; if that still fails, read it as syslog
    (the most common export). When even that finds no message column, the
    serialized row becomes the content so the line is not silently dropped.
    """
    detected = detect_format(headers, [row])
    if detected != LogFormat.AUTO:
        return PARSERS[detected](row, headers)

    record = parse_linux_syslog(row, headers)
    if not record.content.strip():
        record = replace(record, content=serialize_row(row))
    return record


def parse_row(row: Row, headers: Sequence[str], fmt: LogFormat) -> UnifiedLogRecord:
    """Dispatch one raw row to the parser for its format."""
    parser = PARSERS.get(LogFormat(fmt))
    if parser is None:
        return parse_generic(row, headers)
    return parser(row, headers)
