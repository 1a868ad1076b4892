#formats.py - Looks at the CSV header (and a few rows) and guesses which system wrote it.

from __future__ import annotations
from enum import Enum
from typing import Any, Mapping, Sequence


class LogFormat(str, Enum):
    """Source formats we know how to parse. AUTO means we could not tell."""
    WINDOWS = "windows"
    LINUX_SYSLOG = "linux-syslog"
    APACHE = "apache"
    HADOOP = "hadoop"
    SPARK = "spark"
    OPENSSH = "openssh"
    AUTO = "auto"


# Substrings in the first column that give away an OpenSSH export
OPENSSH_MARKERS = ("sshd", "connection", "authentication")


def detect_format(headers: Sequence[str], sample_rows: Sequence[Mapping[str, Any]] = ()) -> LogFormat:
    """
    Classify the input by header shape, first rule wins.

    Order matters: syslog and Spark both carry a `timestamp` column,
    so syslog (timestamp + host) has to be tried before Spark (timestamp + logger).
    Only when no header rule fits do we peek at the first column's values.
    """
    h = {str(x).lower() for x in headers}

    if "lineid" in h and "component" in h and "level" in h:
        return LogFormat.WINDOWS

    if "timestamp" in h and ("hostname" in h or "host" in h):
        return LogFormat.LINUX_SYSLOG

    if "remotehost" in h or "request" in h or "status" in h:
        return LogFormat.APACHE

    if "logtime" in h and ("level" in h or "priority" in h):
        return LogFormat.HADOOP

    if "timestamp" in h and "logger" in h:
        return LogFormat.SPARK

    first_col = headers[0] if headers else ""
    for row in sample_rows:
        value = row.get(first_col) if isinstance(row, Mapping) else None
        text = str(value or "").lower()
        if any(marker in text for marker in OPENSSH_MARKERS):
            return LogFormat.OPENSSH

    return LogFormat.AUTO
