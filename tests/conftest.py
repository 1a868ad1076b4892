"""
LogDigest - Test Fixtures
"""

import os

import pytest

# Keep tests offline: no model key, no remote venue
os.environ["OPENAI_API_KEY"] = ""
os.environ["LAMBDA_FUNCTION_NAME"] = ""
os.environ["AWS_ACCESS_KEY_ID"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

from logdigest.services.log_pipeline import UnifiedLogRecord  # noqa: E402


def make_record(component="svc", level="Info", content="hello", source="test", **kwargs):
    return UnifiedLogRecord(
        timestamp=kwargs.pop("timestamp", "2024-01-01 00:00:00"),
        component=component,
        level=level,
        content=content,
        source=source,
        **kwargs,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def windows_csv():
    """Two DnsApi errors and one DnsApi info line."""
    return (
        "LineId,Time,Component,Level,Content\n"
        "1,2016-09-28 04:30:30,DnsApi,Error,DNS query failed for host A\n"
        "2,2016-09-28 04:30:31,DnsApi,Info,DNS cache refreshed\n"
        "3,2016-09-28 04:30:32,DnsApi,Error,DNS query failed for host B\n"
    )


@pytest.fixture
def syslog_csv():
    return (
        "Timestamp,Hostname,Program,Level,Message,PID\n"
        "Jun 14 15:16:01,combo,sshd,err,authentication failure; rhost=1.2.3.4,19939\n"
        "Jun 14 15:16:02,combo,kernel,6,Linux version 2.6.5,0\n"
        "Jun 14 15:16:03,combo,cron,notice,session opened for user root,1020\n"
    )


@pytest.fixture
def apache_csv():
    return (
        "RemoteHost,Timestamp,Method,Request,Status,Referer\n"
        "10.0.0.1,2024-01-01T00:00:00Z,GET,/index.html,200,-\n"
        "10.0.0.2,2024-01-01T00:00:01Z,GET,/missing,404,http://example.com\n"
        "10.0.0.3,2024-01-01T00:00:02Z,POST,/api/save,503,-\n"
    )


@pytest.fixture
def unknown_csv():
    return (
        "foo,bar\n"
        "alpha,1\n"
        "beta,2\n"
    )
