"""Tests for per-format row parsers and dispatch."""

import json

import pytest

from logdigest.services.log_pipeline.formats import LogFormat
from logdigest.services.log_pipeline.parsers import (
    FIELD_ALIASES,
    apache_level,
    openssh_level,
    parse_row,
)


class TestWindowsParser:
    HEADERS = ["LineId", "Time", "Component", "Level", "Content"]

    def test_verbatim_mapping(self):
        row = {"LineId": "1", "Time": "04:30:30", "Component": "CBS", "Level": "ERROR", "Content": "boom"}
        r = parse_row(row, self.HEADERS, LogFormat.WINDOWS)
        assert r.timestamp == "04:30:30"
        assert r.component == "CBS"
        # Windows level is not normalized
        assert r.level == "ERROR"
        assert r.content == "boom"
        assert r.source == "Windows"

    def test_missing_column_is_empty_string(self):
        headers = ["LineId", "Level", "Content"]
        r = parse_row({"LineId": "1", "Level": "Info", "Content": "x"}, headers, LogFormat.WINDOWS)
        assert r.component == ""
        assert r.timestamp == ""

    def test_header_case_ignored(self):
        headers = ["lineid", "TIME", "component", "LEVEL", "content"]
        row = {"lineid": "1", "TIME": "t", "component": "c", "LEVEL": "Info", "content": "m"}
        r = parse_row(row, headers, LogFormat.WINDOWS)
        assert (r.timestamp, r.component, r.level, r.content) == ("t", "c", "Info", "m")


class TestLinuxSyslogParser:

    def test_date_and_time_joined(self):
        headers = ["date", "time", "host", "service", "message", "pid"]
        row = {"date": "2024-01-01", "time": "10:00:00", "host": "web1",
               "service": "nginx", "message": "started", "pid": "42"}
        r = parse_row(row, headers, LogFormat.LINUX_SYSLOG)
        assert r.timestamp == "2024-01-01 10:00:00"
        assert r.component == "nginx"
        assert r.hostname == "web1"
        assert r.pid == "42"
        assert r.level == "Info"
        assert r.source == "Linux"

    def test_timestamp_without_time_is_trimmed(self):
        headers = ["Timestamp", "Hostname", "Program", "Level", "Message"]
        row = {"Timestamp": "Jun 14 15:16:01", "Hostname": "combo", "Program": "sshd",
               "Level": "err", "Message": "auth failure"}
        r = parse_row(row, headers, LogFormat.LINUX_SYSLOG)
        assert r.timestamp == "Jun 14 15:16:01"
        assert r.level == "Error"

    def test_component_falls_back_through_alias_groups(self):
        headers = ["timestamp", "host", "daemon", "message"]
        r = parse_row({"timestamp": "t", "host": "h", "daemon": "crond", "message": "m"},
                      headers, LogFormat.LINUX_SYSLOG)
        assert r.component == "crond"

        headers = ["timestamp", "host", "logger", "message"]
        r = parse_row({"timestamp": "t", "host": "h", "logger": "app.main", "message": "m"},
                      headers, LogFormat.LINUX_SYSLOG)
        assert r.component == "app.main"

    def test_blank_first_group_moves_to_next_group(self):
        headers = ["timestamp", "host", "program", "component", "message"]
        row = {"timestamp": "t", "host": "h", "program": "", "component": "kernel", "message": "m"}
        assert parse_row(row, headers, LogFormat.LINUX_SYSLOG).component == "kernel"

    def test_first_alias_in_group_wins(self):
        headers = ["timestamp", "host", "service", "program", "message"]
        row = {"timestamp": "t", "host": "h", "service": "svc", "program": "prog", "message": "m"}
        assert parse_row(row, headers, LogFormat.LINUX_SYSLOG).component == "prog"

    def test_missing_component_defaults_to_unknown(self):
        headers = ["timestamp", "host", "message"]
        r = parse_row({"timestamp": "t", "host": "h", "message": "m"}, headers, LogFormat.LINUX_SYSLOG)
        assert r.component == "unknown"

    def test_severity_alias_and_numeric_code(self):
        headers = ["timestamp", "host", "severity", "msg"]
        r = parse_row({"timestamp": "t", "host": "h", "severity": "4", "msg": "disk"},
                      headers, LogFormat.LINUX_SYSLOG)
        assert r.level == "Warning"
        assert r.content == "disk"


class TestApacheParser:
    HEADERS = ["RemoteHost", "Timestamp", "Method", "Request", "Status", "Referer"]

    def _row(self, status, referer="-"):
        return {"RemoteHost": "10.0.0.1", "Timestamp": "ts", "Method": "GET",
                "Request": "/index.html", "Status": status, "Referer": referer}

    def test_content_is_synthesized(self):
        r = parse_row(self._row("404", "http://example.com"), self.HEADERS, LogFormat.APACHE)
        assert r.content == "GET /index.html - 404 - http://example.com"
        assert r.component == "apache"
        assert r.hostname == "10.0.0.1"
        assert r.source == "Apache"

    @pytest.mark.parametrize("status,expected", [
        ("500", "Error"), ("503", "Error"), ("404", "Warning"),
        ("400", "Warning"), ("200", "Info"), ("-", "Info"), ("", "Info"),
    ])
    def test_level_from_status(self, status, expected):
        assert parse_row(self._row(status), self.HEADERS, LogFormat.APACHE).level == expected

    def test_status_with_trailing_text(self):
        assert apache_level("502 Bad Gateway") == "Error"


class TestJvmStyleParsers:

    def test_hadoop_defaults(self):
        headers = ["LogTime", "Level", "Message"]
        r = parse_row({"LogTime": "2015-10-18", "Level": "WARN", "Message": "slow"},
                      headers, LogFormat.HADOOP)
        assert r.component == "hadoop"
        assert r.level == "Warning"
        assert r.timestamp == "2015-10-18"
        assert r.source == "Hadoop"

    def test_hadoop_logger_and_empty_level(self):
        headers = ["LogTime", "Priority", "Logger", "Content"]
        r = parse_row({"LogTime": "t", "Priority": "", "Logger": "dfs.DataNode", "Content": "x"},
                      headers, LogFormat.HADOOP)
        assert r.component == "dfs.DataNode"
        assert r.level == "Info"
        assert r.content == "x"

    def test_spark_defaults(self):
        headers = ["Timestamp", "Level", "Msg"]
        r = parse_row({"Timestamp": "t", "Level": "ERROR", "Msg": "executor lost"},
                      headers, LogFormat.SPARK)
        assert r.component == "spark"
        assert r.level == "Error"
        assert r.content == "executor lost"
        assert r.source == "Spark"


class TestOpenSSHParser:
    HEADERS = ["Date", "Host", "Content"]

    @pytest.mark.parametrize("content,expected", [
        ("Failed password for root from 1.2.3.4", "Error"),
        ("error: connect_to port 22", "Error"),
        ("WARNING: possible break-in attempt", "Warning"),
        ("Accepted publickey for alice", "Info"),
    ])
    def test_level_from_content(self, content, expected):
        r = parse_row({"Date": "Dec 10", "Host": "h", "Content": content}, self.HEADERS, LogFormat.OPENSSH)
        assert r.level == expected
        assert r.component == "sshd"
        assert r.source == "OpenSSH"
        assert r.hostname == "h"

    def test_openssh_level_helper(self):
        assert openssh_level("") == "Info"


class TestGenericFallback:

    def test_unrecognized_row_keeps_serialized_content(self):
        headers = ["foo", "bar"]
        row = {"foo": "alpha", "bar": "1"}
        r = parse_row(row, headers, LogFormat.AUTO)
        assert r.component == "unknown"
        assert r.level == "Info"
        assert json.loads(r.content) == row

    def test_row_level_redetection(self):
        headers = ["msg"]
        r = parse_row({"msg": "sshd connection closed"}, headers, LogFormat.AUTO)
        assert r.source == "OpenSSH"
        assert r.component == "sshd"
        assert r.content == "sshd connection closed"

    def test_syslog_shape_without_timestamp_header(self):
        headers = ["program", "message"]
        r = parse_row({"program": "cron", "message": "job done"}, headers, "auto")
        assert r.component == "cron"
        assert r.content == "job done"
        assert r.source == "Linux"

    def test_string_format_accepted(self):
        headers = ["Status", "Request", "Method"]
        r = parse_row({"Status": "500", "Request": "/", "Method": "GET"}, headers, "apache")
        assert r.level == "Error"


class TestAliasTables:

    def test_every_parsed_format_has_a_table(self):
        assert set(FIELD_ALIASES) == {f for f in LogFormat if f != LogFormat.AUTO}

    def test_aliases_are_lowercase(self):
        for fields in FIELD_ALIASES.values():
            for groups in fields.values():
                for group in groups:
                    assert all(a == a.lower() for a in group)
