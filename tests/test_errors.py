"""Tests for the domain error hierarchy and the one-call pipeline helpers."""

from conftest import make_record
from logdigest.errors import (
    ConfigurationError,
    CSVParseError,
    EmptyFileError,
    IngestionError,
    InterpretationError,
    LogDigestError,
)
from logdigest.services.log_pipeline import LogFormat, process_csv_text, process_logs


class TestErrorHierarchy:

    def test_empty_file_is_ingestion_error(self):
        err = EmptyFileError("logs.csv")
        assert isinstance(err, IngestionError)
        assert isinstance(err, LogDigestError)
        assert err.http_status == 400
        assert err.to_dict() == {
            "error_code": "EMPTY_FILE",
            "message": "CSV file is empty or has no valid data",
            "details": {"filename": "logs.csv"},
        }

    def test_details_omitted_when_empty(self):
        assert "details" not in CSVParseError("bad quote").to_dict()

    def test_interpretation_error(self):
        err = InterpretationError("timeout", venue="remote")
        assert err.http_status == 502
        assert err.details == {"venue": "remote"}
        assert str(err) == "timeout"

    def test_configuration_error(self):
        err = ConfigurationError("missing", config_key="lambda_function_name")
        assert err.to_dict()["details"] == {"config_key": "lambda_function_name"}


class TestPipelineHelpers:

    def test_process_logs(self):
        records = [make_record(level="Error"), make_record(level="Error"), make_record(level="Info")]
        digest, stats = process_logs(records)
        assert digest[0].frequency == 2
        assert stats.total_logs == 3
        assert stats.unique_patterns == 2

    def test_process_csv_text(self, syslog_csv):
        detected, digest, stats = process_csv_text(syslog_csv, limit=1)
        assert detected == LogFormat.LINUX_SYSLOG
        assert len(digest) == 1
        assert stats.error_count == 1
