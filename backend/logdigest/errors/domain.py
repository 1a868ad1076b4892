"""
LogDigest - Domain Error Types

These errors represent pipeline failures independent of the transport layer.
Each error has:
- error_code: Machine-readable identifier for programmatic handling
- http_status: Suggested HTTP status (used by the API layer, not hardcoded in routes)
- message: Human-readable description
"""

from typing import Optional, Dict, Any


class LogDigestError(Exception):
    """
    Base exception for all LogDigest domain errors.

    Routes catch this one type and translate it into an HTTP response.
    """
    error_code: str = "INTERNAL_ERROR"
    http_status: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON response."""
        result = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Ingestion Errors
# =============================================================================

class IngestionError(LogDigestError):
    """Base class for CSV ingestion failures."""
    error_code = "INGESTION_FAILED"
    http_status = 400


class EmptyFileError(IngestionError):
    """The CSV had no data rows below its header."""
    error_code = "EMPTY_FILE"
    http_status = 400

    def __init__(self, filename: Optional[str] = None):
        details = {"filename": filename} if filename else {}
        super().__init__("CSV file is empty or has no valid data", details)


class CSVParseError(IngestionError):
    """The tabular reader could not make sense of the input."""
    error_code = "CSV_PARSE_FAILED"
    http_status = 400


# =============================================================================
# Interpretation Errors
# =============================================================================

class InterpretationError(LogDigestError):
    """The model call (local or remote) failed."""
    error_code = "INTERPRETATION_FAILED"
    http_status = 502

    def __init__(self, message: str, venue: Optional[str] = None,
                 attempts: Optional[int] = None):
        details: Dict[str, Any] = {}
        if venue:
            details["venue"] = venue
        if attempts is not None:
            details["attempts"] = attempts
        super().__init__(message, details)


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(LogDigestError):
    """System configuration error."""
    error_code = "CONFIGURATION_ERROR"
    http_status = 500

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, details)
