"""
LogDigest - Domain Errors

Canonical error types shared by the pipeline, the interpretation layer
and the API boundary.
"""

from .domain import (
    LogDigestError,
    IngestionError,
    EmptyFileError,
    CSVParseError,
    InterpretationError,
    ConfigurationError,
)

__all__ = [
    'LogDigestError',
    'IngestionError',
    'EmptyFileError',
    'CSVParseError',
    'InterpretationError',
    'ConfigurationError',
]
