import uuid
import time
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from logdigest.core.config import Settings, settings as default_settings
from logdigest.core.logging import get_logger
from logdigest.models.schemas import (
    AnalyzeResponse, AnalyzedLogPattern, DigestEntryOut, DigestResponse, StatsOut
)
from logdigest.services.log_pipeline import (
    DigestEntry, LogFormat, LogStats, build_digest, calculate_stats, parse_csv_text
)
from logdigest.services.interpretation import interpret_digest

logger = get_logger(__name__)


class PipelineTimings:
    """Track timing metrics for pipeline stages."""

    def __init__(self):
        self.start_time = time.time()
        self.parse_ms: float = 0
        self.digest_ms: float = 0
        self.llm_ms: float = 0
        self.total_ms: float = 0

    def log_summary(self, request_id: str):
        self.total_ms = (time.time() - self.start_time) * 1000
        logger.info(
            f"[{request_id}] Pipeline completed - "
            f"parse: {self.parse_ms:.1f}ms, "
            f"digest: {self.digest_ms:.1f}ms, "
            f"llm: {self.llm_ms:.1f}ms, "
            f"total: {self.total_ms:.1f}ms"
        )


def build_digest_from_file(
    file_bytes: bytes,
    filename: str,
    fmt: LogFormat = LogFormat.AUTO,
    config: Optional[Settings] = None,
    timings: Optional[PipelineTimings] = None,
) -> Tuple[LogFormat, List[DigestEntry], LogStats]:
    """Decode, ingest, digest and count. Raises EmptyFileError for header-only uploads."""
    config = config or default_settings
    timings = timings or PipelineTimings()

    t0 = time.time()
    raw_text = _decode_file(file_bytes)
    detected, records = parse_csv_text(
        raw_text, fmt=fmt, sample_size=config.detection_sample_rows, filename=filename
    )
    timings.parse_ms = (time.time() - t0) * 1000

    t0 = time.time()
    digest = build_digest(records, limit=config.digest_limit)
    stats = calculate_stats(records)
    timings.digest_ms = (time.time() - t0) * 1000

    return detected, digest, stats


def digest_log_file(
    file_bytes: bytes,
    filename: str,
    fmt: LogFormat = LogFormat.AUTO,
    config: Optional[Settings] = None,
) -> DigestResponse:
    """Digest and stats only; no model call."""
    detected, digest, stats = build_digest_from_file(file_bytes, filename, fmt, config)
    return DigestResponse(
        filename=filename,
        detected_format=detected.value,
        stats=_stats_out(stats),
        digest=[_entry_out(e) for e in digest],
    )


def analyze_log_file(
    file_bytes: bytes,
    filename: str,
    fmt: LogFormat = LogFormat.AUTO,
    config: Optional[Settings] = None,
    llm_client=None,
    lambda_client=None,
) -> AnalyzeResponse:
    """
    Main pipeline orchestration for a CSV log export.

    Stages:
    1. Decode and ingest rows into unified records
    2. Build the bounded digest and the stats
    3. Interpret the digest (remote, local model, or fallback)
    4. Merge interpretations back onto digest entries
    """
    config = config or default_settings
    run_id = str(uuid.uuid4())
    request_id = run_id[:8]
    timings = PipelineTimings()

    logger.info(f"[{request_id}] Starting analysis for {filename}")

    try:
        detected, digest, stats = build_digest_from_file(
            file_bytes, filename, fmt, config, timings
        )
        logger.info(
            f"[{request_id}] {stats.total_logs} records, "
            f"{stats.unique_patterns} patterns, {len(digest)} in digest"
        )

        t0 = time.time()
        result = interpret_digest(
            digest, config=config, llm_client=llm_client, lambda_client=lambda_client
        )
        timings.llm_ms = (time.time() - t0) * 1000
        logger.info(f"[{request_id}] Interpretation venue: {result.venue}")

        patterns = [
            AnalyzedLogPattern(
                **_entry_out(entry).model_dump(),
                human_meaning=summary.human_meaning,
                severity_score=summary.severity_score,
                total_occurrences=entry.frequency,
            )
            for entry, summary in zip(digest, result.summaries)
        ]

        timings.log_summary(request_id)

        return AnalyzeResponse(
            run_id=run_id,
            created_at=datetime.now(timezone.utc).isoformat(),
            filename=filename,
            detected_format=detected.value,
            stats=_stats_out(stats),
            patterns=patterns,
            used_llm=result.used_llm,
            interpretation_errors=result.errors,
        )

    except Exception as e:
        logger.error(f"[{request_id}] Pipeline failed: {e}", exc_info=True)
        raise


def _decode_file(file_bytes: bytes) -> str:
    """Decode file bytes to string with fallback encodings."""
    encodings = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252']

    for encoding in encodings:
        try:
            return file_bytes.decode(encoding)
        except UnicodeDecodeError:
            continue

    # Last resort: decode with replacement
    return file_bytes.decode('utf-8', errors='replace')


def _entry_out(entry: DigestEntry) -> DigestEntryOut:
    return DigestEntryOut(
        component=entry.component,
        level=entry.level,
        frequency=entry.frequency,
        sample_content=entry.sample_content,
        fingerprint=entry.fingerprint,
    )


def _stats_out(stats: LogStats) -> StatsOut:
    return StatsOut(**stats.to_dict())
