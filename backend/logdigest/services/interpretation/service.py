from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from logdigest.core.config import Settings, settings as default_settings
from logdigest.core.logging import get_logger
from logdigest.errors import LogDigestError
from logdigest.models.schemas import AISummary
from logdigest.services.log_pipeline.digest import DigestEntry
from .fallback import generate_fallback_summaries
from .llm_client import summarize_digest
from .remote import summarize_digest_remote

logger = get_logger(__name__)


@dataclass
class InterpretationResult:
    summaries: List[AISummary]
    used_llm: bool
    venue: str
    errors: List[str] = field(default_factory=list)


def interpret_digest(
    digest: Sequence[DigestEntry],
    config: Optional[Settings] = None,
    llm_client=None,
    lambda_client=None,
) -> InterpretationResult:
    """
    Turn a digest into one AISummary per entry, in digest order.

    Venue order: remote Lambda when configured, then the local model call,
    then deterministic fallback. A failing venue is logged and recorded in
    `errors`, never raised.
    """
    config = config or default_settings
    errors: List[str] = []

    if not digest:
        return InterpretationResult(summaries=[], used_llm=False, venue="none")

    if not config.has_llm_key:
        logger.info("LLM not available, using fallback summaries")
        return InterpretationResult(
            summaries=generate_fallback_summaries(digest),
            used_llm=False,
            venue="fallback",
            errors=["LLM not available"],
        )

    if config.has_remote_venue:
        try:
            summaries = summarize_digest_remote(
                digest, api_key=config.openai_api_key, config=config, client=lambda_client
            )
            return InterpretationResult(summaries=summaries, used_llm=True, venue="remote")
        except Exception as e:
            logger.error(f"[Analysis] Lambda execution failed, falling back to local: {e}")
            errors.append(f"Remote venue failed: {e}")

    logger.info("[Analysis] Running locally")
    try:
        summaries = summarize_digest(digest, config=config, client=llm_client)
        return InterpretationResult(summaries=summaries, used_llm=True, venue="local", errors=errors)
    except LogDigestError as e:
        logger.warning(f"LLM interpretation failed, using fallback: {e.message}")
        errors.append(e.message)

    return InterpretationResult(
        summaries=generate_fallback_summaries(digest),
        used_llm=False,
        venue="fallback",
        errors=errors,
    )
