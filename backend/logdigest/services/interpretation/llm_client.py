from typing import List, Optional, Sequence
from openai import OpenAI
from logdigest.core.config import Settings, settings as default_settings
from logdigest.core.logging import get_logger
from logdigest.errors import InterpretationError
from logdigest.models.schemas import AISummary
from logdigest.services.log_pipeline.digest import DigestEntry
from .prompts import SYSTEM_PROMPT, build_digest_prompt
from .response import extract_json_array, map_summaries
from .retry import with_retry

logger = get_logger(__name__)


def get_llm_client(api_key: Optional[str] = None, config: Optional[Settings] = None) -> Optional[OpenAI]:
    """Get configured OpenAI-compatible client, or None without a key."""
    config = config or default_settings
    key = api_key or config.openai_api_key
    if not key or not key.strip():
        return None

    return OpenAI(
        api_key=key,
        base_url=config.openai_base_url
    )


def _complete(client: OpenAI, model: str, prompt: str) -> str:
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt}
        ],
        temperature=0.2,
        max_tokens=4000
    )
    content = response.choices[0].message.content
    if not content:
        raise ValueError("LLM returned empty response")
    return content


def summarize_digest(
    digest: Sequence[DigestEntry],
    api_key: Optional[str] = None,
    config: Optional[Settings] = None,
    client: Optional[OpenAI] = None,
) -> List[AISummary]:
    """
    Ask the model for a human meaning and severity score per digest entry.

    Rate limits are retried with backoff; every other failure, and an
    unparseable answer, raises InterpretationError.
    """
    config = config or default_settings
    if not digest:
        return []

    client = client or get_llm_client(api_key, config)
    if client is None:
        raise InterpretationError("LLM API key is not configured", venue="local")

    prompt = build_digest_prompt(digest, sample_chars=config.prompt_sample_chars)
    logger.debug(f"Calling LLM ({config.openai_model}) for {len(digest)} digest entries...")

    content = with_retry(
        lambda: _complete(client, config.openai_model, prompt),
        max_retries=config.llm_max_retries,
        base_delay=config.llm_retry_base_delay,
        venue="local",
    )

    items = extract_json_array(content)
    if items is None:
        logger.warning(f"Failed to parse LLM response as JSON: {content[:200]}")
        raise InterpretationError("Model response was not a JSON array", venue="local")

    logger.info("LLM digest summaries generated successfully")
    return map_summaries(len(digest), items)
