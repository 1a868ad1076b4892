# Digest interpretation: model call, remote venue, retry and fallback
from .prompts import build_digest_prompt, truncate_sample
from .response import extract_json_array, map_summaries
from .retry import with_retry, is_rate_limit_error, backoff_delay
from .fallback import generate_fallback_summaries
from .llm_client import summarize_digest
from .remote import summarize_digest_remote
from .service import InterpretationResult, interpret_digest

__all__ = [
    "build_digest_prompt",
    "truncate_sample",
    "extract_json_array",
    "map_summaries",
    "with_retry",
    "is_rate_limit_error",
    "backoff_delay",
    "generate_fallback_summaries",
    "summarize_digest",
    "summarize_digest_remote",
    "InterpretationResult",
    "interpret_digest",
]
