"""
Prompt text for the digest interpretation call.

Each digest entry becomes one numbered line; the model answers with a JSON
array keyed by that 1-based index.
"""
from typing import Sequence

from logdigest.services.log_pipeline.digest import DigestEntry

# Samples are cut here before they go to the model
PROMPT_SAMPLE_CHARS = 100

SYSTEM_PROMPT = (
    "You explain system log patterns to non-technical users. "
    "Respond with JSON only."
)

DIGEST_PROMPT_TEMPLATE = """I am providing a summarized digest of system logs. Each entry represents a log pattern that occurred multiple times.

For each pattern, provide:
1. A 1-sentence "Human Meaning" explanation for non-technical users (explain it like I'm 5)
2. A "Severity Score" from 1-10 (where 10 is critical and 1 is informational)

Return ONLY a valid JSON array with this exact structure:
[
  {{
    "index": 1,
    "humanMeaning": "Brief explanation in plain English",
    "severityScore": 8
  }},
  ...
]

Here are the log patterns:
{digest_text}

Return ONLY the JSON array, no additional text or markdown formatting."""


def truncate_sample(text: str, limit: int = PROMPT_SAMPLE_CHARS) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def format_digest_lines(digest: Sequence[DigestEntry], sample_chars: int = PROMPT_SAMPLE_CHARS) -> str:
    return "\n\n".join(
        f"{i}. The Component '{e.component}' had {e.frequency} '{e.level}' logs. "
        f"Sample: \"{truncate_sample(e.sample_content, sample_chars)}\""
        for i, e in enumerate(digest, start=1)
    )


def build_digest_prompt(digest: Sequence[DigestEntry], sample_chars: int = PROMPT_SAMPLE_CHARS) -> str:
    return DIGEST_PROMPT_TEMPLATE.format(digest_text=format_digest_lines(digest, sample_chars))
