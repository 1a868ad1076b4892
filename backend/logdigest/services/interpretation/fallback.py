from typing import Dict, List, Sequence
from logdigest.models.schemas import AISummary
from logdigest.services.log_pipeline.digest import DigestEntry

# Score by level when no model is available
FALLBACK_SEVERITY: Dict[str, int] = {
    "Error": 8,
    "Warning": 5,
    "Info": 2,
    "Debug": 1,
}
UNKNOWN_LEVEL_SEVERITY = 3


def generate_fallback_summaries(digest: Sequence[DigestEntry]) -> List[AISummary]:
    """
    Deterministic stand-in for the model answer.

    Keeps the service usable without an API key; scores come from the level
    alone and the meaning is a plain restatement of the cluster.
    """
    return [
        AISummary(
            human_meaning=_describe(entry),
            severity_score=FALLBACK_SEVERITY.get(entry.level, UNKNOWN_LEVEL_SEVERITY),
        )
        for entry in digest
    ]


def _describe(entry: DigestEntry) -> str:
    times = "once" if entry.frequency == 1 else f"{entry.frequency} times"
    level = entry.level.lower() if entry.level else "unlabelled"

    if entry.level == "Error":
        tail = "Something failed here and is worth a look."
    elif entry.level == "Warning":
        tail = "Not broken yet, but worth keeping an eye on."
    else:
        tail = "This is routine activity."

    return f"'{entry.component or 'unknown'}' logged a {level} message {times}. {tail}"
