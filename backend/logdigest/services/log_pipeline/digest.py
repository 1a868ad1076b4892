#digest.py - Piles records up by (component, level), counts them, and keeps the top of the list.

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Union

from .records import UnifiedLogRecord, to_unified

# Upper bound on what gets sent for interpretation
MAX_DIGEST_ENTRIES = 100

# Tie-break when two clusters are equally frequent. Debug and any
# non-canonical level share the bottom slot.
LEVEL_PRIORITY: Dict[str, int] = {
    "Error": 3,
    "Warning": 2,
    "Info": 1,
}


def level_priority(level: str) -> int:
    return LEVEL_PRIORITY.get(level, 0)


def build_fingerprint(component: str, level: str) -> str:
    """Cluster key. Message text is deliberately not part of it."""
    return f"{component}-{level}"


# One row of the digest: a whole cluster boiled down to a count and one example.
@dataclass(frozen=True)
class DigestEntry:
    component: str
    level: str
    frequency: int
    sample_content: str
    fingerprint: str

    def to_dict(self) -> Dict[str, Any]:
        # camelCase on the wire; the interpretation side expects these names
        return {
            "component": self.component,
            "level": self.level,
            "frequency": self.frequency,
            "sampleContent": self.sample_content,
            "fingerprint": self.fingerprint,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "DigestEntry":
        """Inverse of to_dict; also takes snake_case keys. Missing fields get blanks."""
        component = str(d.get("component") or "")
        level = str(d.get("level") or "")
        sample = d.get("sampleContent", d.get("sample_content"))
        try:
            frequency = int(d.get("frequency") or 0)
        except (TypeError, ValueError):
            frequency = 0
        return cls(
            component=component,
            level=level,
            frequency=frequency,
            sample_content="" if sample is None else str(sample),
            fingerprint=str(d.get("fingerprint") or build_fingerprint(component, level)),
        )


@dataclass
class _Cluster:
    component: str
    level: str
    count: int
    sample: str


def build_digest(
    logs: Iterable[Union[UnifiedLogRecord, Mapping[str, Any]]],
    limit: int = MAX_DIGEST_ENTRIES,
) -> List[DigestEntry]:
    """
    Cluster by component+level, rank, and cut to `limit` entries.

    The sample is the content of the first record seen for a key and is never
    replaced. Ranking is frequency desc, then level priority desc; anything
    still tied stays in first-seen order (sort is stable). Clusters past the
    limit are dropped without notice.
    """
    clusters: Dict[str, _Cluster] = {}
    for r in to_unified(logs):
        key = build_fingerprint(r.component, r.level)
        cluster = clusters.get(key)
        if cluster is None:
            clusters[key] = _Cluster(component=r.component, level=r.level, count=1, sample=r.content)
        else:
            cluster.count += 1

    ranked = sorted(
        clusters.items(),
        key=lambda kv: (kv[1].count, level_priority(kv[1].level)),
        reverse=True,
    )
    return [
        DigestEntry(
            component=c.component,
            level=c.level,
            frequency=c.count,
            sample_content=c.sample,
            fingerprint=key,
        )
        for key, c in ranked[:max(0, int(limit))]
    ]
