from __future__ import annotations

from enum import Enum
from typing import Iterable, Protocol


class StageRole(str, Enum):
    APPLIED = "applied"
    REVIEW = "review"
    OFFER = "offer"
    HIRED = "hired"
    REJECTED = "rejected"
    CUSTOM = "custom"


# Backward compatibility aliases seen in legacy stage payloads.
_ALIASES = {
    "new": StageRole.APPLIED.value,
    "screening": StageRole.REVIEW.value,
    "hm_review": StageRole.REVIEW.value,
    "offered": StageRole.OFFER.value,
    "hire": StageRole.HIRED.value,
    "declined": StageRole.REJECTED.value,
}


class StageLike(Protocol):
    id: int
    name: str
    order: int
    is_terminal: bool | None
    stage_role: str | None


def normalize_stage_role(raw: str | None) -> StageRole | None:
    if raw is None:
        return None
    normalized = raw.strip().lower().replace(" ", "_").replace("-", "_")
    if not normalized:
        return None
    normalized = _ALIASES.get(normalized, normalized)
    try:
        return StageRole(normalized)
    except ValueError:
        return StageRole.CUSTOM


def ordered_stages(stages: Iterable[StageLike]) -> list[StageLike]:
    return sorted(stages, key=lambda s: (s.order, s.id))


def resolve_terminal_stage_id(stages: Iterable[StageLike]) -> int | None:
    """
    Picks the "hired" stage of the funnel.

    Stages flagged `is_terminal` (or tagged with the `hired` role) take precedence;
    without any such stage the highest `order` wins. Ties go to the highest id.
    """
    candidates = list(stages)
    if not candidates:
        return None
    flagged = [
        s for s in candidates if s.is_terminal or normalize_stage_role(s.stage_role) == StageRole.HIRED
    ]
    pool = flagged or candidates
    return max(pool, key=lambda s: (s.order, s.id)).id


def is_review_stage(stage: StageLike, *, keyword: str = "review") -> bool:
    role = normalize_stage_role(stage.stage_role)
    if role is not None:
        return role == StageRole.REVIEW
    # Untagged legacy stages: fall back to the stage name.
    needle = keyword.strip().lower()
    return bool(needle) and needle in (stage.name or "").lower()


def resolve_review_stage_ids(
    stages: Iterable[StageLike],
    *,
    explicit_ids: Iterable[int] | None = None,
    keyword: str = "review",
) -> list[int]:
    explicit = [int(v) for v in explicit_ids or []]
    if explicit:
        return explicit
    return [s.id for s in ordered_stages(stages) if is_review_stage(s, keyword=keyword)]
