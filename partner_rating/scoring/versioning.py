"""
Evaluation Versioning Policy
partner_rating/scoring/versioning.py

Evaluations are append-only. Each re-evaluation of a partner gets
version = max(existing versions for that partner) + 1, and the current
evaluation is the one with the highest version (not the newest created_at).
"""

from typing import Any, Dict, Iterable, Mapping, Optional, TypeVar

E = TypeVar("E")


def _field(evaluation: Any, name: str) -> Any:
    if isinstance(evaluation, Mapping):
        return evaluation.get(name)
    return getattr(evaluation, name, None)


def _version_of(evaluation: Any) -> int:
    try:
        return int(_field(evaluation, "version") or 0)
    except (TypeError, ValueError):
        return 0


def next_version(existing_versions: Iterable[int]) -> int:
    """
    Next version number for a partner.

    Examples:
        >>> next_version([])
        1
        >>> next_version([3, 1, 2])
        4
    """
    return max([0, *existing_versions]) + 1


def latest(evaluations: Iterable[E]) -> Optional[E]:
    """
    Evaluation with the highest version, or None for an empty input.

    Accepts row dicts or model objects. On a version tie the one seen last
    wins.
    """
    best: Optional[E] = None
    best_version = -1
    for evaluation in evaluations:
        version = _version_of(evaluation)
        if version >= best_version:
            best = evaluation
            best_version = version
    return best


def latest_by_partner(evaluations: Iterable[E]) -> Dict[str, E]:
    """Group evaluations by partner_id and keep the latest of each group."""
    grouped: Dict[str, list] = {}
    for evaluation in evaluations:
        partner_id = _field(evaluation, "partner_id")
        if partner_id is None:
            continue
        grouped.setdefault(str(partner_id), []).append(evaluation)
    return {pid: latest(group) for pid, group in grouped.items()}
