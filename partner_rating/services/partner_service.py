"""
Partner listing and dashboard helpers
partner_rating/services/partner_service.py

Pure functions over rows already loaded by the repositories; filtering
happens in memory against the latest evaluation of each partner.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from partner_rating.config import settings
from partner_rating.models.enumerations import (
    PartnerFilter,
    PartnerScope,
    PartnerSearchField,
    Rating,
)

_SEARCH_ALL_FIELDS = ("name", "org", "country", "email")


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_recent(partner: Mapping[str, Any], now: Optional[datetime] = None, days: Optional[int] = None) -> bool:
    """Created within the last `days` (RECENT_PARTNER_DAYS by default)."""
    created_at = _aware(partner.get("created_at"))
    if created_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    days = settings.RECENT_PARTNER_DAYS if days is None else days
    return created_at >= now - timedelta(days=days)


def matches_search(
    partner: Mapping[str, Any],
    term: str,
    field: PartnerSearchField = PartnerSearchField.ALL,
) -> bool:
    """Case-insensitive substring match on one field, or on name/org/country/email."""
    term = term.strip().lower()
    if not term:
        return True
    names = _SEARCH_ALL_FIELDS if field == PartnerSearchField.ALL else (PartnerSearchField(field).value,)
    return any(term in str(partner.get(name) or "").lower() for name in names)


def filter_partners(
    partners: Sequence[Mapping[str, Any]],
    latest_by_partner_id: Mapping[str, Mapping[str, Any]],
    filter_by: Optional[PartnerFilter] = None,
    scope: Optional[PartnerScope] = None,
    rating: Optional[Rating] = None,
    search: Optional[str] = None,
    search_field: PartnerSearchField = PartnerSearchField.ALL,
    now: Optional[datetime] = None,
) -> List[Mapping[str, Any]]:
    """
    Apply list filters, keeping the input order.

    Args:
        partners: Active partner rows
        latest_by_partner_id: partner id -> latest evaluation row
        filter_by: evaluated, unevaluated or recent
        scope: Keep only this scope
        rating: Keep only partners whose latest evaluation has this rating
        search: Substring to look for
        search_field: Which field `search` applies to
    """
    now = now or datetime.now(timezone.utc)
    result = []
    for partner in partners:
        latest = latest_by_partner_id.get(str(partner["id"]))

        if filter_by == PartnerFilter.EVALUATED and latest is None:
            continue
        if filter_by == PartnerFilter.UNEVALUATED and latest is not None:
            continue
        if filter_by == PartnerFilter.RECENT and not is_recent(partner, now):
            continue
        if scope is not None and partner["scope"] != scope:
            continue
        if rating is not None and (latest is None or latest["rating"] != rating):
            continue
        if search and not matches_search(partner, search, search_field):
            continue
        result.append(partner)
    return result


def dashboard_stats(
    partners: Sequence[Mapping[str, Any]],
    evaluations: Sequence[Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Headline counts for active partners.

    rating_counts is the distribution over all evaluations of active
    partners, every Rating present with a zero default.
    """
    now = now or datetime.now(timezone.utc)
    active_ids = {str(p["id"]) for p in partners}
    evaluated_ids = {
        str(e["partner_id"]) for e in evaluations if str(e["partner_id"]) in active_ids
    }

    ratings = Counter(
        Rating(e["rating"]).value for e in evaluations if str(e["partner_id"]) in active_ids
    )
    rating_counts = {r.value: ratings.get(r.value, 0) for r in Rating}

    domestic = sum(1 for p in partners if p["scope"] == PartnerScope.DOMESTIC)
    return {
        "total_partners": len(partners),
        "domestic_partners": domestic,
        "overseas_partners": len(partners) - domestic,
        "evaluated_partners": len(evaluated_ids),
        "unevaluated_partners": len(partners) - len(evaluated_ids),
        "recent_partners": sum(1 for p in partners if is_recent(p, now)),
        "rating_counts": rating_counts,
    }
