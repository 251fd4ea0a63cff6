"""
Export Formatter
partner_rating/services/export.py

Builds CSV and JSON export payloads from rows already in memory. Nothing
here touches the network or the filesystem; routers stream the returned text.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import UUID

from partner_rating.scoring.rating import rating_label

CSV_HEADER = [
    "id",
    "scope",
    "country",
    "name",
    "org",
    "email",
    "phone",
    "createdAt",
    "latestScore",
    "latestRating",
    "latestMemo",
]


def escape_csv(value: Any) -> str:
    """Quote a field and double any embedded quotes. None renders as ""."""
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _iso(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _score_text(score: Any) -> str:
    if score is None:
        return ""
    score = float(score)
    return str(int(score)) if score.is_integer() else str(score)


def _json_safe(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return _iso(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Mapping):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def to_csv(
    partners: Iterable[Mapping[str, Any]],
    latest_evaluation_by_partner_id: Mapping[str, Mapping[str, Any]],
) -> str:
    """
    Render partners with their latest evaluation as CSV text.

    Args:
        partners: Partner rows, already in the desired order
        latest_evaluation_by_partner_id: partner id (str) -> latest evaluation row

    Returns:
        Header line plus one line per partner, joined with "\\n"
    """
    lines = [",".join(CSV_HEADER)]
    for partner in partners:
        latest = latest_evaluation_by_partner_id.get(str(partner.get("id"))) or {}
        row = [
            partner.get("id"),
            _json_safe(partner.get("scope")),
            partner.get("country"),
            partner.get("name"),
            partner.get("org"),
            partner.get("email"),
            partner.get("phone"),
            _iso(partner.get("created_at")),
            _score_text(latest.get("total_score")),
            rating_label(latest.get("rating")) if latest else "",
            latest.get("note"),
        ]
        lines.append(",".join(escape_csv(v) for v in row))
    return "\n".join(lines)


def build_backup(
    partners: List[Mapping[str, Any]],
    evaluations: List[Mapping[str, Any]],
    exported_by: Optional[str],
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """JSON-ready dump of partners and evaluations."""
    exported_at = exported_at or datetime.now(timezone.utc)
    return {
        "partners": [_json_safe(dict(p)) for p in partners],
        "evaluations": [_json_safe(dict(e)) for e in evaluations],
        "exportedAt": _iso(exported_at),
        "exportedBy": exported_by or "",
    }


def _section(title: str, rows: List[Mapping[str, Any]]) -> List[str]:
    lines = [f"=== {title} ==="]
    if rows:
        columns = list(rows[0].keys())
        lines.append(",".join(columns))
        for row in rows:
            lines.append(",".join(escape_csv(_csv_cell(row.get(c))) for c in columns))
    return lines


def _csv_cell(value: Any) -> Any:
    if isinstance(value, list):
        return " ".join(str(v) for v in value)
    return value


def backup_to_csv(backup: Mapping[str, Any]) -> str:
    """Sectioned CSV text for a backup produced by build_backup()."""
    lines: List[str] = []
    lines += _section("PARTNERS", backup.get("partners") or [])
    lines.append("")
    lines += _section("EVALUATIONS", backup.get("evaluations") or [])
    lines.append("")
    lines.append(f"Exported at: {backup.get('exportedAt', '')}")
    lines.append(f"Exported by: {backup.get('exportedBy', '')}")
    return "\n".join(lines)
