"""
Evaluation Repository - Partner Rating Platform
partner_rating/repositories/evaluation_repository.py

Data access layer for Evaluation records. Evaluations are append-only:
there is no update or delete here. Answer arrays live in VARIANT columns.
"""

from typing import Any, Dict, List, Optional

from partner_rating.models.enumerations import PartnerScope, Rating
from partner_rating.repositories.base import BaseRepository

_COLUMNS = """
    ID, PARTNER_ID, SCOPE, VERSION, ANSWERS_COMMON, ANSWERS_OVERSEAS,
    TOTAL_SCORE, RATING, NOTE, CREATED_AT
"""


class EvaluationRepository(BaseRepository):
    """Repository for Evaluation inserts and reads."""

    TABLE_NAME = "EVALUATIONS"

    def create(
        self,
        partner_id: str,
        scope: PartnerScope,
        version: int,
        answers_common: List[int],
        answers_overseas: Optional[List[int]],
        total_score: float,
        rating: Rating,
        note: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Insert a new evaluation.

        Snowflake rejects PARSE_JSON inside a VALUES list, so the insert
        is written as INSERT ... SELECT.

        Returns:
            Created evaluation dict
        """
        evaluation_id = self.new_id()
        now = self.utcnow()

        sql = f"""
            INSERT INTO {self.TABLE_NAME} ({_COLUMNS})
            SELECT %s, %s, %s, %s, PARSE_JSON(%s), PARSE_JSON(%s), %s, %s, %s, %s
        """
        params = (
            evaluation_id,
            str(partner_id),
            PartnerScope(scope).value,
            int(version),
            self.to_variant(list(answers_common)),
            self.to_variant(list(answers_overseas) if answers_overseas is not None else None),
            float(total_score),
            Rating(rating).value,
            self.blank_to_none(note),
            now,
        )
        self.execute_query(sql, params, commit=True)

        return self.get_by_id(evaluation_id)

    def get_by_id(self, evaluation_id: str) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} WHERE ID = %s"
        row = self.execute_query(sql, (str(evaluation_id),), fetch_one=True)
        if not row:
            return None
        return self._row_to_dict(row)

    def list_by_partner(self, partner_id: str) -> List[Dict[str, Any]]:
        """All evaluations of a partner, highest version first."""
        sql = f"""
            SELECT {_COLUMNS} FROM {self.TABLE_NAME}
            WHERE PARTNER_ID = %s
            ORDER BY VERSION DESC, CREATED_AT DESC
        """
        rows = self.execute_query(sql, (str(partner_id),), fetch_all=True) or []
        return [self._row_to_dict(row) for row in rows]

    def list_versions(self, partner_id: str) -> List[int]:
        """Every stored version number for a partner (duplicates included)."""
        sql = f"SELECT VERSION FROM {self.TABLE_NAME} WHERE PARTNER_ID = %s"
        rows = self.execute_query(sql, (str(partner_id),), fetch_all=True) or []
        return [int(row["VERSION"]) for row in rows if row["VERSION"] is not None]

    def list_all(self) -> List[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} ORDER BY CREATED_AT DESC"
        rows = self.execute_query(sql, fetch_all=True) or []
        return [self._row_to_dict(row) for row in rows]

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row to evaluation dict."""
        return {
            "id": row["ID"],
            "partner_id": row["PARTNER_ID"],
            "scope": PartnerScope(row["SCOPE"]),
            "version": int(row["VERSION"]),
            "answers_common": self.from_variant(row["ANSWERS_COMMON"]) or [],
            "answers_overseas": self.from_variant(row["ANSWERS_OVERSEAS"]),
            "total_score": float(row["TOTAL_SCORE"]),
            "rating": Rating(row["RATING"]),
            "note": row["NOTE"],
            "created_at": self.normalize_timestamp(row["CREATED_AT"]),
        }
