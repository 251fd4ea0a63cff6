"""
Criteria Repository - Partner Rating Platform
partner_rating/repositories/criteria_repository.py

Stored, admin-editable copy of the question catalog. Scores are always
computed from the built-in catalog; this table backs the admin screens.
"""

from typing import Any, Dict, List, Optional

from partner_rating.models.enumerations import QuestionSet
from partner_rating.repositories.base import BaseRepository

_COLUMNS = """
    ID, SCOPE, CATEGORY, QUESTION_ID, TEXT, SORT_ORDER, ACTIVE,
    CREATED_AT, UPDATED_AT
"""

UPDATABLE_FIELDS = ("scope", "category", "question_id", "text", "order", "active")


class CriteriaRepository(BaseRepository):
    """Repository for evaluation criteria."""

    TABLE_NAME = "EVALUATION_CRITERIA"

    def create(
        self,
        scope: QuestionSet,
        category: str,
        question_id: str,
        text: str,
        order: int = 1,
        active: bool = True,
    ) -> Dict[str, Any]:
        criterion_id = self.new_id()
        now = self.utcnow()

        sql = f"""
            INSERT INTO {self.TABLE_NAME} ({_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
        """
        params = (
            criterion_id,
            QuestionSet(scope).value,
            category,
            question_id,
            text.strip(),
            int(order),
            bool(active),
            now,
            now,
        )
        self.execute_query(sql, params, commit=True)
        return self.get_by_id(criterion_id)

    def get_by_id(self, criterion_id: str) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} WHERE ID = %s"
        row = self.execute_query(sql, (str(criterion_id),), fetch_one=True)
        if not row:
            return None
        return self._row_to_dict(row)

    def list_all(self) -> List[Dict[str, Any]]:
        sql = f"""
            SELECT {_COLUMNS} FROM {self.TABLE_NAME}
            ORDER BY SCOPE, CATEGORY, SORT_ORDER
        """
        rows = self.execute_query(sql, fetch_all=True) or []
        return [self._row_to_dict(row) for row in rows]

    def count(self) -> int:
        row = self.execute_query(
            f"SELECT COUNT(*) AS TOTAL FROM {self.TABLE_NAME}", fetch_one=True
        )
        return int(row["TOTAL"]) if row else 0

    def update(self, criterion_id: str, **changes: Any) -> Optional[Dict[str, Any]]:
        update_data: Dict[str, Any] = {}
        for field in UPDATABLE_FIELDS:
            if changes.get(field) is None:
                continue
            value = changes[field]
            if field == "scope":
                value = QuestionSet(value).value
            column = "sort_order" if field == "order" else field
            update_data[column] = value

        if not update_data:
            return self.get_by_id(criterion_id)

        self.update_columns(str(criterion_id), update_data)
        return self.get_by_id(criterion_id)

    def delete(self, criterion_id: str) -> bool:
        sql = f"DELETE FROM {self.TABLE_NAME} WHERE ID = %s"
        return bool(self.execute_query(sql, (str(criterion_id),), commit=True))

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": row["ID"],
            "scope": QuestionSet(row["SCOPE"]),
            "category": row["CATEGORY"],
            "question_id": row["QUESTION_ID"],
            "text": row["TEXT"],
            "order": int(row["SORT_ORDER"]),
            "active": bool(row["ACTIVE"]),
            "created_at": self.normalize_timestamp(row["CREATED_AT"]),
            "updated_at": self.normalize_timestamp(row["UPDATED_AT"]),
        }
