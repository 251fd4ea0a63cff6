"""
Partner Repository - Partner Rating Platform
partner_rating/repositories/partner_repository.py

Data access layer for Partner entity operations.
Partners are archived (soft-deleted) instead of being removed.
"""

from typing import Any, Dict, List, Optional

from partner_rating.models.enumerations import PartnerScope
from partner_rating.repositories.base import BaseRepository

_COLUMNS = """
    ID, SCOPE, COUNTRY, NAME, ORG, EMAIL, PHONE,
    ARCHIVED, CREATED_AT, UPDATED_AT
"""

# Columns a caller may change through update()
UPDATABLE_FIELDS = ("scope", "country", "name", "org", "email", "phone")


class PartnerRepository(BaseRepository):
    """Repository for Partner CRUD operations."""

    TABLE_NAME = "PARTNERS"

    def create(
        self,
        scope: PartnerScope,
        country: str,
        name: str,
        org: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a new partner.

        Returns:
            Created partner dict
        """
        partner_id = self.new_id()
        now = self.utcnow()

        sql = f"""
            INSERT INTO {self.TABLE_NAME} ({_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        """
        params = (
            partner_id,
            PartnerScope(scope).value,
            country,
            name,
            org,
            self.blank_to_none(email),
            self.blank_to_none(phone),
            False,
            now,
            now,
        )
        self.execute_query(sql, params, commit=True)

        return self.get_by_id(partner_id)

    def get_by_id(self, partner_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve a partner by ID, archived or not.

        Returns:
            Partner dict or None if not found
        """
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} WHERE ID = %s"
        row = self.execute_query(sql, (str(partner_id),), fetch_one=True)

        if not row:
            return None

        return self._row_to_dict(row)

    def list_active(self) -> List[Dict[str, Any]]:
        """Non-archived partners, newest first."""
        sql = f"""
            SELECT {_COLUMNS} FROM {self.TABLE_NAME}
            WHERE ARCHIVED = FALSE
            ORDER BY CREATED_AT DESC
        """
        rows = self.execute_query(sql, fetch_all=True) or []
        return [self._row_to_dict(row) for row in rows]

    def list_archived(self) -> List[Dict[str, Any]]:
        """Archived partners, most recently updated first."""
        sql = f"""
            SELECT {_COLUMNS} FROM {self.TABLE_NAME}
            WHERE ARCHIVED = TRUE
            ORDER BY UPDATED_AT DESC
        """
        rows = self.execute_query(sql, fetch_all=True) or []
        return [self._row_to_dict(row) for row in rows]

    def update(self, partner_id: str, **changes: Any) -> Optional[Dict[str, Any]]:
        """
        Update partner fields.

        Only keys in UPDATABLE_FIELDS with a non-None value are written.
        Empty email/phone strings clear the stored value.

        Returns:
            Updated partner dict or None if not found
        """
        update_data: Dict[str, Any] = {}
        for field in UPDATABLE_FIELDS:
            if field not in changes or changes[field] is None:
                continue
            value = changes[field]
            if field == "scope":
                value = PartnerScope(value).value
            elif field in ("email", "phone"):
                value = self.blank_to_none(value)
            update_data[field] = value

        if not update_data:
            return self.get_by_id(partner_id)

        self.update_columns(str(partner_id), update_data)
        return self.get_by_id(partner_id)

    def set_archived(self, partner_id: str, archived: bool) -> Optional[Dict[str, Any]]:
        """Move a partner to or from the trash."""
        self.update_columns(str(partner_id), {"archived": archived})
        return self.get_by_id(partner_id)

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row to partner dict."""
        return {
            "id": row["ID"],
            "scope": PartnerScope(row["SCOPE"]),
            "country": row["COUNTRY"],
            "name": row["NAME"],
            "org": row["ORG"],
            "email": row["EMAIL"],
            "phone": row["PHONE"],
            "archived": bool(row["ARCHIVED"]),
            "created_at": self.normalize_timestamp(row["CREATED_AT"]),
            "updated_at": self.normalize_timestamp(row["UPDATED_AT"]),
        }
