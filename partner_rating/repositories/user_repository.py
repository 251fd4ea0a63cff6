"""
User Repository - Partner Rating Platform
partner_rating/repositories/user_repository.py

Data access layer for user/role records, keyed by email.
Covers the signup-approval lifecycle:

    pending --approve--> approved
    pending --reject---> rejected
    any     --delete---> deleted   (soft)
"""

from typing import Any, Dict, List, Optional

from partner_rating.core.permissions import coerce_role
from partner_rating.models.enumerations import UserRole, UserStatus
from partner_rating.repositories.base import BaseRepository

_COLUMNS = """
    EMAIL, ROLE, STATUS, DISPLAY_NAME, APPROVED_BY, APPROVED_AT,
    REJECTION_REASON, DELETED_BY, DELETED_AT, LAST_LOGIN_AT,
    CREATED_AT, UPDATED_AT
"""


class UserRepository(BaseRepository):
    """Repository for user records."""

    TABLE_NAME = "USERS"
    KEY_COLUMN = "EMAIL"

    def create(
        self,
        email: str,
        role: UserRole = UserRole.USER,
        display_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a pending user if one does not exist yet.

        Returns:
            The new or already existing user dict
        """
        existing = self.get_by_email(email)
        if existing:
            return existing

        now = self.utcnow()
        sql = f"""
            INSERT INTO {self.TABLE_NAME}
                (EMAIL, ROLE, STATUS, DISPLAY_NAME, CREATED_AT, UPDATED_AT)
            VALUES (%s, %s, %s, %s, %s, %s)
        """
        params = (
            email,
            UserRole(role).value,
            UserStatus.PENDING.value,
            self.blank_to_none(display_name),
            now,
            now,
        )
        self.execute_query(sql, params, commit=True)
        return self.get_by_email(email)

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} WHERE EMAIL = %s"
        row = self.execute_query(sql, (email,), fetch_one=True)
        if not row:
            return None
        return self._row_to_dict(row)

    def list_users(self, status: Optional[UserStatus] = None) -> List[Dict[str, Any]]:
        """All users, optionally filtered by status, newest first."""
        if status is not None:
            sql = f"""
                SELECT {_COLUMNS} FROM {self.TABLE_NAME}
                WHERE STATUS = %s ORDER BY CREATED_AT DESC
            """
            rows = self.execute_query(sql, (UserStatus(status).value,), fetch_all=True)
        else:
            sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} ORDER BY CREATED_AT DESC"
            rows = self.execute_query(sql, fetch_all=True)
        return [self._row_to_dict(row) for row in rows or []]

    def update_role(self, email: str, role: UserRole) -> Dict[str, Any]:
        """Change a user's role; creates a pending record when none exists."""
        if not self.get_by_email(email):
            return self.create(email, role)
        return self._update(email, {"role": UserRole(role).value})

    def approve(self, email: str, approved_by: str, role: UserRole = UserRole.USER) -> Optional[Dict[str, Any]]:
        now = self.utcnow()
        return self._update(
            email,
            {
                "status": UserStatus.APPROVED.value,
                "role": UserRole(role).value,
                "approved_by": approved_by,
                "approved_at": now,
                "rejection_reason": None,
            },
        )

    def reject(self, email: str, reason: str) -> Optional[Dict[str, Any]]:
        return self._update(
            email,
            {"status": UserStatus.REJECTED.value, "rejection_reason": reason},
        )

    def soft_delete(self, email: str, deleted_by: str) -> Optional[Dict[str, Any]]:
        return self._update(
            email,
            {
                "status": UserStatus.DELETED.value,
                "deleted_by": deleted_by,
                "deleted_at": self.utcnow(),
            },
        )

    def hard_delete(self, email: str) -> bool:
        """Remove the record entirely. Returns False when nothing was deleted."""
        sql = f"DELETE FROM {self.TABLE_NAME} WHERE EMAIL = %s"
        rowcount = self.execute_query(sql, (email,), commit=True)
        return bool(rowcount)

    def touch_last_login(self, email: str) -> None:
        sql = f"UPDATE {self.TABLE_NAME} SET LAST_LOGIN_AT = %s WHERE EMAIL = %s"
        self.execute_query(sql, (self.utcnow(), email), commit=True)

    def _update(self, email: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.update_columns(email, update_data)
        return self.get_by_email(email)

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row to user dict."""
        return {
            "email": row["EMAIL"],
            "role": coerce_role(row["ROLE"]),
            "status": UserStatus(row["STATUS"]),
            "display_name": row["DISPLAY_NAME"],
            "approved_by": row["APPROVED_BY"],
            "approved_at": self.normalize_timestamp(row["APPROVED_AT"]),
            "rejection_reason": row["REJECTION_REASON"],
            "deleted_by": row["DELETED_BY"],
            "deleted_at": self.normalize_timestamp(row["DELETED_AT"]),
            "last_login_at": self.normalize_timestamp(row["LAST_LOGIN_AT"]),
            "created_at": self.normalize_timestamp(row["CREATED_AT"]),
            "updated_at": self.normalize_timestamp(row["UPDATED_AT"]),
        }
