"""
Base Repository - Partner Rating Platform
partner_rating/repositories/base.py

Snowflake connection handling shared by every repository, plus the value
conversions rows need on the way in and out (VARIANT answers, NULL for
blank optional text, UTC timestamps).
"""

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Generator, Optional
from uuid import uuid4

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from partner_rating.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    ForeignKeyViolationException,
    RepositoryException,
)
from partner_rating.services.snowflake import get_snowflake_connection


class BaseRepository:
    """Base repository with Snowflake connection management."""

    TABLE_NAME = ""
    KEY_COLUMN = "ID"

    @contextmanager
    def get_connection(self) -> Generator[snowflake.connector.SnowflakeConnection, None, None]:
        """Context manager for Snowflake connections."""
        conn = None
        try:
            conn = get_snowflake_connection()
            yield conn
        except InterfaceError as e:
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}")
        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self) -> Generator[DictCursor, None, None]:
        """DictCursor whose connection is closed on exit."""
        with self.get_connection() as conn:
            cursor = conn.cursor(DictCursor)
            try:
                yield cursor
            finally:
                cursor.close()

    def execute_query(
        self,
        sql: str,
        params: Optional[tuple] = None,
        fetch_one: bool = False,
        fetch_all: bool = False,
        commit: bool = False,
    ) -> Optional[Any]:
        """
        Execute a SQL query with error handling.

        Args:
            sql: SQL query string
            params: Query parameters
            fetch_one: Return single row
            fetch_all: Return all rows
            commit: Commit transaction after execution

        Returns:
            A row, a list of rows, or the affected row count
        """
        with self.get_cursor() as cursor:
            try:
                cursor.execute(sql, params or ())

                if commit:
                    cursor.connection.commit()

                if fetch_one:
                    return cursor.fetchone()
                elif fetch_all:
                    return cursor.fetchall()

                return cursor.rowcount

            except ProgrammingError as e:
                error_msg = str(e).upper()
                if "UNIQUE" in error_msg or "DUPLICATE" in error_msg:
                    raise DuplicateEntityException(str(e))
                elif "FOREIGN KEY" in error_msg:
                    raise ForeignKeyViolationException(str(e))
                raise RepositoryException(f"Query error: {e}")
            except DatabaseError as e:
                raise RepositoryException(f"Database error: {e}")

    def update_columns(self, key: Any, changes: Dict[str, Any]) -> int:
        """
        UPDATE the row whose KEY_COLUMN equals `key`, stamping UPDATED_AT.

        Keys of `changes` are column names (any case); values are written
        as given, None included.

        Returns:
            Number of rows updated
        """
        columns = dict(changes)
        columns["updated_at"] = self.utcnow()

        assignments = ", ".join(f"{column.upper()} = %s" for column in columns)
        sql = f"UPDATE {self.TABLE_NAME} SET {assignments} WHERE {self.KEY_COLUMN} = %s"
        params = tuple(columns.values()) + (key,)
        return self.execute_query(sql, params, commit=True)

    @staticmethod
    def new_id() -> str:
        return str(uuid4())

    @staticmethod
    def utcnow() -> datetime:
        return datetime.now(timezone.utc)

    def normalize_timestamp(self, dt: Optional[datetime]) -> Optional[datetime]:
        """Snowflake TIMESTAMP_NTZ comes back naive; treat it as UTC."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    def to_variant(self, value: Any) -> Optional[str]:
        """Serialize a list/dict for a PARSE_JSON(%s) VARIANT column."""
        return json.dumps(value) if value is not None else None

    def from_variant(self, value: Any) -> Any:
        """VARIANT columns come back from DictCursor as JSON text."""
        if value is None:
            return None
        if isinstance(value, (str, bytes)):
            return json.loads(value)
        return value

    def blank_to_none(self, value: Optional[str]) -> Optional[str]:
        """Optional text fields are stored as NULL rather than ''."""
        if value is None:
            return None
        value = value.strip()
        return value or None
