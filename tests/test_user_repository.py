# tests/test_user_repository.py

"""
User Repository Tests - row mapping without a Snowflake connection
"""

from datetime import datetime, timezone

import pytest

from partner_rating.models.enumerations import UserRole, UserStatus
from partner_rating.repositories.user_repository import UserRepository


def _row(**overrides):
    row = {
        "EMAIL": "legacy@example.com",
        "ROLE": "user",
        "STATUS": "approved",
        "DISPLAY_NAME": None,
        "APPROVED_BY": "admin@example.com",
        "APPROVED_AT": datetime(2024, 3, 1, 9, 30),
        "REJECTION_REASON": None,
        "DELETED_BY": None,
        "DELETED_AT": None,
        "LAST_LOGIN_AT": None,
        "CREATED_AT": datetime(2024, 2, 28, 12, 0),
        "UPDATED_AT": datetime(2024, 3, 1, 9, 30),
    }
    row.update(overrides)
    return row


class TestRowToDict:

    @pytest.mark.parametrize("stored_role", ["viewer", "", None])
    def test_unknown_role_maps_to_user(self, stored_role):
        user = UserRepository()._row_to_dict(_row(ROLE=stored_role))
        assert user["role"] == UserRole.USER
        assert user["status"] == UserStatus.APPROVED

    def test_known_role_kept(self):
        user = UserRepository()._row_to_dict(_row(ROLE="manager"))
        assert user["role"] == UserRole.MANAGER

    def test_naive_timestamps_read_as_utc(self):
        user = UserRepository()._row_to_dict(_row())
        assert user["approved_at"] == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert user["deleted_at"] is None
