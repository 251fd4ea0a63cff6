# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration for scoring and API tests

API tests run against in-memory repositories wired in through FastAPI
dependency overrides, with Redis caching disabled. No Snowflake or Redis
server is needed.

SEEDED USERS (all approved):
- admin@example.com    admin
- manager@example.com  manager
- viewer@example.com   user
"""

import os
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
from fastapi.testclient import TestClient

from partner_rating.core import dependencies
from partner_rating.main import app
from partner_rating.models.enumerations import (
    PartnerScope,
    QuestionSet,
    Rating,
    UserRole,
    UserStatus,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# IN-MEMORY REPOSITORIES
# =============================================================================

class FakePartnerRepository:
    """Same interface and ordering rules as PartnerRepository."""

    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}

    def create(self, scope, country, name, org, email=None, phone=None):
        now = _now()
        partner_id = str(uuid4())
        self.rows[partner_id] = {
            "id": partner_id,
            "scope": PartnerScope(scope),
            "country": country,
            "name": name,
            "org": org,
            "email": (email or "").strip() or None,
            "phone": (phone or "").strip() or None,
            "archived": False,
            "created_at": now,
            "updated_at": now,
        }
        return deepcopy(self.rows[partner_id])

    def get_by_id(self, partner_id):
        row = self.rows.get(str(partner_id))
        return deepcopy(row) if row else None

    def list_active(self):
        rows = [r for r in self.rows.values() if not r["archived"]]
        return deepcopy(sorted(rows, key=lambda r: r["created_at"], reverse=True))

    def list_archived(self):
        rows = [r for r in self.rows.values() if r["archived"]]
        return deepcopy(sorted(rows, key=lambda r: r["updated_at"], reverse=True))

    def update(self, partner_id, **changes):
        row = self.rows.get(str(partner_id))
        if row is None:
            return None
        for field in ("scope", "country", "name", "org", "email", "phone"):
            if changes.get(field) is None:
                continue
            value = changes[field]
            if field == "scope":
                value = PartnerScope(value)
            elif field in ("email", "phone"):
                value = value.strip() or None
            row[field] = value
        row["updated_at"] = _now()
        return deepcopy(row)

    def set_archived(self, partner_id, archived):
        row = self.rows.get(str(partner_id))
        if row is None:
            return None
        row["archived"] = archived
        row["updated_at"] = _now()
        return deepcopy(row)


class FakeEvaluationRepository:
    """Append-only, like EvaluationRepository."""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []

    def create(self, partner_id, scope, version, answers_common, answers_overseas,
               total_score, rating, note=None):
        row = {
            "id": str(uuid4()),
            "partner_id": str(partner_id),
            "scope": PartnerScope(scope),
            "version": int(version),
            "answers_common": list(answers_common),
            "answers_overseas": list(answers_overseas) if answers_overseas is not None else None,
            "total_score": float(total_score),
            "rating": Rating(rating),
            "note": (note or "").strip() or None,
            "created_at": _now(),
        }
        self.rows.append(row)
        return deepcopy(row)

    def get_by_id(self, evaluation_id):
        for row in self.rows:
            if row["id"] == str(evaluation_id):
                return deepcopy(row)
        return None

    def list_by_partner(self, partner_id):
        rows = [r for r in self.rows if r["partner_id"] == str(partner_id)]
        return deepcopy(sorted(rows, key=lambda r: r["version"], reverse=True))

    def list_versions(self, partner_id):
        return [r["version"] for r in self.rows if r["partner_id"] == str(partner_id)]

    def list_all(self):
        return deepcopy(self.rows)


class FakeUserRepository:
    """Users keyed by email, same lifecycle as UserRepository."""

    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}

    def _blank(self, email, role, status):
        now = _now()
        return {
            "email": email,
            "role": UserRole(role),
            "status": UserStatus(status),
            "display_name": None,
            "approved_by": None,
            "approved_at": None,
            "rejection_reason": None,
            "deleted_by": None,
            "deleted_at": None,
            "last_login_at": None,
            "created_at": now,
            "updated_at": now,
        }

    def seed(self, email, role=UserRole.USER, status=UserStatus.APPROVED):
        self.rows[email] = self._blank(email, role, status)
        return deepcopy(self.rows[email])

    def create(self, email, role=UserRole.USER, display_name=None):
        if email not in self.rows:
            self.rows[email] = self._blank(email, role, UserStatus.PENDING)
            self.rows[email]["display_name"] = display_name
        return deepcopy(self.rows[email])

    def get_by_email(self, email):
        row = self.rows.get(email)
        return deepcopy(row) if row else None

    def list_users(self, status=None):
        rows = [r for r in self.rows.values() if status is None or r["status"] == status]
        return deepcopy(sorted(rows, key=lambda r: r["created_at"], reverse=True))

    def update_role(self, email, role):
        if email not in self.rows:
            return self.create(email, role)
        return self._update(email, role=UserRole(role))

    def approve(self, email, approved_by, role=UserRole.USER):
        return self._update(
            email,
            status=UserStatus.APPROVED,
            role=UserRole(role),
            approved_by=approved_by,
            approved_at=_now(),
            rejection_reason=None,
        )

    def reject(self, email, reason):
        return self._update(email, status=UserStatus.REJECTED, rejection_reason=reason)

    def soft_delete(self, email, deleted_by):
        return self._update(email, status=UserStatus.DELETED, deleted_by=deleted_by, deleted_at=_now())

    def hard_delete(self, email):
        return self.rows.pop(email, None) is not None

    def touch_last_login(self, email):
        if email in self.rows:
            self.rows[email]["last_login_at"] = _now()

    def _update(self, email, **values):
        row = self.rows.get(email)
        if row is None:
            return None
        row.update(values, updated_at=_now())
        return deepcopy(row)


class FakeCriteriaRepository:
    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}

    def create(self, scope, category, question_id, text, order=1, active=True):
        now = _now()
        criterion_id = str(uuid4())
        self.rows[criterion_id] = {
            "id": criterion_id,
            "scope": QuestionSet(scope),
            "category": category,
            "question_id": question_id,
            "text": text.strip(),
            "order": int(order),
            "active": bool(active),
            "created_at": now,
            "updated_at": now,
        }
        return deepcopy(self.rows[criterion_id])

    def get_by_id(self, criterion_id):
        row = self.rows.get(str(criterion_id))
        return deepcopy(row) if row else None

    def list_all(self):
        rows = sorted(
            self.rows.values(),
            key=lambda r: (r["scope"].value, r["category"], r["order"]),
        )
        return deepcopy(rows)

    def count(self):
        return len(self.rows)

    def update(self, criterion_id, **changes):
        row = self.rows.get(str(criterion_id))
        if row is None:
            return None
        for field, value in changes.items():
            if value is not None:
                row[field] = QuestionSet(value) if field == "scope" else value
        row["updated_at"] = _now()
        return deepcopy(row)

    def delete(self, criterion_id):
        return self.rows.pop(str(criterion_id), None) is not None


# =============================================================================
# REPOSITORY + CLIENT FIXTURES
# =============================================================================

ADMIN_EMAIL = "admin@example.com"
MANAGER_EMAIL = "manager@example.com"
VIEWER_EMAIL = "viewer@example.com"


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Run every test with caching disabled."""
    monkeypatch.setattr("partner_rating.services.cache.get_cache", lambda: None)
    monkeypatch.setattr("partner_rating.routers.health.get_cache", lambda: None)


@pytest.fixture
def partner_repo():
    return FakePartnerRepository()


@pytest.fixture
def evaluation_repo():
    return FakeEvaluationRepository()


@pytest.fixture
def user_repo():
    repo = FakeUserRepository()
    repo.seed(ADMIN_EMAIL, UserRole.ADMIN)
    repo.seed(MANAGER_EMAIL, UserRole.MANAGER)
    repo.seed(VIEWER_EMAIL, UserRole.USER)
    return repo


@pytest.fixture
def criteria_repo():
    return FakeCriteriaRepository()


@pytest.fixture
def client(partner_repo, evaluation_repo, user_repo, criteria_repo):
    """TestClient with every repository replaced by its in-memory fake."""
    app.dependency_overrides[dependencies.get_partner_repository] = lambda: partner_repo
    app.dependency_overrides[dependencies.get_evaluation_repository] = lambda: evaluation_repo
    app.dependency_overrides[dependencies.get_user_repository] = lambda: user_repo
    app.dependency_overrides[dependencies.get_criteria_repository] = lambda: criteria_repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def as_user(email: str) -> Dict[str, str]:
    return {"X-User-Email": email}


@pytest.fixture
def admin_headers():
    return as_user(ADMIN_EMAIL)


@pytest.fixture
def manager_headers():
    return as_user(MANAGER_EMAIL)


@pytest.fixture
def viewer_headers():
    return as_user(VIEWER_EMAIL)


# =============================================================================
# PAYLOAD FIXTURES
# =============================================================================

@pytest.fixture
def domestic_partner_data():
    return {
        "scope": "domestic",
        "country": "Korea",
        "name": "Kim Minsoo",
        "org": "Hanbit Studio",
        "email": "minsoo@hanbit.example",
        "phone": "010-1234-5678",
    }


@pytest.fixture
def overseas_partner_data():
    return {
        "scope": "overseas",
        "country": "Vietnam",
        "name": "Nguyen Van An",
        "org": "Saigon Media",
        "email": None,
        "phone": None,
    }


@pytest.fixture
def create_partner(client, manager_headers):
    """Factory: register a partner through the API and return its JSON."""
    def _create(data: Optional[dict] = None, **overrides):
        payload = {
            "scope": "domestic",
            "country": "Korea",
            "name": "Partner",
            "org": "Org",
        }
        payload.update(data or {})
        payload.update(overrides)
        response = client.post("/api/v1/partners", json=payload, headers=manager_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create
