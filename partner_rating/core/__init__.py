"""
Core Package - Partner Rating Platform
partner_rating/core/__init__.py

Core infrastructure: exceptions, permissions, errors, dependencies.
"""

from partner_rating.core.exceptions import (
    AnswerValidationError,
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityArchivedException,
    EntityNotFoundException,
    ForeignKeyViolationException,
    RepositoryException,
)
from partner_rating.core.permissions import Permission, permissions_for

__all__ = [
    # Exceptions
    "AnswerValidationError",
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EntityArchivedException",
    "EntityNotFoundException",
    "ForeignKeyViolationException",
    "RepositoryException",
    # Permissions
    "Permission",
    "permissions_for",
]
