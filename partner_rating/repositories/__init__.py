"""
Repositories Package - Partner Rating Platform
partner_rating/repositories/__init__.py

Data access layer for Snowflake database operations.
"""

from partner_rating.repositories.base import BaseRepository
from partner_rating.repositories.criteria_repository import CriteriaRepository
from partner_rating.repositories.evaluation_repository import EvaluationRepository
from partner_rating.repositories.partner_repository import PartnerRepository
from partner_rating.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CriteriaRepository",
    "EvaluationRepository",
    "PartnerRepository",
    "UserRepository",
]
