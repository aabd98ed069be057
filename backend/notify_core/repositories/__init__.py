"""Repository modules - Data access layer"""
from .mongo_client import get_database, get_collection, close_connection, create_indexes, health_check
from .step_repo import StepInstanceRepository
from .user_repo import UserRepository
from .membership_repo import MembershipRepository

__all__ = [
    "get_database",
    "get_collection",
    "close_connection",
    "create_indexes",
    "health_check",
    "StepInstanceRepository",
    "UserRepository",
    "MembershipRepository",
]
