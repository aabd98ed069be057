"""User Repository - Identity directory entries"""
from typing import Iterable, List, Optional
from pymongo.collection import Collection

from .mongo_client import USERS_COLLECTION, get_collection
from ..domain.models import DirectoryUser
from ..domain.errors import UserNotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for directory users"""

    def __init__(self, collection: Optional[Collection] = None):
        self._users: Collection = collection if collection is not None else get_collection(USERS_COLLECTION)

    def find_user(self, user_id: int) -> Optional[DirectoryUser]:
        doc = self._users.find_one({"user_id": user_id})
        if doc:
            doc.pop("_id", None)
            return DirectoryUser.model_validate(doc)
        return None

    def get_user(self, user_id: int) -> DirectoryUser:
        """
        Get user by ID

        Raises:
            UserNotFoundError: If no directory entry has this id
        """
        user = self.find_user(user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found", details={"user_id": user_id})
        return user

    def find_enabled_ids(self, user_ids: Iterable[int]) -> List[int]:
        """Subset of user_ids belonging to enabled users"""
        ids = list(user_ids)
        if not ids:
            return []
        docs = self._users.find({"user_id": {"$in": ids}, "enabled": True}, {"user_id": 1})
        return [doc["user_id"] for doc in docs]

    def save(self, user: DirectoryUser) -> DirectoryUser:
        self._users.replace_one({"user_id": user.user_id}, user.model_dump(), upsert=True)
        logger.info(f"Saved directory user: {user.user_name}", extra={"user_id": user.user_id})
        return user
