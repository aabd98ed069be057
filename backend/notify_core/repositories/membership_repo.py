"""Membership Repository - Group/role memberships of directory users"""
from typing import List, Optional, Sequence
from pymongo.collection import Collection

from .mongo_client import USER_MEMBERSHIPS_COLLECTION, get_collection
from .user_repo import UserRepository
from ..domain.models import UserMembership
from ..engine.membership import build_membership_key
from ..utils.logger import get_logger

logger = get_logger(__name__)


class MembershipRepository:
    """Repository for user memberships"""

    def __init__(
        self,
        collection: Optional[Collection] = None,
        user_repo: Optional[UserRepository] = None
    ):
        self._memberships: Collection = (
            collection if collection is not None else get_collection(USER_MEMBERSHIPS_COLLECTION)
        )
        self._user_repo = user_repo

    def find_user_ids_by_keys(self, membership_keys: Sequence[str]) -> List[int]:
        """
        Ids of the users holding any of the given membership keys

        When a user repository is attached, disabled users are left out.
        """
        keys = list(membership_keys or [])
        if not keys:
            return []

        user_ids = sorted(self._memberships.distinct("user_id", {"membership_key": {"$in": keys}}))
        if self._user_repo is not None:
            user_ids = sorted(self._user_repo.find_enabled_ids(user_ids))

        logger.debug(
            f"Found {len(user_ids)} users for {len(keys)} membership keys",
            extra={"membership_count": len(keys)}
        )
        return user_ids

    def add_membership(self, user_id: int, group_id: int, role_id: int) -> UserMembership:
        membership = UserMembership(
            user_id=user_id,
            group_id=group_id,
            role_id=role_id,
            membership_key=build_membership_key(group_id, role_id),
        )
        self._memberships.replace_one(
            {"user_id": user_id, "membership_key": membership.membership_key},
            membership.model_dump(),
            upsert=True
        )
        logger.info(f"Added membership {membership.membership_key} to user {user_id}", extra={"user_id": user_id})
        return membership
