"""Directory Service - User attributes, managers and e-mail addresses from the identity directory"""
from typing import Iterable, List, Optional

from ..domain.enums import UserAttribute
from ..domain.errors import UserNotFoundError
from ..domain.models import DirectoryUser
from ..engine.recipient_emails import is_valid_email
from ..engine.reference_resolver import to_valid_id
from ..repositories.user_repo import UserRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)


class DirectoryService:
    """
    Identity directory backed by the users collection

    Implements the IdentityService interface used by the placeholder
    resolver, plus the manager and e-mail lookups used for recipients.
    Lookups never raise for unknown users; they return None instead.
    """

    def __init__(self, user_repo: Optional[UserRepository] = None):
        self.user_repo = user_repo if user_repo is not None else UserRepository()

    # =========================================================================
    # Attributes
    # =========================================================================

    def get_attribute(self, user_id: int, attribute: UserAttribute) -> Optional[str]:
        """Attribute of a user, None when the user or the value is missing"""
        user = self._find(user_id)
        if user is None:
            return None

        attribute = UserAttribute(attribute)
        if attribute == UserAttribute.FIRST_NAME:
            return user.first_name
        if attribute == UserAttribute.LAST_NAME:
            return user.last_name
        if attribute == UserAttribute.FULL_NAME:
            return self._full_name(user)
        if attribute == UserAttribute.EMAIL:
            return user.email if is_valid_email(user.email) else None
        return user.user_name

    def get_manager_id(self, user_id: int) -> Optional[int]:
        user = self._find(user_id)
        if user is None:
            return None

        manager_id = to_valid_id(user.manager_user_id)
        if manager_id is None:
            logger.debug(f"User {user_id} has no manager assigned", extra={"user_id": user_id})
        return manager_id

    # =========================================================================
    # E-mail Lookups
    # =========================================================================

    def get_email_by_user_id(self, user_id: int) -> Optional[str]:
        if to_valid_id(user_id) is None:
            logger.debug(f"Invalid userId provided: {user_id}")
            return None
        return self.get_attribute(user_id, UserAttribute.EMAIL)

    def get_manager_email_by_user_id(self, user_id: int) -> Optional[str]:
        manager_id = self.get_manager_id(user_id)
        if manager_id is None:
            return None
        return self.get_email_by_user_id(manager_id)

    def get_emails_by_user_ids(self, user_ids: Optional[Iterable[int]]) -> List[str]:
        """E-mail addresses of the given users, distinct, in input order"""
        if not user_ids:
            return []

        emails: List[str] = []
        seen = set()
        for user_id in user_ids:
            valid_id = to_valid_id(user_id)
            if valid_id is None or valid_id in seen:
                continue
            seen.add(valid_id)
            email = self.get_email_by_user_id(valid_id)
            if email and email not in emails:
                emails.append(email)
        return emails

    # =========================================================================
    # Helpers
    # =========================================================================

    def _find(self, user_id: int) -> Optional[DirectoryUser]:
        try:
            return self.user_repo.get_user(user_id)
        except UserNotFoundError:
            logger.warning(f"User not found for userId: {user_id}", extra={"user_id": user_id})
            return None

    @staticmethod
    def _full_name(user: DirectoryUser) -> Optional[str]:
        """First and last name; falls back to whichever exists, then the user name"""
        parts = [part.strip() for part in (user.first_name, user.last_name) if part and part.strip()]
        if parts:
            return " ".join(parts)
        return user.user_name
