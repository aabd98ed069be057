"""In-memory stand-ins for the MongoDB repositories and the identity directory"""
from typing import Dict, List, Optional, Sequence, Tuple

from notify_core.domain.enums import UserAttribute
from notify_core.domain.errors import UserNotFoundError
from notify_core.domain.models import DirectoryUser, StepInstance


class FakeStepRepository:
    def __init__(self, steps: Optional[List[StepInstance]] = None):
        self.steps: Dict[Tuple[int, str], StepInstance] = {}
        self.calls: List[Tuple[int, str]] = []
        for step in steps or []:
            self.steps[(step.case_id, step.step_ref)] = step

    def find_latest(self, case_id: int, step_ref: str) -> Optional[StepInstance]:
        self.calls.append((case_id, step_ref))
        return self.steps.get((case_id, step_ref))


class FakeUserRepository:
    def __init__(self, users: Optional[List[DirectoryUser]] = None):
        self.users = {user.user_id: user for user in users or []}

    def get_user(self, user_id: int) -> DirectoryUser:
        if user_id not in self.users:
            raise UserNotFoundError(f"User {user_id} not found")
        return self.users[user_id]

    def find_enabled_ids(self, user_ids):
        return [user_id for user_id in user_ids if user_id in self.users and self.users[user_id].enabled]


class FakeMembershipRepository:
    def __init__(self, members_by_key: Optional[Dict[str, List[int]]] = None):
        self.members_by_key = members_by_key or {}
        self.calls: List[List[str]] = []

    def find_user_ids_by_keys(self, membership_keys: Sequence[str]) -> List[int]:
        self.calls.append(list(membership_keys))
        found = set()
        for key in membership_keys:
            found.update(self.members_by_key.get(key, []))
        return sorted(found)


class FakeIdentityService:
    """Identity directory answering from a dict and recording every call"""

    def __init__(self, attributes: Optional[Dict[int, Dict[UserAttribute, str]]] = None, error: Exception = None):
        self.attributes = attributes or {}
        self.error = error
        self.calls: List[Tuple[int, UserAttribute]] = []

    def get_attribute(self, user_id: int, attribute: UserAttribute) -> Optional[str]:
        self.calls.append((user_id, attribute))
        if self.error is not None:
            raise self.error
        if user_id not in self.attributes:
            raise UserNotFoundError(f"User {user_id} not found")
        return self.attributes[user_id].get(attribute)
