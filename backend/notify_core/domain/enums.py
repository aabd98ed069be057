"""Domain Enumerations - Resolver keys, user attributes and recipient sources"""
from enum import Enum
from typing import List, Optional


class ResolverCategory(str, Enum):
    """Family a placeholder name belongs to"""
    RECIPIENT = "recipient"
    TASK = "task"
    STEP = "step"


class UserAttribute(str, Enum):
    """Identity directory attributes readable for a user"""
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    FULL_NAME = "full_name"
    EMAIL = "email"
    USER_NAME = "user_name"


class DataResolverType(str, Enum):
    """
    Placeholder names with a built-in resolution strategy.

    The value is the key matched against the data name of a
    {{refStep:dataName}} token.
    """
    RECIPIENT_FIRSTNAME = "recipient_firstname"
    RECIPIENT_LASTNAME = "recipient_lastname"
    RECIPIENT_FULLNAME = "recipient_fullname"
    RECIPIENT_EMAIL = "recipient_email"
    TASK_LINK = "task_link"
    TASK_URL = "task_url"
    STEP_USER_NAME = "step_user_name"
    STEP_STATUS = "step_status"

    @property
    def key(self) -> str:
        return self.value

    @property
    def category(self) -> ResolverCategory:
        return ResolverCategory(self.value.split("_", 1)[0])

    @property
    def description(self) -> str:
        return _RESOLVER_DESCRIPTIONS[self]

    @property
    def user_attribute(self) -> Optional[UserAttribute]:
        """Directory attribute read for recipient keys"""
        return _RECIPIENT_ATTRIBUTES.get(self)

    @classmethod
    def from_key(cls, key: Optional[str]) -> Optional["DataResolverType"]:
        """Find a resolver type by key, ignoring surrounding whitespace"""
        if key is None:
            return None
        trimmed = key.strip()
        for resolver_type in cls:
            if resolver_type.value == trimmed:
                return resolver_type
        return None

    @classmethod
    def is_valid_key(cls, key: Optional[str]) -> bool:
        return cls.from_key(key) is not None

    @classmethod
    def all_keys(cls) -> List[str]:
        return [resolver_type.value for resolver_type in cls]


_RESOLVER_DESCRIPTIONS = {
    DataResolverType.RECIPIENT_FIRSTNAME: "First name of the notification recipient from the identity directory.",
    DataResolverType.RECIPIENT_LASTNAME: "Last name of the notification recipient from the identity directory.",
    DataResolverType.RECIPIENT_FULLNAME: "Full name of the notification recipient from the identity directory.",
    DataResolverType.RECIPIENT_EMAIL: "E-mail address of the notification recipient from the directory contact data.",
    DataResolverType.TASK_LINK: "HTML anchor link to the task built from the configured host URL and task id.",
    DataResolverType.TASK_URL: "Plain URL of the task built from the configured host URL and task id.",
    DataResolverType.STEP_USER_NAME: "User name assigned to the referenced step.",
    DataResolverType.STEP_STATUS: "Current status of the referenced step.",
}

_RECIPIENT_ATTRIBUTES = {
    DataResolverType.RECIPIENT_FIRSTNAME: UserAttribute.FIRST_NAME,
    DataResolverType.RECIPIENT_LASTNAME: UserAttribute.LAST_NAME,
    DataResolverType.RECIPIENT_FULLNAME: UserAttribute.FULL_NAME,
    DataResolverType.RECIPIENT_EMAIL: UserAttribute.EMAIL,
}


class RecipientsType(str, Enum):
    """Source a notification's recipient list is built from"""
    MEMBERSHIP = "membership"  # Group/role memberships
    USERS = "users"  # Explicit user ids
    STEP_USERS = "step_users"  # Users who executed a referenced step
    STEP_MANAGERS = "step_managers"  # Managers of those users
    SPECIFIC = "specific"  # Literal e-mail addresses
