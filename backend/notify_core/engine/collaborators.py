"""Collaborator interfaces injected into the resolution core

The core never talks to the workflow engine, the directory or a database
directly. Callers hand in objects (or plain callables) matching these
protocols.
"""
from typing import Any, Iterable, Optional, Protocol, Sequence

from ..domain.enums import UserAttribute


class StepLookup(Protocol):
    """step reference -> step object, or None when no such step ran"""

    def __call__(self, step_ref: str) -> Optional[Any]: ...


class IdExtractor(Protocol):
    """step object -> id of the user who executed it"""

    def __call__(self, step: Any) -> Optional[int]: ...


class StepFieldExtractor(Protocol):
    """step object -> its stored JSON input text"""

    def __call__(self, step: Any) -> Optional[str]: ...


class BulkMembershipLookup(Protocol):
    """membership keys -> ids of the users holding any of them"""

    def __call__(self, membership_keys: Sequence[str]) -> Optional[Iterable[Any]]: ...


class ManagerLookup(Protocol):
    """user id -> id of that user's manager"""

    def __call__(self, user_id: int) -> Optional[int]: ...


class StepValueExtractor(Protocol):
    """step object -> a displayable value (user name, status)"""

    def __call__(self, step: Any) -> Optional[str]: ...


class PlaceholderResolverFn(Protocol):
    """(refStep, dataName) -> replacement text, or None when unresolved"""

    def __call__(self, ref_step: Optional[str], data_name: str) -> Optional[Any]: ...


class IdentityService(Protocol):
    """Identity directory queried for recipient attributes"""

    def get_attribute(self, user_id: int, attribute: UserAttribute) -> Optional[str]: ...
