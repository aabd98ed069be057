"""Domain Models - Pydantic schemas for configuration values and stored entities"""
from datetime import datetime
from typing import Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict


# ============================================================================
# Users Configuration
# ============================================================================

class InvolvedUsersConfig(BaseModel):
    """
    Parsed users configuration of a task definition.

    Immutable and compared by value. Membership references keep their
    authored order with blank entries already removed.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    step_manager_ref: Optional[str] = Field(None, description="Step whose user's manager is a recipient")
    step_user_ref: Optional[str] = Field(None, description="Step whose user is a recipient")
    memberships: Tuple[str, ...] = Field(default=(), description="Membership keys or step:field references")

    @classmethod
    def empty(cls) -> "InvolvedUsersConfig":
        return cls()

    def has_step_user(self) -> bool:
        return bool(self.step_user_ref and self.step_user_ref.strip())

    def has_step_manager(self) -> bool:
        return bool(self.step_manager_ref and self.step_manager_ref.strip())

    def has_memberships(self) -> bool:
        return len(self.memberships) > 0

    def has_any_source(self) -> bool:
        return self.has_step_user() or self.has_step_manager() or self.has_memberships()


class StepFieldRef(BaseModel):
    """Reference to a field of another step's stored JSON input ("step_xxx:field_yyy")"""
    model_config = ConfigDict(frozen=True)

    step_ref: str
    field_ref: str

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["StepFieldRef"]:
        """
        Split on the first colon; both parts are trimmed and must be non-empty.

        Returns None when the text does not follow the step:field format.
        """
        if not text or ":" not in text:
            return None
        step_ref, field_ref = (part.strip() for part in text.split(":", 1))
        if not step_ref or not field_ref:
            return None
        return cls(step_ref=step_ref, field_ref=field_ref)


class PlaceholderToken(BaseModel):
    """A {{refStep:dataName}} occurrence found in message text"""
    model_config = ConfigDict(frozen=True)

    raw: str = Field(..., description="Token text as it appears in the template")
    ref_step: Optional[str] = Field(None, description="Step reference, None for {{dataName}} tokens")
    data_name: str


# ============================================================================
# Stored Entities (host collaborators)
# ============================================================================

class StepInstance(BaseModel):
    """Executed step of a case, as stored by the workflow engine"""
    model_config = ConfigDict(extra="ignore")

    case_id: int = Field(..., description="Root case (process instance) id")
    step_ref: str = Field(..., description="Step reference from the process definition")
    user_id: Optional[int] = Field(None, description="User who executed the step")
    username: Optional[str] = None
    status: Optional[str] = None
    json_input: Optional[str] = Field(None, description="Stored JSON input of the step")
    created_at: Optional[datetime] = None


class DirectoryUser(BaseModel):
    """User entry of the identity directory"""
    model_config = ConfigDict(extra="ignore")

    user_id: int
    user_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    manager_user_id: Optional[int] = None
    enabled: bool = True


class UserMembership(BaseModel):
    """Group/role membership of a user"""
    model_config = ConfigDict(extra="ignore")

    user_id: int
    group_id: int
    role_id: int
    membership_key: str = Field(..., description="<groupId>$<roleId>")


# ============================================================================
# Rendering
# ============================================================================

class RenderedNotification(BaseModel):
    """Notification text rendered for one recipient"""
    notification_id: str
    recipient_user_id: int
    recipient_email: str
    subject: str
    body: str
