"""Recipient E-mail Helpers - Action parameter extraction and e-mail list handling

Action parameters carry the recipient selection under a "recipients" object:

    {
        "recipients": {
            "type": "users",
            "userIds": [12, 15],
            "membershipIds": ["4$2", "step_a:group_field"],
            "specificEmails": ["ops@example.com"],
            "stepId": "step_a"
        }
    }
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, TypeVar

from ..domain.enums import RecipientsType
from .reference_resolver import to_valid_id
from ..utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RECIPIENTS_TYPE_PATH = "recipients.type"
RECIPIENTS_STEP_ID_PATH = "recipients.stepId"
RECIPIENTS_USER_IDS_PATH = "recipients.userIds"
RECIPIENTS_MEMBERSHIP_IDS_PATH = "recipients.membershipIds"
RECIPIENTS_SPECIFIC_EMAILS_PATH = "recipients.specificEmails"

EMAIL_SEPARATOR = ", "


# =============================================================================
# Validation
# =============================================================================

def is_valid_user_id(user_id: Any) -> bool:
    return to_valid_id(user_id) is not None


def is_valid_email(email: Optional[str]) -> bool:
    """Non-blank text; address syntax is checked by the mail transport"""
    return isinstance(email, str) and bool(email.strip())


def filter_valid_emails(emails: Optional[Iterable[Optional[str]]]) -> List[str]:
    """Valid addresses in first-seen order, duplicates removed"""
    if not emails:
        return []

    result: List[str] = []
    for email in emails:
        if is_valid_email(email) and email not in result:
            result.append(email)
    return result


def join_emails(emails: Optional[Iterable[Optional[str]]]) -> str:
    """Comma-separated address list for a mail header, "" when empty"""
    return EMAIL_SEPARATOR.join(filter_valid_emails(emails))


# =============================================================================
# Parameter Extraction
# =============================================================================

def get_value_by_path(root: Any, path: Optional[str]) -> Optional[Any]:
    """
    Navigate a decoded JSON object with a dot-separated path

    Returns None when a segment is missing, crosses a non-object, or the
    final value is JSON null.
    """
    if root is None or not path or not path.strip():
        return None

    current = root
    for segment in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(segment.strip())
    return current


def get_recipients_type(parameters: Optional[Dict[str, Any]]) -> Optional[RecipientsType]:
    """Recipient selection strategy named in the parameters, None if unknown"""
    value = get_value_by_path(parameters, RECIPIENTS_TYPE_PATH)
    if not isinstance(value, str):
        return None
    try:
        return RecipientsType(value.strip().lower())
    except ValueError:
        logger.warning(f"Unknown recipients type: {value}")
        return None


def get_step_id(parameters: Optional[Dict[str, Any]]) -> Optional[str]:
    value = get_value_by_path(parameters, RECIPIENTS_STEP_ID_PATH)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def extract_user_ids_from_parameters(parameters: Optional[Dict[str, Any]]) -> List[int]:
    """Positive user ids listed under recipients.userIds, in order"""
    node = get_value_by_path(parameters, RECIPIENTS_USER_IDS_PATH)
    if not isinstance(node, list):
        logger.debug("No valid userIds array found in parameters")
        return []

    user_ids = [user_id for user_id in (to_valid_id(value) for value in node) if user_id is not None]
    logger.info(f"Extracted {len(user_ids)} valid userIds from parameters")
    return user_ids


def extract_membership_refs(parameters: Optional[Dict[str, Any]]) -> List[str]:
    """Non-blank membership references listed under recipients.membershipIds"""
    node = get_value_by_path(parameters, RECIPIENTS_MEMBERSHIP_IDS_PATH)
    if not isinstance(node, list):
        logger.debug("No valid membership array found in parameters")
        return []

    refs = [str(value).strip() for value in node if value is not None and str(value).strip()]
    logger.debug(f"Extracted {len(refs)} membership references", extra={"membership_count": len(refs)})
    return refs


def extract_specific_emails(parameters: Optional[Dict[str, Any]]) -> List[str]:
    """Valid addresses listed under recipients.specificEmails"""
    node = get_value_by_path(parameters, RECIPIENTS_SPECIFIC_EMAILS_PATH)
    if not isinstance(node, list):
        logger.debug("No valid specific emails array found")
        return []

    emails = filter_valid_emails(value for value in node if isinstance(value, str))
    logger.info(f"Extracted {len(emails)} specific emails")
    return emails


# =============================================================================
# Result Extraction
# =============================================================================

def extract_user_id_from_first_step(
    steps: Optional[List[T]],
    user_id_extractor: Callable[[T], Any]
) -> Optional[int]:
    """User id of the first step of a lookup result"""
    if not steps:
        logger.debug("No step instances provided for userId extraction")
        return None
    if user_id_extractor is None:
        raise ValueError("user_id_extractor cannot be None")

    return to_valid_id(user_id_extractor(steps[0]))


def extract_user_ids_from_membership_results(
    entries: Optional[Iterable[T]],
    user_id_extractor: Callable[[T], Any]
) -> Set[int]:
    """Distinct positive user ids of a membership lookup result"""
    if not entries:
        return set()
    if user_id_extractor is None:
        raise ValueError("user_id_extractor cannot be None")

    return {user_id for user_id in (to_valid_id(user_id_extractor(entry)) for entry in entries) if user_id is not None}
