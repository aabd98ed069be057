"""Users Configuration Parser - JSON document to InvolvedUsersConfig

Two entry points:
    - parse_involved_users: strict, the configuration document is
      authoritative and every defect is raised to the caller.
    - parse_users_config: lenient, reads the "users" node of an action
      document and degrades to an empty configuration.
"""
import json
from typing import Any, Dict, List, Optional

from ..domain.models import InvolvedUsersConfig
from ..domain.errors import (
    ConfigurationError,
    InvalidInputError,
    InvalidJsonFormatError,
    StructuralValidationError,
)
from .json_validation import (
    MEMBERSHIPS_KEY,
    is_array,
    is_text_or_null,
    validate_field,
    validate_memberships_array,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)

STEP_MANAGER_KEY = "stepManager"
STEP_USER_KEY = "stepUser"
USERS_KEY = "users"
MEMBERSHIPS_INPUT_KEY = "membersShipsInput"


def parse_involved_users(json_text: Optional[str]) -> InvolvedUsersConfig:
    """
    Parse a users configuration document

    The stepManager and stepUser keys must be present but may hold null.
    memberShips must be an array; blank and non-text entries are dropped
    and the remaining references are trimmed of surrounding whitespace,
    keeping their order. Step references are returned as written. Unknown
    keys are ignored.

    Raises:
        InvalidInputError: If json_text is None or blank
        InvalidJsonFormatError: If json_text is not valid JSON
        ConfigurationError: If a required key is missing or has a wrong type
    """
    root = _load_document(json_text)

    step_manager_ref = _extract_nullable_text_field(root, STEP_MANAGER_KEY)
    step_user_ref = _extract_nullable_text_field(root, STEP_USER_KEY)
    memberships = _extract_memberships(root)

    config = InvolvedUsersConfig(
        step_manager_ref=step_manager_ref,
        step_user_ref=step_user_ref,
        memberships=memberships,
    )
    logger.debug(
        f"Parsed users configuration: stepManager={step_manager_ref}, "
        f"stepUser={step_user_ref}, memberships={len(memberships)}",
        extra={"membership_count": len(memberships)}
    )
    return config


def validate_involved_users(json_text: Optional[str]) -> InvolvedUsersConfig:
    """
    Parse a users configuration and additionally reject blank or non-text
    membership entries instead of dropping them.

    Used when a task definition is authored, where a blank entry is a
    mistake worth reporting.
    """
    root = _load_document(json_text)
    validate_memberships_array(root.get(MEMBERSHIPS_KEY))
    return parse_involved_users(json_text)


def parse_users_config(json_text: Optional[str]) -> InvolvedUsersConfig:
    """
    Parse the "users" node of an action document without ever raising

    A blank or malformed document yields an empty configuration. The
    optional membersShipsInput step:field reference is appended to the
    membership references so it is resolved like any indirect reference.
    """
    if json_text is None or not json_text.strip():
        logger.warning("Users configuration is null or blank, using empty configuration")
        return InvolvedUsersConfig.empty()

    try:
        root = json.loads(json_text)
    except ValueError as e:
        logger.warning(f"Users configuration is not valid JSON: {e}")
        return InvolvedUsersConfig.empty()

    users_node = root.get(USERS_KEY) if isinstance(root, dict) else None
    if not isinstance(users_node, dict):
        logger.warning(f"Key '{USERS_KEY}' not found in action document, using empty configuration")
        return InvolvedUsersConfig.empty()

    memberships = _text_entries(users_node.get(MEMBERSHIPS_KEY))
    dynamic_membership = _optional_text(users_node, MEMBERSHIPS_INPUT_KEY)
    if dynamic_membership and dynamic_membership not in memberships:
        memberships.append(dynamic_membership)

    return InvolvedUsersConfig(
        step_manager_ref=_optional_text(users_node, STEP_MANAGER_KEY),
        step_user_ref=_optional_text(users_node, STEP_USER_KEY),
        memberships=memberships,
    )


# =============================================================================
# Helpers
# =============================================================================

def _load_document(json_text: Optional[str]) -> Dict[str, Any]:
    if json_text is None or not json_text.strip():
        raise InvalidInputError("Input JSON string cannot be null or empty.")

    try:
        root = json.loads(json_text)
    except ValueError as e:
        raise InvalidJsonFormatError(
            f"Failed to parse JSON string. Invalid JSON format: {e}",
            details={"reason": str(e)}
        ) from e

    if not isinstance(root, dict):
        raise ConfigurationError(
            f"Users configuration must be a JSON object, got {type(root).__name__}.",
            details={"actual_type": type(root).__name__}
        )
    return root


def _extract_nullable_text_field(root: Dict[str, Any], field_name: str) -> Optional[str]:
    """Required key whose value is text or JSON null"""
    if field_name not in root:
        raise ConfigurationError(
            f"Required field '{field_name}' is MISSING from the JSON configuration.",
            details={"field": field_name}
        )

    try:
        validate_field(root, field_name, is_text_or_null, field_name)
    except StructuralValidationError as e:
        raise ConfigurationError(
            f"Required field '{field_name}' is not a valid text value in the JSON configuration.",
            details=e.details
        ) from e

    return root[field_name]


def _extract_memberships(root: Dict[str, Any]) -> List[str]:
    try:
        validate_field(root, MEMBERSHIPS_KEY, is_array, MEMBERSHIPS_KEY)
    except StructuralValidationError as e:
        raise ConfigurationError(
            f"Required field '{MEMBERSHIPS_KEY}' is missing or not a valid array in the JSON configuration.",
            details=e.details
        ) from e

    return _text_entries(root[MEMBERSHIPS_KEY])


def _text_entries(node: Any) -> List[str]:
    """Non-blank text elements of an array, trimmed, in order"""
    if not is_array(node):
        return []

    entries = []
    for element in node:
        if not isinstance(element, str):
            logger.warning(f"Ignoring non-text membership reference: {element!r}")
            continue
        if element.strip():
            entries.append(element.strip())
    return entries


def _optional_text(node: Dict[str, Any], key: str) -> Optional[str]:
    value = node.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()
