"""Reference Resolver - Users configuration to a set of recipient user ids

Sources combined into the recipient set:
    1. stepUser: the user who executed a referenced step
    2. stepManager: the manager of the user who executed a referenced step
    3. memberShips: users holding any listed group/role membership; an entry
       of the form "step:field" is first replaced by the text stored under
       that field of the step's JSON input

Every lookup goes through a caller-supplied collaborator. A reference that
cannot be resolved contributes nothing; it never fails the whole resolution.
"""
import json
from typing import Any, Iterable, List, Optional, Set

from ..domain.models import InvolvedUsersConfig, StepFieldRef
from ..domain.errors import NotFoundError
from .collaborators import (
    BulkMembershipLookup,
    IdExtractor,
    ManagerLookup,
    StepFieldExtractor,
    StepLookup,
)
from .config_parser import parse_involved_users
from ..utils.logger import get_logger

logger = get_logger(__name__)

MAX_ID = 2 ** 63 - 1

# Collaborators signal a missing entity with one of these
_NOT_FOUND_ERRORS = (NotFoundError, KeyError)


def to_valid_id(value: Any) -> Optional[int]:
    """
    Coerce a collaborator-provided id to a positive 64-bit integer

    Returns None for None, booleans, non-numeric values, zero and negatives.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        candidate = value
    else:
        try:
            candidate = int(str(value).strip())
        except ValueError:
            return None
    if 0 < candidate <= MAX_ID:
        return candidate
    return None


def is_step_field_ref(reference: Optional[str]) -> bool:
    """True for "stepRef:fieldRef" with exactly one colon and both sides non-empty"""
    if not reference or reference.count(":") != 1:
        return False
    step_ref, field_ref = reference.split(":")
    return bool(step_ref.strip()) and bool(field_ref.strip())


# =============================================================================
# Step-based sources
# =============================================================================

def resolve_step_user(
    config: Optional[InvolvedUsersConfig],
    step_lookup: StepLookup,
    id_extractor: IdExtractor
) -> Optional[int]:
    """Id of the user who executed the stepUser step, None if unresolvable"""
    if config is None or not config.has_step_user():
        return None
    return _find_step_user_id(config.step_user_ref.strip(), step_lookup, id_extractor)


def resolve_step_manager(
    config: Optional[InvolvedUsersConfig],
    step_lookup: StepLookup,
    id_extractor: IdExtractor,
    manager_lookup: Optional[ManagerLookup] = None
) -> Optional[int]:
    """
    Id of the manager of the user who executed the stepManager step

    The manager relation is owned by the caller through manager_lookup;
    without it this source contributes nothing.
    """
    if config is None or not config.has_step_manager():
        return None

    step_ref = config.step_manager_ref.strip()
    user_id = _find_step_user_id(step_ref, step_lookup, id_extractor)
    if user_id is None:
        return None

    if manager_lookup is None:
        logger.warning(
            f"No manager lookup supplied, cannot resolve manager for step '{step_ref}'",
            extra={"step_ref": step_ref, "user_id": user_id}
        )
        return None

    try:
        manager_id = to_valid_id(manager_lookup(user_id))
    except _NOT_FOUND_ERRORS as e:
        logger.warning(f"Manager lookup failed for user {user_id}: {e}", extra={"user_id": user_id})
        return None

    if manager_id is None:
        logger.warning(f"No manager found for user ID: {user_id}", extra={"user_id": user_id})
    return manager_id


# =============================================================================
# Membership sources
# =============================================================================

def resolve_memberships(
    refs: Optional[Iterable[str]],
    bulk_lookup: BulkMembershipLookup,
    step_lookup: Optional[StepLookup] = None,
    step_field_extractor: Optional[StepFieldExtractor] = None
) -> Set[int]:
    """
    Ids of the users holding any of the referenced memberships

    Literal keys and keys read through step:field references are
    deduplicated and passed to bulk_lookup in a single call.
    """
    if not refs:
        return set()

    keys: List[str] = []
    for ref in refs:
        if not isinstance(ref, str) or not ref.strip():
            continue
        key = ref.strip()

        if is_step_field_ref(key):
            if step_lookup is None or step_field_extractor is None:
                logger.warning(f"Cannot resolve indirect membership '{key}' without step lookups")
                continue
            key = resolve_indirect_membership(key, step_lookup, step_field_extractor)
            if key is None:
                continue

        if key not in keys:
            keys.append(key)

    if not keys:
        return set()

    logger.debug(f"Looking up users for {len(keys)} membership keys", extra={"membership_count": len(keys)})
    try:
        found = bulk_lookup(keys)
    except _NOT_FOUND_ERRORS as e:
        logger.warning(f"Membership lookup failed: {e}")
        return set()

    if found is None:
        logger.debug("Membership lookup returned no result")
        return set()

    return {user_id for user_id in (to_valid_id(value) for value in found) if user_id is not None}


def resolve_indirect_membership(
    step_field_ref: Optional[str],
    step_lookup: StepLookup,
    step_field_extractor: StepFieldExtractor
) -> Optional[str]:
    """
    Read the membership key stored in another step's JSON input

    "step_a:group_field" -> text value of group_field in step_a's stored JSON.
    """
    if not step_field_ref or not step_field_ref.strip():
        return None

    ref = StepFieldRef.parse(step_field_ref)
    if ref is None:
        logger.warning(f"Invalid step:field reference: '{step_field_ref}'")
        return None

    step = _lookup_step(step_lookup, ref.step_ref)
    if step is None:
        return None

    value = extract_field(step_field_extractor(step), ref.field_ref)
    if value is None:
        logger.warning(
            f"Field '{ref.field_ref}' not found in stored input of step '{ref.step_ref}'",
            extra={"step_ref": ref.step_ref}
        )
    else:
        logger.info(f"Resolved membership '{value}' from {ref.step_ref}:{ref.field_ref}", extra={"step_ref": ref.step_ref})
    return value


def extract_field(json_text: Optional[str], field_name: str) -> Optional[str]:
    """
    Text value of a top-level field of a JSON document

    The value is returned trimmed of surrounding whitespace. Malformed JSON,
    a missing field or a blank or non-text value all yield None.
    """
    if not isinstance(json_text, str) or not json_text.strip():
        return None

    try:
        root = json.loads(json_text)
    except ValueError as e:
        logger.warning(f"Error parsing JSON to extract field '{field_name}': {e}")
        return None

    if not isinstance(root, dict):
        return None

    value = root.get(field_name)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


# =============================================================================
# Aggregation
# =============================================================================

def collect_all_recipient_ids(
    config: Optional[InvolvedUsersConfig],
    step_lookup: StepLookup,
    id_extractor: IdExtractor,
    bulk_lookup: BulkMembershipLookup,
    manager_lookup: Optional[ManagerLookup] = None,
    step_field_extractor: Optional[StepFieldExtractor] = None
) -> Set[int]:
    """
    Union of the stepUser, stepManager and membership sources

    Returns:
        Deduplicated set of positive user ids, empty when nothing resolves
    """
    if config is None or not config.has_any_source():
        logger.debug("No user sources defined in configuration")
        return set()

    user_ids: Set[int] = set()

    step_user_id = resolve_step_user(config, step_lookup, id_extractor)
    if step_user_id is not None:
        user_ids.add(step_user_id)
        logger.debug(f"Added stepUser ID: {step_user_id}", extra={"user_id": step_user_id})

    manager_id = resolve_step_manager(config, step_lookup, id_extractor, manager_lookup)
    if manager_id is not None:
        user_ids.add(manager_id)
        logger.debug(f"Added stepManager ID: {manager_id}", extra={"user_id": manager_id})

    membership_ids = resolve_memberships(config.memberships, bulk_lookup, step_lookup, step_field_extractor)
    user_ids.update(membership_ids)

    logger.info(
        f"Collected {len(user_ids)} unique recipient IDs "
        f"({len(membership_ids)} from memberships)",
        extra={"membership_count": len(config.memberships)}
    )
    return user_ids


def parse_and_collect_recipient_ids(
    json_text: Optional[str],
    step_lookup: StepLookup,
    id_extractor: IdExtractor,
    bulk_lookup: BulkMembershipLookup,
    manager_lookup: Optional[ManagerLookup] = None,
    step_field_extractor: Optional[StepFieldExtractor] = None
) -> Set[int]:
    """Strictly parse a users configuration and collect its recipients"""
    config = parse_involved_users(json_text)
    return collect_all_recipient_ids(
        config, step_lookup, id_extractor, bulk_lookup, manager_lookup, step_field_extractor
    )


# =============================================================================
# Helpers
# =============================================================================

def _lookup_step(step_lookup: StepLookup, step_ref: str) -> Optional[Any]:
    try:
        step = step_lookup(step_ref)
    except _NOT_FOUND_ERRORS as e:
        logger.warning(f"Step lookup failed for '{step_ref}': {e}", extra={"step_ref": step_ref})
        return None

    if step is None:
        logger.warning(f"No step instance found for reference: {step_ref}", extra={"step_ref": step_ref})
    return step


def _find_step_user_id(
    step_ref: str,
    step_lookup: StepLookup,
    id_extractor: IdExtractor
) -> Optional[int]:
    step = _lookup_step(step_lookup, step_ref)
    if step is None:
        return None

    user_id = to_valid_id(id_extractor(step))
    if user_id is None:
        logger.warning(
            f"No valid user ID found in step instance for reference: {step_ref}",
            extra={"step_ref": step_ref}
        )
    return user_id
