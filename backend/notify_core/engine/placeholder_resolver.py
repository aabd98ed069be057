"""Placeholder Resolver - (refStep, dataName) -> replacement text

A resolver is a plain two-argument function. create_resolver builds one
that looks the data name up in DataResolverType and dispatches on its
category:

    recipient_*  -> identity directory attribute of the current recipient
    task_*       -> link or URL of the current task
    anything else (or an unresolved built-in) -> fallback resolver

create_step_data_resolver builds a resolver for step_user_name and
step_status, typically passed as the fallback.
"""
from typing import Any, Callable, Dict, Optional, Union

from ..domain.enums import DataResolverType, ResolverCategory, UserAttribute
from ..domain.errors import NotFoundError
from .collaborators import IdentityService, PlaceholderResolverFn, StepLookup, StepValueExtractor
from .reference_resolver import to_valid_id
from ..utils.logger import get_logger

logger = get_logger(__name__)

INVALID_TASK_LINK = "#invalid-task"
DEFAULT_TASK_LINK_PATH = "/app/process-builder"


# =============================================================================
# Link Generation
# =============================================================================

def generate_task_link(host_url: Optional[str], task_id: Any, path: str = DEFAULT_TASK_LINK_PATH) -> str:
    """
    HTML anchor pointing at a task

    Returns:
        '<a href="{host}{path}?taskId={id}">#{id}</a>', "#{task_id}" when no
        host is configured, "#invalid-task" for a non-positive task id
    """
    if host_url is None or not host_url.strip():
        logger.warning("Host URL is null or blank for task link generation")
        return f"#{task_id}"

    valid_task_id = to_valid_id(task_id)
    if valid_task_id is None:
        logger.warning(f"Invalid taskId for link generation: {task_id}", extra={"task_id": task_id})
        return INVALID_TASK_LINK

    url = _build_task_url(host_url, valid_task_id, path)
    return f'<a href="{url}">#{valid_task_id}</a>'


def generate_task_url(
    host_url: Optional[str],
    task_id: Any,
    path: str = DEFAULT_TASK_LINK_PATH
) -> Optional[str]:
    """Plain task URL, None without a host or with a non-positive task id"""
    valid_task_id = to_valid_id(task_id)
    if host_url is None or not host_url.strip() or valid_task_id is None:
        return None
    return _build_task_url(host_url, valid_task_id, path)


def _build_task_url(host_url: str, task_id: int, path: str) -> str:
    clean_host = host_url[:-1] if host_url.endswith("/") else host_url
    if path and not path.startswith("/"):
        path = "/" + path
    return f"{clean_host}{path}?taskId={task_id}"


# =============================================================================
# Identity Lookups
# =============================================================================

def lookup_user_attribute(
    identity_service: Optional[IdentityService],
    user_id: Any,
    attribute: Union[UserAttribute, str]
) -> Optional[str]:
    """
    Read a user attribute from the identity directory

    The directory is not queried at all for a missing service, an invalid
    user id or an unknown attribute name. Lookup failures are logged and
    yield None.
    """
    valid_user_id = to_valid_id(user_id)
    if identity_service is None or valid_user_id is None:
        return None

    try:
        attribute = UserAttribute(attribute)
    except ValueError:
        logger.warning(f"Unknown user attribute: {attribute}", extra={"user_id": valid_user_id})
        return None

    try:
        value = identity_service.get_attribute(valid_user_id, attribute)
    except NotFoundError:
        logger.warning(f"User not found for {attribute.value} lookup: userId={valid_user_id}", extra={"user_id": valid_user_id})
        return None
    except Exception as e:
        logger.error(
            f"Error retrieving {attribute.value} for userId={valid_user_id}: {e}",
            exc_info=True,
            extra={"user_id": valid_user_id}
        )
        return None

    if not isinstance(value, str) or not value.strip():
        return None
    return value


# =============================================================================
# Resolver Factories
# =============================================================================

def create_resolver(
    identity_service: IdentityService,
    current_user_id: Optional[int],
    host_url: Optional[str],
    task_id: Optional[int],
    fallback_resolver: Optional[PlaceholderResolverFn] = None,
    task_link_path: str = DEFAULT_TASK_LINK_PATH
) -> Callable[[Optional[str], str], Optional[Any]]:
    """
    Build the standard placeholder resolver for one recipient and task

    Args:
        identity_service: Directory used for recipient_* names (required)
        current_user_id: Recipient whose attributes are rendered
        host_url: Base URL for task_link / task_url
        task_id: Task the notification is about
        fallback_resolver: Consulted for every other name, and for built-in
            names that resolve to nothing
        task_link_path: Path joined to host_url for task links

    Raises:
        ValueError: If identity_service is None
    """
    if identity_service is None:
        raise ValueError("identity_service cannot be None")

    def resolve_recipient(resolver_type: DataResolverType) -> Optional[str]:
        attribute = resolver_type.user_attribute
        if attribute is None:
            return None
        return lookup_user_attribute(identity_service, current_user_id, attribute)

    def resolve_task(resolver_type: DataResolverType) -> Optional[str]:
        if resolver_type is DataResolverType.TASK_LINK:
            return generate_task_link(host_url, task_id, task_link_path)
        if resolver_type is DataResolverType.TASK_URL:
            return generate_task_url(host_url, task_id, task_link_path)
        return None

    strategies: Dict[ResolverCategory, Callable[[DataResolverType], Optional[str]]] = {
        ResolverCategory.RECIPIENT: resolve_recipient,
        ResolverCategory.TASK: resolve_task,
    }

    def resolve(ref_step: Optional[str], data_name: str) -> Optional[Any]:
        logger.debug(f"Resolving variable: refStep={ref_step}, dataName={data_name}")

        value = None
        resolver_type = DataResolverType.from_key(data_name)
        if resolver_type is not None:
            strategy = strategies.get(resolver_type.category)
            if strategy is not None:
                value = strategy(resolver_type)

        if value is None and fallback_resolver is not None:
            value = fallback_resolver(ref_step, data_name)

        if value is None:
            logger.warning(f"Variable not resolved: refStep={ref_step}, dataName={data_name}")
        return value

    return resolve


def create_recipient_resolver(
    identity_service: IdentityService,
    current_user_id: Optional[int]
) -> Callable[[Optional[str], str], Optional[Any]]:
    """Resolver for recipient_* names only"""
    return create_resolver(identity_service, current_user_id, None, None, None)


def create_resolver_with_task_link(
    identity_service: IdentityService,
    current_user_id: Optional[int],
    host_url: Optional[str],
    task_id: Optional[int]
) -> Callable[[Optional[str], str], Optional[Any]]:
    """Resolver for recipient_* and task_* names"""
    return create_resolver(identity_service, current_user_id, host_url, task_id, None)


def create_step_data_resolver(
    step_lookup: StepLookup,
    username_extractor: StepValueExtractor,
    status_extractor: StepValueExtractor
) -> Callable[[Optional[str], str], Optional[Any]]:
    """
    Build a resolver for {{refStep:step_user_name}} and {{refStep:step_status}}

    Raises:
        ValueError: If any collaborator is None
    """
    if step_lookup is None:
        raise ValueError("step_lookup cannot be None")
    if username_extractor is None:
        raise ValueError("username_extractor cannot be None")
    if status_extractor is None:
        raise ValueError("status_extractor cannot be None")

    extractors = {
        DataResolverType.STEP_USER_NAME: username_extractor,
        DataResolverType.STEP_STATUS: status_extractor,
    }

    def resolve(ref_step: Optional[str], data_name: str) -> Optional[Any]:
        if ref_step is None or not ref_step.strip():
            logger.debug("No refStep provided for step data lookup")
            return None

        extractor = extractors.get(DataResolverType.from_key(data_name))
        if extractor is None:
            return None

        try:
            step = step_lookup(ref_step.strip())
        except (NotFoundError, KeyError):
            step = None

        if step is None:
            logger.warning(f"No step data found for refStep={ref_step}", extra={"step_ref": ref_step})
            return None
        return extractor(step)

    return resolve


def compose_resolvers(*resolvers: Optional[PlaceholderResolverFn]) -> Callable[[Optional[str], str], Optional[Any]]:
    """Resolver returning the first non-None result of the given resolvers"""
    chain = [resolver for resolver in resolvers if resolver is not None]

    def resolve(ref_step: Optional[str], data_name: str) -> Optional[Any]:
        for resolver in chain:
            value = resolver(ref_step, data_name)
            if value is not None:
                return value
        return None

    return resolve
