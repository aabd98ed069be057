"""Resolution Engine - Recipient and template resolution core"""
from .json_validation import validate_field, validate_memberships_array
from .config_parser import parse_involved_users, parse_users_config, validate_involved_users
from .membership import build_membership_key, parse_membership_key
from .reference_resolver import (
    collect_all_recipient_ids,
    extract_field,
    parse_and_collect_recipient_ids,
    resolve_indirect_membership,
    resolve_memberships,
    resolve_step_manager,
    resolve_step_user,
)
from .placeholder_resolver import (
    compose_resolvers,
    create_recipient_resolver,
    create_resolver,
    create_resolver_with_task_link,
    create_step_data_resolver,
    generate_task_link,
    generate_task_url,
    lookup_user_attribute,
)
from .template_engine import find_tokens, substitute_template

__all__ = [
    "validate_field",
    "validate_memberships_array",
    "parse_involved_users",
    "parse_users_config",
    "validate_involved_users",
    "build_membership_key",
    "parse_membership_key",
    "collect_all_recipient_ids",
    "extract_field",
    "parse_and_collect_recipient_ids",
    "resolve_indirect_membership",
    "resolve_memberships",
    "resolve_step_manager",
    "resolve_step_user",
    "compose_resolvers",
    "create_recipient_resolver",
    "create_resolver",
    "create_resolver_with_task_link",
    "create_step_data_resolver",
    "generate_task_link",
    "generate_task_url",
    "lookup_user_attribute",
    "find_tokens",
    "substitute_template",
]
