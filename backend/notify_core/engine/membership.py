"""Membership keys - "<groupId>$<roleId>" composite keys for group/role pairs"""
from typing import Optional, Tuple

MEMBERSHIP_SEPARATOR = "$"


def build_membership_key(group_id: Optional[int], role_id: Optional[int]) -> Optional[str]:
    """
    Build the key of a group/role membership

    Order matters: build_membership_key(1, 2) != build_membership_key(2, 1).

    Returns:
        "<groupId>$<roleId>", or None if either id is missing
    """
    if group_id is None or role_id is None:
        return None
    return f"{group_id}{MEMBERSHIP_SEPARATOR}{role_id}"


def parse_membership_key(key: Optional[str]) -> Optional[Tuple[int, int]]:
    """Recover (group_id, role_id) from a membership key, None if malformed"""
    if not key or key.count(MEMBERSHIP_SEPARATOR) != 1:
        return None
    group_part, role_part = key.split(MEMBERSHIP_SEPARATOR)
    if not (group_part.isdecimal() and role_part.isdecimal()):
        return None
    return int(group_part), int(role_part)


def is_membership_key(value: Optional[str]) -> bool:
    return parse_membership_key(value) is not None
