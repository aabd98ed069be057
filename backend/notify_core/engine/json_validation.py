"""JSON Structural Validation - Field and array type checks on decoded JSON"""
from typing import Any, Callable

from ..domain.errors import StructuralValidationError

MEMBERSHIPS_KEY = "memberShips"


# Type predicates over decoded JSON values
def is_text(value: Any) -> bool:
    return isinstance(value, str)


def is_text_or_null(value: Any) -> bool:
    return value is None or isinstance(value, str)


def is_array(value: Any) -> bool:
    return isinstance(value, list)


def validate_field(
    node: Any,
    field_name: str,
    predicate: Callable[[Any], bool],
    error_label: str
) -> None:
    """
    Validate presence and type of a field of a JSON object

    Args:
        node: Decoded JSON object
        field_name: Key to look up
        predicate: Type check applied to the value (e.g. is_text)
        error_label: Field name used in the error message

    Raises:
        StructuralValidationError: If the field is missing or fails the predicate
    """
    if not isinstance(node, dict) or field_name not in node:
        raise StructuralValidationError(
            f"Mandatory field '{error_label}' is missing.",
            details={"field": error_label}
        )

    if not predicate(node[field_name]):
        raise StructuralValidationError(
            f"Mandatory field '{error_label}' has an invalid type.",
            details={"field": error_label, "actual_type": type(node[field_name]).__name__}
        )


def validate_memberships_array(node: Any) -> None:
    """
    Validate that the memberShips node is an array of non-empty strings

    An empty array is valid.

    Raises:
        StructuralValidationError: If the node is absent, not an array, or holds
            a non-string or blank element
    """
    if not is_array(node):
        raise StructuralValidationError(
            f"'{MEMBERSHIPS_KEY}' must be an array: the configuration expects a JSON array of membership references.",
            details={"field": MEMBERSHIPS_KEY}
        )

    for index, element in enumerate(node):
        if not is_text(element):
            raise StructuralValidationError(
                f"Invalid element at index {index} of '{MEMBERSHIPS_KEY}': "
                f"membership reference must be a non-empty string, got {type(element).__name__}.",
                details={"field": MEMBERSHIPS_KEY, "index": index}
            )
        if not element.strip():
            raise StructuralValidationError(
                f"Invalid element at index {index} of '{MEMBERSHIPS_KEY}': "
                f"membership reference must be a non-empty string, found an empty value.",
                details={"field": MEMBERSHIPS_KEY, "index": index}
            )
