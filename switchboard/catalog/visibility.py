"""
Conditional field visibility.

Applies ``displayOptions`` rules: a field with ``show`` is visible only when
every listed sibling currently holds one of the allowed values; a field
with ``hide`` is hidden when any listed sibling does.
"""

from typing import Any

from switchboard.models.contracts.catalog import FieldDefinition, Operation

_MISSING = object()


def _matches(value: Any, candidates: list[Any]) -> bool:
    """Membership that keeps booleans apart from 0 and 1."""
    return any(
        candidate == value and isinstance(candidate, bool) == isinstance(value, bool)
        for candidate in candidates
    )


def _current_value(name: str, values: dict[str, Any], operation: Operation | None) -> Any:
    if name in values:
        return values[name]
    if operation is not None:
        sibling = operation.get_field(name)
        if sibling is not None:
            return sibling.default
    return _MISSING


def is_field_visible(
    field: FieldDefinition,
    values: dict[str, Any],
    operation: Operation | None = None,
) -> bool:
    """
    Whether a field should be shown given the current sibling values.

    Args:
        field: Field to test
        values: Current form values keyed by field name
        operation: Owning operation; when given, unset siblings fall back
            to their declared default

    Returns:
        True if the field is visible
    """
    rules = field.display_options
    if rules is None:
        return True

    for name, allowed in (rules.show or {}).items():
        if not _matches(_current_value(name, values, operation), allowed):
            return False

    for name, blocked in (rules.hide or {}).items():
        if _matches(_current_value(name, values, operation), blocked):
            return False

    return True


def visible_fields(operation: Operation, values: dict[str, Any]) -> list[FieldDefinition]:
    """Required then optional fields that are visible for the given values."""
    return [
        field for field in operation.all_fields()
        if is_field_visible(field, values, operation)
    ]
