"""
Pipeline step: column construction and structural validation.

Used for new user entries and as the gate in front of the
migration compiler.
"""

from typing import Any, Optional

from blueprint.canonical.column import ColumnSpec
from blueprint.standards import transformers


DEFAULT_VARCHAR_SIZE = 255


def make_default() -> ColumnSpec:
    """
    Empty template for a new column entry.
    """
    return ColumnSpec(
        inbound_name="",
        outbound_name="",
        transformer=transformers.VARCHAR,
        size=DEFAULT_VARCHAR_SIZE,
        column_creation_options="",
    )


def coerce_size(value: Any) -> Optional[int]:
    """
    Return value as an int when it is an integer or a string of digits.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def has_valid_size(column: ColumnSpec) -> bool:
    size = coerce_size(column.size)
    return (
        size is not None
        and transformers.VARCHAR_MIN_SIZE <= size <= transformers.VARCHAR_MAX_SIZE
    )


def invalid_reason(column: ColumnSpec) -> Optional[str]:
    """
    Describe why a column is invalid, or None when it is valid.
    """
    if not column.inbound_name:
        return "missing inbound name"
    if not column.outbound_name:
        return "missing outbound name"
    if not column.transformer:
        return "missing transformer"
    if column.transformer == transformers.VARCHAR and not has_valid_size(column):
        return (
            f"varchar size must be an integer between "
            f"{transformers.VARCHAR_MIN_SIZE} and {transformers.VARCHAR_MAX_SIZE}"
        )
    return None


def validate(column: ColumnSpec) -> bool:
    return invalid_reason(column) is None
