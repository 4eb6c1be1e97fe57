from dataclasses import dataclass
from typing import List, Optional, Sequence

from blueprint.canonical.column import ColumnSpec, EventDraft
from blueprint.canonical.migration import (
    ADD_TABLE,
    UPDATE_TABLE,
    ColumnOperation,
    Migration,
    TableOption,
)
from blueprint.pipeline.column_maker import coerce_size, invalid_reason
from blueprint.standards import transformers
from blueprint.standards.bootstrap_columns import SORT_KEY_MARKER
from blueprint.utils.exceptions import (
    BlueprintError,
    EmptyAdditionsError,
    ValidationError,
)


SORT_KEY_COLUMN = "time"


@dataclass(frozen=True)
class CompileResult:
    """
    Either a compiled migration or the error that prevented it.
    """
    migration: Optional[Migration] = None
    error: Optional[BlueprintError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Migration:
        if self.error is not None:
            raise self.error
        return self.migration


class MigrationCompiler:
    """
    Compile column lists into migration instructions.

    Supported:
    - add table (full column list, derives sort key)
    - update table (added columns only, table option passed through)

    Inputs are never mutated; every emitted column is a new ColumnSpec.
    """

    def compile_create(self, draft: EventDraft) -> CompileResult:
        # Validate everything before building any output
        error = _first_invalid(draft.columns)
        if error:
            return CompileResult(error=error)

        operations: List[ColumnOperation] = []
        sort_key: List[str] = []

        for column in draft.columns:
            options = ""
            size = column.size
            if column.transformer == transformers.VARCHAR:
                size = coerce_size(column.size)
                options += f"({size})"
            if column.outbound_name == SORT_KEY_COLUMN:
                options += SORT_KEY_MARKER
                sort_key.append(column.outbound_name)

            definition = column.copy(
                transformer=_normalize_transformer(column.transformer),
                size=size,
                column_creation_options=options,
            )
            operations.append(_add_column(definition))

        return CompileResult(
            migration=Migration(
                table_operation=ADD_TABLE,
                name=draft.event_name,
                column_operations=tuple(operations),
                table_option=TableOption(
                    dist_key=(draft.dist_key,),
                    sort_key=tuple(sort_key),
                ),
            )
        )

    def compile_update(
        self,
        event_name: str,
        additions: Sequence[ColumnSpec],
        existing_table_option: TableOption,
    ) -> CompileResult:
        if not additions:
            return CompileResult(error=EmptyAdditionsError())

        error = _first_invalid(additions)
        if error:
            return CompileResult(error=error)

        operations: List[ColumnOperation] = []

        for column in additions:
            changes = {"transformer": _normalize_transformer(column.transformer)}
            if column.transformer == transformers.VARCHAR:
                size = coerce_size(column.size)
                changes["size"] = size
                changes["column_creation_options"] = f"({size})"

            operations.append(_add_column(column.copy(**changes)))

        # Updates never change distribution or sort keys
        return CompileResult(
            migration=Migration(
                table_operation=UPDATE_TABLE,
                name=event_name,
                column_operations=tuple(operations),
                table_option=existing_table_option,
            )
        )


def _first_invalid(columns: Sequence[ColumnSpec]) -> Optional[ValidationError]:
    for column in columns:
        reason = invalid_reason(column)
        if reason:
            return ValidationError(column.inbound_name, reason)
    return None


def _normalize_transformer(name: str) -> str:
    if name == transformers.INT:
        return transformers.BIGINT
    return name


def _add_column(definition: ColumnSpec) -> ColumnOperation:
    return ColumnOperation(
        inbound_name=definition.inbound_name,
        outbound_name=definition.outbound_name,
        new_column_definition=definition,
    )


def compile_create(draft: EventDraft) -> CompileResult:
    return MigrationCompiler().compile_create(draft)


def compile_update(
    event_name: str,
    additions: Sequence[ColumnSpec],
    existing_table_option: TableOption,
) -> CompileResult:
    return MigrationCompiler().compile_update(event_name, additions, existing_table_option)
