from typing import List, Optional

from blueprint.canonical.column import ColumnSpec
from blueprint.canonical.migration import ExistingSchema
from blueprint.clients.base import SchemaServices
from blueprint.observability.logger import log_event
from blueprint.outputs.migration_compiler import CompileResult, MigrationCompiler
from blueprint.pipeline import column_maker
from blueprint.sessions.outcome import SessionOutcome, load_types
from blueprint.standards import transformers
from blueprint.utils.exceptions import (
    BlueprintError,
    LookupNotFound,
    UpstreamFailure,
    ValidationError,
)


class SchemaUpdateSession:
    """
    Collects columns to add to an existing event schema.

    Only the additions are submitted; the existing schema is
    never edited in place.
    """

    def __init__(
        self,
        services: SchemaServices,
        compiler: Optional[MigrationCompiler] = None,
    ):
        self.services = services
        self.compiler = compiler or MigrationCompiler()

        self.schema: Optional[ExistingSchema] = None
        self.additions: List[ColumnSpec] = []
        self.types: List[str] = []
        self.warnings: List[str] = []
        self.new_column = column_maker.make_default()

    def load(self, event_name: str, version: Optional[int] = None) -> SessionOutcome:
        self.types, warning = load_types(self.services)
        self.warnings = [warning] if warning else []

        try:
            self.schema = self.services.get_schema(event_name, version)
        except (LookupNotFound, UpstreamFailure) as e:
            self.schema = None
            log_event("SCHEMA_LOOKUP_FAILED", {"event": event_name, "error": str(e)})
            return SessionOutcome.failure(e)

        self.additions = []
        self.new_column = column_maker.make_default()
        return SessionOutcome.success(f"Loaded schema: {event_name}")

    def add_column(self, column: ColumnSpec) -> Optional[ValidationError]:
        reason = column_maker.invalid_reason(column)
        if reason:
            return ValidationError(column.inbound_name, reason)

        if (
            column.transformer == transformers.VARCHAR
            and not column_maker.coerce_size(column.size)
        ):
            return ValidationError(column.inbound_name, "needs nonempty size")

        self.additions.append(column.copy())
        self.new_column = column_maker.make_default()
        return None

    def drop_addition(self, index: int) -> ColumnSpec:
        return self.additions.pop(index)

    def preview(self) -> CompileResult:
        """
        Compile the pending additions without submitting them.
        """
        if self.schema is None:
            return CompileResult(error=LookupNotFound("No schema loaded to update"))
        return self.compiler.compile_update(
            self.schema.event_name, self.additions, self.schema.table_option
        )

    def submit(self) -> SessionOutcome:
        if self.schema is None:
            return SessionOutcome.failure(LookupNotFound("No schema loaded to update"))

        event = self.schema.event_name
        result = self.preview()
        if not result.ok:
            log_event("MIGRATION_REJECTED", {"event": event, "error": str(result.error)})
            return SessionOutcome.failure(result.error)

        migration = result.migration
        try:
            self.services.submit_migration(migration, event, self.schema.version)
        except BlueprintError as e:
            log_event("MIGRATION_SUBMIT_FAILED", {"event": event, "error": str(e)})
            return SessionOutcome.failure(e, migration=migration)

        log_event("MIGRATION_SUBMITTED", {
            "event": event,
            "version": self.schema.version,
            "table_operation": migration.table_operation,
            "columns": len(migration.column_operations),
        })
        self.additions = []
        return SessionOutcome.success(f"Successfully updated schema: {event}", migration)
