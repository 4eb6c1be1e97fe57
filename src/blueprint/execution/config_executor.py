import os
from typing import Dict, List, Optional

import yaml

from blueprint.canonical.column import ColumnSpec
from blueprint.canonical.migration import Migration
from blueprint.clients.base import SchemaServices
from blueprint.clients.http_client import BlueprintAPIClient
from blueprint.clients.local_files import LocalSchemaServices
from blueprint.outputs.migration_exporter import MigrationExporter
from blueprint.sessions.create_flow import SchemaCreateSession
from blueprint.sessions.outcome import SessionOutcome
from blueprint.sessions.update_flow import SchemaUpdateSession
from blueprint.settings import Settings


CREATE = "create"
UPDATE = "update"


class ConfigExecutor:
    """
    Builds (and optionally submits) one migration from a YAML configuration.

    Example:

        event: pageview
        operation: create          # create | update
        source: local              # local | api
        suggestion_file: pageview.json
        dist_key: user_id          # optional; replaces the inferred key
        columns: []                # extra columns for create
        additions: []              # new columns for update
        output_dir: outputs
        submit: false
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[Dict] = None,
        settings: Optional[Settings] = None,
        services: Optional[SchemaServices] = None,
    ):
        self.config_path = config_path
        self.config = config if config is not None else self._load_config()
        self.settings = settings or Settings.from_env()
        self._services = services

    # ------------------------------------------
    # Load YAML
    # ------------------------------------------
    def _load_config(self) -> Dict:
        if not self.config_path or not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            try:
                return yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid config file {self.config_path}: {e}") from e

    def _resolve(self, path: Optional[str]) -> Optional[str]:
        # Relative paths are relative to the config file
        if not path or os.path.isabs(path) or not self.config_path:
            return path
        return os.path.join(os.path.dirname(os.path.abspath(self.config_path)), path)

    @property
    def event(self) -> str:
        event = self.config.get("event")
        if not event:
            raise ValueError("Config is missing 'event'")
        return event

    @property
    def operation(self) -> str:
        operation = (self.config.get("operation") or CREATE).lower()
        if operation not in (CREATE, UPDATE):
            raise ValueError(
                f"Invalid operation '{operation}'. Allowed values: create, update"
            )
        return operation

    def _build_services(self) -> SchemaServices:
        if self._services is not None:
            return self._services

        if (self.config.get("source") or "local").lower() == "api":
            return BlueprintAPIClient.from_settings(self.settings)

        return LocalSchemaServices(
            suggestion_file=self._resolve(self.config.get("suggestion_file")),
            schema_file=self._resolve(self.config.get("schema_file")),
        )

    def _columns(self, key: str) -> List[ColumnSpec]:
        return [ColumnSpec.from_dict(c) for c in self.config.get(key) or []]

    # ------------------------------------------
    # Execute
    # ------------------------------------------
    def execute(self) -> Dict:
        services = self._build_services()
        submit = bool(self.config.get("submit", False))

        try:
            if self.operation == CREATE:
                migration, version, outcome = self._run_create(services, submit)
            else:
                migration, version, outcome = self._run_update(services, submit)
        finally:
            # Injected services belong to the caller
            if services is not self._services and hasattr(services, "close"):
                services.close()

        outputs = self._save_outputs(migration)

        return {
            "event": self.event,
            "operation": self.operation,
            "version": version,
            "submitted": outcome is not None,
            "message": outcome.message if outcome else "Migration built, not submitted",
            "columns": len(migration.column_operations),
            "outputs": outputs,
        }

    def _run_create(self, services: SchemaServices, submit: bool):
        session = SchemaCreateSession(services)
        session.load(self.event)

        if self.config.get("dist_key") is not None:
            session.draft.dist_key = self.config["dist_key"]

        for column in self._columns("columns"):
            error = session.add_column(column)
            if error:
                raise error

        if submit:
            outcome = self._raise_on_failure(session.submit())
            return outcome.migration, 0, outcome

        return session.preview().unwrap(), 0, None

    def _run_update(self, services: SchemaServices, submit: bool):
        session = SchemaUpdateSession(services)
        self._raise_on_failure(session.load(self.event, self.config.get("version")))

        for column in self._columns("additions"):
            error = session.add_column(column)
            if error:
                raise error

        version = session.schema.version
        if submit:
            outcome = self._raise_on_failure(session.submit())
            return outcome.migration, version, outcome

        return session.preview().unwrap(), version, None

    @staticmethod
    def _raise_on_failure(outcome: SessionOutcome) -> SessionOutcome:
        if not outcome.ok:
            raise outcome.error
        return outcome

    # ------------------------------------------
    # Save Outputs
    # ------------------------------------------
    def _save_outputs(self, migration: Migration) -> List[str]:
        output_dir = self._resolve(self.config.get("output_dir"))
        if not output_dir:
            return []

        os.makedirs(output_dir, exist_ok=True)
        exporter = MigrationExporter(migration)

        paths = []
        for name in ("migration.json", "migration.yaml"):
            path = os.path.join(output_dir, name)
            exporter.export_to_file(path)
            paths.append(path)
        return paths

