import json
from typing import Dict

import yaml

from blueprint.canonical.migration import Migration


class MigrationExporter:
    """
    Exports a compiled migration as JSON or YAML.
    """

    def __init__(self, migration: Migration):
        self.migration = migration

    def export(self) -> Dict:
        """
        Return migration as JSON-serializable object.
        """
        return self.migration.to_dict()

    def export_to_json(self, indent: int = 2) -> str:
        return json.dumps(self.export(), indent=indent)

    def export_to_yaml(self) -> str:
        return yaml.safe_dump(
            self.export(),
            sort_keys=False,
            default_flow_style=False
        )

    def export_to_file(self, file_path: str, indent: int = 2):
        """
        Write migration to file; format follows the file extension.
        """
        if file_path.endswith((".yaml", ".yml")):
            content = self.export_to_yaml()
        else:
            content = self.export_to_json(indent=indent)

        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)
