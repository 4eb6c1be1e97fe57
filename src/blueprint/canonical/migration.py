from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from blueprint.canonical.column import ColumnSpec


ADD_TABLE = "add"
UPDATE_TABLE = "update"
ADD_COLUMN = "add"


@dataclass(frozen=True)
class TableOption:
    """
    Table-level physical layout hints.
    """
    dist_key: Tuple[str, ...] = ()
    sort_key: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "DistKey": list(self.dist_key),
            "SortKey": list(self.sort_key),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TableOption":
        data = data or {}
        return cls(
            dist_key=tuple(data.get("DistKey") or ()),
            sort_key=tuple(data.get("SortKey") or ()),
        )


@dataclass(frozen=True)
class ColumnOperation:
    inbound_name: str
    outbound_name: str
    new_column_definition: ColumnSpec
    operation: str = ADD_COLUMN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Operation": self.operation,
            "InboundName": self.inbound_name,
            "OutboundName": self.outbound_name,
            "NewColumnDefinition": self.new_column_definition.to_dict(),
        }


@dataclass(frozen=True)
class Migration:
    """
    Immutable instruction describing a table creation or update.

    Sent once to the persistence service and discarded.
    """
    table_operation: str        # add | update
    name: str
    column_operations: Tuple[ColumnOperation, ...] = ()
    table_option: TableOption = field(default_factory=TableOption)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "TableOperation": self.table_operation,
            "Name": self.name,
            "ColumnOperations": [op.to_dict() for op in self.column_operations],
            "TableOption": self.table_option.to_dict(),
        }


@dataclass(frozen=True)
class ExistingSchema:
    """
    A schema version already held by the persistence service.
    """
    event_name: str
    version: int
    table_option: TableOption = field(default_factory=TableOption)
    columns: Tuple[ColumnSpec, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExistingSchema":
        return cls(
            event_name=data.get("EventName") or "",
            version=int(data.get("Version") or 0),
            table_option=TableOption.from_dict(data.get("TableOption")),
            columns=tuple(ColumnSpec.from_dict(c) for c in data.get("Columns") or []),
        )
