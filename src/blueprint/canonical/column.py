from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union


@dataclass
class ColumnSpec:
    """
    One output column of an event table.

    Mutable only while held by an EventDraft; compiled
    migrations always carry copies.
    """
    inbound_name: str           # source field identifier
    outbound_name: str          # destination column identifier
    transformer: str            # varchar, bigint, ipCity, f@timestamp@unix ...

    # Only meaningful for varchar (1..65535)
    size: Optional[Union[int, str]] = None

    # Free-form DDL suffix, e.g. " sortkey" or "(255)"
    column_creation_options: str = ""

    def copy(self, **changes) -> "ColumnSpec":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "InboundName": self.inbound_name,
            "OutboundName": self.outbound_name,
            "Transformer": self.transformer,
            "ColumnCreationOptions": self.column_creation_options,
        }
        if self.size is not None:
            data["size"] = self.size
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnSpec":
        return cls(
            inbound_name=data.get("InboundName") or "",
            outbound_name=data.get("OutboundName") or "",
            transformer=data.get("Transformer") or "",
            size=data.get("size"),
            column_creation_options=data.get("ColumnCreationOptions") or "",
        )


@dataclass
class EventDraft:
    """
    In-progress schema being assembled for an event.
    Column order is DDL column order.
    """
    event_name: str = ""
    dist_key: str = ""
    columns: List[ColumnSpec] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "EventName": self.event_name,
            "distkey": self.dist_key,
            "Columns": [c.to_dict() for c in self.columns],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventDraft":
        return cls(
            event_name=data.get("EventName") or "",
            dist_key=data.get("distkey") or "",
            columns=[ColumnSpec.from_dict(c) for c in data.get("Columns") or []],
        )
