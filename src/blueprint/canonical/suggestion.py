from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from blueprint.canonical.column import ColumnSpec


@dataclass(frozen=True)
class SuggestedColumn:
    """
    A candidate column inferred from observed events.
    """
    inbound_name: str
    outbound_name: str
    transformer: str
    occurrence_probability: float = 0.0
    column_creation_options: str = ""

    def to_column_spec(self) -> ColumnSpec:
        return ColumnSpec(
            inbound_name=self.inbound_name,
            outbound_name=self.outbound_name,
            transformer=self.transformer,
            column_creation_options=self.column_creation_options,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SuggestedColumn":
        return cls(
            inbound_name=data.get("InboundName") or "",
            outbound_name=data.get("OutboundName") or "",
            transformer=data.get("Transformer") or "",
            occurrence_probability=float(data.get("OccurrenceProbability") or 0.0),
            column_creation_options=data.get("ColumnCreationOptions") or "",
        )


@dataclass(frozen=True)
class Suggestion:
    """
    Externally inferred candidate schema for an event.
    Columns arrive unordered.
    """
    event_name: str
    columns: Tuple[SuggestedColumn, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Suggestion":
        return cls(
            event_name=data.get("EventName") or "",
            columns=tuple(
                SuggestedColumn.from_dict(c) for c in data.get("Columns") or []
            ),
        )
