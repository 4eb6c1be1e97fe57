"""
Pipeline step: Suggestion normalization

Responsibilities:
- Build the initial column list for a new event schema
- Fall back to the bootstrap columns when no suggestion exists
- Order inferred columns by occurrence probability
- Merge bootstrap columns, rewrite rules and the delete list

Each stage builds a new list; no stage mutates the output of another.
"""

import re
from dataclasses import dataclass
from typing import List, Sequence, Union

from blueprint.canonical.column import ColumnSpec, EventDraft
from blueprint.canonical.suggestion import Suggestion
from blueprint.standards import transformers
from blueprint.standards.bootstrap_columns import get_bootstrap_columns
from blueprint.standards.rewrite_rules import (
    DELETED_INBOUND_NAMES,
    DIST_KEY_INBOUND_NAME,
    REWRITE_RULES,
    RewriteRule,
)


SIZE_PATTERN = re.compile(r"\((\d+)\)")


@dataclass(frozen=True)
class Bootstrap:
    """
    No suggestion is available for the event.
    """
    event_name: str = ""


@dataclass(frozen=True)
class Inferred:
    suggestion: Suggestion


SuggestionSource = Union[Bootstrap, Inferred]


class SuggestionNormalizer:
    """
    Turns a suggestion source into an editable EventDraft.
    """

    def __init__(
        self,
        rewrite_rules: Sequence[RewriteRule] = REWRITE_RULES,
        deleted_names: Sequence[str] = DELETED_INBOUND_NAMES,
    ):
        self.rewrite_rules = rewrite_rules
        self.deleted_names = deleted_names

    def normalize(self, source: SuggestionSource, dist_key: str = "") -> EventDraft:
        if isinstance(source, Bootstrap):
            return EventDraft(
                event_name=source.event_name,
                dist_key=dist_key,
                columns=get_bootstrap_columns(),
            )

        suggestion = source.suggestion

        # Stable: ties keep their input order
        ordered = sorted(
            suggestion.columns,
            key=lambda c: c.occurrence_probability,
            reverse=True,
        )
        columns = [c.to_column_spec() for c in ordered]

        # Bootstrap supplies the canonical time column
        columns = drop_first_named(columns, "time")
        columns = [self._parse_size(c) for c in columns]

        if any(c.inbound_name == DIST_KEY_INBOUND_NAME for c in columns):
            dist_key = DIST_KEY_INBOUND_NAME

        columns = get_bootstrap_columns() + columns
        columns = self._apply_rewrites(columns)

        for name in self.deleted_names:
            columns = drop_first_named(columns, name)

        return EventDraft(
            event_name=suggestion.event_name,
            dist_key=dist_key,
            columns=columns,
        )

    def _parse_size(self, column: ColumnSpec) -> ColumnSpec:
        if column.transformer != transformers.VARCHAR:
            return column

        match = SIZE_PATTERN.search(column.column_creation_options or "")
        if not match:
            return column

        return column.copy(size=int(match.group(1)))

    def _apply_rewrites(self, columns: List[ColumnSpec]) -> List[ColumnSpec]:
        for rule in self.rewrite_rules:
            columns = [
                c.copy(**dict(rule.changes)) if c.inbound_name == rule.name else c
                for c in columns
            ]
        return columns


def drop_first_named(columns: List[ColumnSpec], inbound_name: str) -> List[ColumnSpec]:
    """
    Return a new list without the first column matching inbound_name.
    """
    for index, column in enumerate(columns):
        if column.inbound_name == inbound_name:
            return columns[:index] + columns[index + 1:]
    return list(columns)


def normalize_suggestion(source: SuggestionSource, dist_key: str = "") -> EventDraft:
    return SuggestionNormalizer().normalize(source, dist_key=dist_key)
