"""Tests for suggestion normalization."""

from blueprint.canonical.column import ColumnSpec
from blueprint.canonical.suggestion import Suggestion
from blueprint.pipeline.suggestion_normalizer import (
    Bootstrap,
    Inferred,
    SuggestionNormalizer,
    drop_first_named,
    normalize_suggestion,
)
from blueprint.standards.bootstrap_columns import get_bootstrap_columns
from blueprint.standards.rewrite_rules import RewriteRule

from conftest import suggested


EXPECTED_BOOTSTRAP = [
    ColumnSpec("time", "time", "f@timestamp@unix", None, " sortkey"),
    ColumnSpec("ip", "ip", "varchar", 15, ""),
    ColumnSpec("ip", "city", "ipCity", None, ""),
    ColumnSpec("ip", "country", "ipCountry", None, ""),
    ColumnSpec("ip", "region", "ipRegion", None, ""),
    ColumnSpec("ip", "asn_id", "ipAsnInteger", None, ""),
]


def inferred(*columns, event="pageview"):
    return Inferred(Suggestion(event_name=event, columns=tuple(columns)))


class TestBootstrap:

    def test_fallback_is_exact_bootstrap_list(self):
        draft = normalize_suggestion(Bootstrap())
        assert draft.columns == EXPECTED_BOOTSTRAP
        assert draft.dist_key == ""

    def test_bootstrap_keeps_event_name(self):
        assert normalize_suggestion(Bootstrap("pageview")).event_name == "pageview"

    def test_bootstrap_lists_are_independent(self):
        first = get_bootstrap_columns()
        first[0].outbound_name = "changed"
        assert get_bootstrap_columns() == EXPECTED_BOOTSTRAP


class TestInferred:

    def test_full_pipeline(self, pageview_suggestion):
        draft = normalize_suggestion(Inferred(pageview_suggestion))

        assert draft.event_name == "pageview"
        assert draft.dist_key == "device_id"
        assert draft.columns[:6] == EXPECTED_BOOTSTRAP
        assert [c.inbound_name for c in draft.columns[6:]] == [
            "device_id", "channel", "url", "player_count",
        ]
        sizes = {c.inbound_name: c.size for c in draft.columns[6:]}
        assert sizes == {"device_id": 32, "channel": 25, "url": 255, "player_count": None}

    def test_stable_sort_on_ties(self):
        draft = normalize_suggestion(inferred(
            suggested("b", 0.9),
            suggested("a", 0.9),
            suggested("c", 0.5),
            suggested("d", 0.95),
        ))
        assert [c.inbound_name for c in draft.columns[6:]] == ["d", "b", "a", "c"]

    def test_time_removed_from_suggested_part(self):
        draft = normalize_suggestion(inferred(
            suggested("time", 1.0, transformer="f@timestamp@unix"),
            suggested("user", 0.5),
        ))
        assert [c.inbound_name for c in draft.columns].count("time") == 1
        assert all(c.inbound_name != "time" for c in draft.columns[6:])

    def test_size_parsed_from_options(self):
        draft = normalize_suggestion(inferred(
            suggested("game", 0.9, options="(64)"),
            suggested("login", 0.8, options=""),
            suggested("viewers", 0.7, transformer="bigint", options="(12)"),
        ))
        by_name = {c.inbound_name: c for c in draft.columns[6:]}
        assert by_name["game"].size == 64
        assert by_name["login"].size is None
        assert by_name["viewers"].size is None

    def test_no_device_id_keeps_prior_dist_key(self):
        source = inferred(suggested("user", 0.5))
        assert normalize_suggestion(source).dist_key == ""
        assert normalize_suggestion(source, dist_key="user").dist_key == "user"

    def test_rewrite_rule_beats_suggested_size(self):
        draft = normalize_suggestion(inferred(suggested("channel", 0.5, options="(10)")))
        assert draft.columns[-1].size == 25

    def test_token_dropped(self):
        draft = normalize_suggestion(inferred(suggested("token", 0.99), suggested("user", 0.5)))
        assert "token" not in [c.inbound_name for c in draft.columns]

    def test_only_first_deleted_match_removed(self):
        draft = normalize_suggestion(inferred(
            suggested("token", 0.9, outbound="token_a"),
            suggested("token", 0.8, outbound="token_b"),
        ))
        assert [c.outbound_name for c in draft.columns[6:]] == ["token_b"]

    def test_later_rule_wins(self):
        normalizer = SuggestionNormalizer(
            rewrite_rules=(
                RewriteRule("game", (("size", 10), ("outbound_name", "game_name"))),
                RewriteRule("game", (("size", 20),)),
            ),
            deleted_names=(),
        )
        draft = normalizer.normalize(inferred(suggested("game", 0.9, options="(5)")))
        game = draft.columns[-1]
        assert game.size == 20
        assert game.outbound_name == "game_name"

    def test_input_not_mutated(self, pageview_suggestion):
        before = pageview_suggestion.columns
        normalize_suggestion(Inferred(pageview_suggestion))
        assert pageview_suggestion.columns == before
        assert pageview_suggestion.columns[0].inbound_name == "url"


class TestDropFirstNamed:

    def test_returns_new_list(self):
        columns = get_bootstrap_columns()
        result = drop_first_named(columns, "ip")
        assert len(columns) == 6
        assert [c.outbound_name for c in result] == ["time", "city", "country", "region", "asn_id"]

    def test_no_match(self):
        columns = get_bootstrap_columns()
        result = drop_first_named(columns, "missing")
        assert result == columns
        assert result is not columns
