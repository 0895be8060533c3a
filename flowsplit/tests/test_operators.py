"""Tests for the operator registry."""

from flowsplit import config
from flowsplit.operators import (
    HAS_LOCATIONS,
    OPERATORS,
    create_operator_option,
    get_intent_operators,
    get_operator_config,
    get_wait_for_response_operators,
    operators_to_select_options,
)


class TestOperatorRegistry:
    """Lookups and arity declarations."""

    def test_types_are_unique(self):
        types = [op.type for op in OPERATORS]
        assert len(types) == len(set(types))

    def test_lookup(self):
        """Registered operators are found, unknown ones are not."""
        assert get_operator_config("has_any_word").arity == 1
        assert get_operator_config("has_number_between").arity == 2
        assert get_operator_config("has_text").arity == 0
        assert get_operator_config("has_magic") is None

    def test_zero_arity_operators_name_their_branch(self):
        """Operators without values carry a branch name, except has_category."""
        for op in OPERATORS:
            if op.arity == 0 and op.type != "has_category":
                assert op.category_name, op.type

    def test_intent_operators(self):
        assert [op.type for op in get_intent_operators()] == ["has_intent", "has_top_intent"]


class TestWaitForResponseOperators:
    """Which operators are offered to users."""

    def test_hidden_operators_excluded(self):
        types = {op.type for op in get_wait_for_response_operators([])}
        assert "has_group" not in types
        assert "has_only_text" not in types
        assert "has_any_word" in types

    def test_location_operators_gated(self):
        """Location operators need the HAS_LOCATIONS feature."""
        without = {op.type for op in get_wait_for_response_operators([])}
        with_locations = {op.type for op in get_wait_for_response_operators([HAS_LOCATIONS])}

        assert "has_state" not in without
        assert {"has_state", "has_district", "has_ward"} <= with_locations

    def test_defaults_to_configured_features(self, monkeypatch):
        """Without an explicit list the configured features are used."""
        monkeypatch.setattr(config, "FEATURES", [HAS_LOCATIONS])
        types = {op.type for op in get_wait_for_response_operators()}
        assert "has_ward" in types

    def test_order_follows_registry(self):
        ops = get_wait_for_response_operators([])
        positions = [OPERATORS.index(op) for op in ops]
        assert positions == sorted(positions)


class TestSelectOptions:
    """Options for operator pickers."""

    def test_options(self):
        options = operators_to_select_options(get_intent_operators())
        assert options == [
            {"value": "has_intent", "name": "has intent"},
            {"value": "has_top_intent", "name": "has top intent"},
        ]

    def test_create_option(self):
        """Unknown ids name themselves."""
        assert create_operator_option("has_phrase") == {
            "value": "has_phrase",
            "name": "has the phrase",
        }
        assert create_operator_option("has_magic") == {"value": "has_magic", "name": "has_magic"}
