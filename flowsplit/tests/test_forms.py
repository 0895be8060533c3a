"""Tests for converting editor rule rows to and from engine rules."""

import pytest

from flowsplit.forms.rules import (
    cases_to_form_rules,
    extract_user_rules,
    get_operator_value,
    is_empty_rule_item,
    update_rule_item,
)
from flowsplit.models.flow_definition import Case, Category, Router
from flowsplit.models.rule import Rule


def _row(operator, value1="", value2="", category=""):
    return {"operator": operator, "value1": value1, "value2": value2, "category": category}


class TestGetOperatorValue:
    """Operator ids from the shapes the editor produces."""

    @pytest.mark.parametrize(
        "operator,expected",
        [
            ("has_text", "has_text"),
            (" has_text ", "has_text"),
            ({"value": "has_phrase", "name": "has the phrase"}, "has_phrase"),
            ([{"value": "has_number", "name": "has a number"}], "has_number"),
            ([], ""),
            (["has_text"], ""),
            ({}, ""),
            (None, ""),
            (42, ""),
        ],
    )
    def test_shapes(self, operator, expected):
        assert get_operator_value(operator) == expected


class TestIsEmptyRuleItem:
    """Incomplete rows are dropped."""

    def test_missing_operator_or_category(self):
        assert is_empty_rule_item(_row("", "red", category="Red"))
        assert is_empty_rule_item(_row("has_any_word", "red", category="  "))

    def test_values_by_arity(self):
        """Rows need as many values as their operator takes."""
        assert not is_empty_rule_item(_row("has_text", category="Has Text"))
        assert is_empty_rule_item(_row("has_any_word", "", category="Red"))
        assert not is_empty_rule_item(_row("has_any_word", "red", category="Red"))
        assert is_empty_rule_item(_row("has_number_between", "1", "", "Low"))
        assert not is_empty_rule_item(_row("has_number_between", "1", "5", "Low"))

    def test_unknown_operator_kept(self):
        assert not is_empty_rule_item(_row("has_magic", category="Magic"))


class TestExtractUserRules:
    """Form rows to engine rules."""

    def test_extracts_and_filters(self):
        """Incomplete rows are skipped, values are stripped."""
        form = {
            "rules": [
                _row({"value": "has_any_word"}, " red ", category=" Warm "),
                _row({"value": "has_any_word"}, "", category="Empty"),
                _row([{"value": "has_number_between"}], "1", "5", "Low"),
                "not a row",
            ]
        }

        assert extract_user_rules(form) == [
            Rule(operator_id="has_any_word", value1="red", value2="", branch_name="Warm"),
            Rule(operator_id="has_number_between", value1="1", value2="5", branch_name="Low"),
        ]

    def test_clears_unused_values(self):
        """Values the operator does not take are dropped."""
        form = {
            "rules": [
                _row("has_text", "stale", "stale", "Has Text"),
                _row("has_phrase", "hello", "stale", "Hello"),
            ]
        }
        rules = extract_user_rules(form)

        assert (rules[0].value1, rules[0].value2) == ("", "")
        assert (rules[1].value1, rules[1].value2) == ("hello", "")

    def test_unknown_operator_keeps_values(self):
        rules = extract_user_rules({"rules": [_row("has_magic", "a", "b", "Magic")]})
        assert (rules[0].value1, rules[0].value2) == ("a", "b")

    def test_no_rules(self):
        assert extract_user_rules({}) == []
        assert extract_user_rules({"rules": None}) == []


class TestCasesToFormRules:
    """Router cases back to editor rows."""

    def test_rows(self):
        """System categories are skipped, arguments go back into values."""
        router = Router(
            cases=[
                Case(uuid="c1", type="has_any_word", arguments=["red", "orange"], category_uuid="warm"),
                Case(uuid="c2", type="has_number_between", arguments=["1", "5"], category_uuid="low"),
                Case(uuid="c3", type="has_text", arguments=[], category_uuid="text"),
                Case(uuid="c4", type="has_text", arguments=[], category_uuid="other"),
            ],
            categories=[
                Category(uuid="warm", name="Warm", exit_uuid="e1"),
                Category(uuid="low", name="Low", exit_uuid="e2"),
                Category(uuid="text", name="Has Text", exit_uuid="e3"),
                Category(uuid="other", name="Other", exit_uuid="e4"),
            ],
            default_category_uuid="other",
        )

        assert cases_to_form_rules(router) == [
            {
                "operator": {"value": "has_any_word", "name": "has any of the words"},
                "value1": "red orange",
                "value2": "",
                "category": "Warm",
            },
            {
                "operator": {"value": "has_number_between", "name": "has a number between"},
                "value1": "1",
                "value2": "5",
                "category": "Low",
            },
            {
                "operator": {"value": "has_text", "name": "has some text"},
                "value1": "",
                "value2": "",
                "category": "Has Text",
            },
        ]

    def test_no_router(self):
        assert cases_to_form_rules(None) == []

    def test_rows_extract_back_to_rules(self):
        """Rows produced from a router are accepted by extract_user_rules."""
        router = Router(
            cases=[Case(uuid="c1", type="has_phrase", arguments=["good", "morning"], category_uuid="a")],
            categories=[Category(uuid="a", name="Morning", exit_uuid="e")],
        )
        rules = extract_user_rules({"rules": cases_to_form_rules(router)})
        assert rules == [
            Rule(operator_id="has_phrase", value1="good morning", branch_name="Morning")
        ]


class TestUpdateRuleItem:
    """Category names that follow the operator and values."""

    def test_fills_blank_category(self):
        items = [_row("has_any_word")]
        updated = update_rule_item(0, "value1", "red", items)
        assert updated[0]["category"] == "Red"
        assert items[0]["category"] == ""

    def test_follows_previous_suggestion(self):
        """A category equal to the old suggestion keeps following."""
        items = [_row("has_number_gt", "10", category="> 10")]
        updated = update_rule_item(0, "value1", "20", items)
        assert updated[0]["category"] == "> 20"

    def test_keeps_custom_name(self):
        items = [_row("has_number_gt", "10", category="Big")]
        updated = update_rule_item(0, "value1", "20", items)
        assert updated[0]["category"] == "Big"

    def test_operator_change(self):
        items = [_row({"value": "has_any_word"}, "red", category="Red")]
        updated = update_rule_item(0, "operator", {"value": "has_text"}, items)
        assert updated[0]["category"] == "Has Text"

    def test_no_suggestion_leaves_category(self):
        """Without a suggestion the category is left as is."""
        items = [_row("has_any_word", "red", category="Red")]
        updated = update_rule_item(0, "value1", "", items)
        assert updated[0]["category"] == "Red"

    def test_appends_new_row(self):
        updated = update_rule_item(1, "operator", "has_email", [_row("has_text", category="Has Text")])
        assert len(updated) == 2
        assert updated[1] == {"operator": "has_email", "category": "Has Email"}
