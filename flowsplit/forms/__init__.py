"""Helpers that translate between node editor forms and router inputs."""

from flowsplit.forms.rules import (
    cases_to_form_rules,
    extract_user_rules,
    get_operator_value,
    is_empty_rule_item,
    update_rule_item,
)

__all__ = [
    "cases_to_form_rules",
    "extract_user_rules",
    "get_operator_value",
    "is_empty_rule_item",
    "update_rule_item",
]
