"""Conversion between editor rule rows and engine rules.

The editor hands rows over in whatever shape its widgets produce: the
operator may be a plain string, an option dict or a list holding one
option dict. Everything is normalized here so the router builders only
ever see Rule objects.
"""

import logging
from collections.abc import Callable
from typing import Any

from flowsplit.models.flow_definition import Router
from flowsplit.models.rule import OperatorConfig, Rule
from flowsplit.operators import get_operator_config
from flowsplit.routers.categories import (
    generate_default_category_name,
    is_system_category,
)

logger = logging.getLogger(__name__)

OperatorLookup = Callable[[str], OperatorConfig | None]


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def get_operator_value(operator: Any) -> str:
    """Extract the operator id from a string, option dict or list of options."""
    if isinstance(operator, str):
        return operator.strip()
    if isinstance(operator, list) and operator:
        first = operator[0]
        if isinstance(first, dict):
            return _text(first.get("value"))
        return ""
    if isinstance(operator, dict):
        return _text(operator.get("value"))
    return ""


def is_empty_rule_item(
    item: dict[str, Any], get_operator: OperatorLookup = get_operator_config
) -> bool:
    """Whether a rule row is incomplete and should be dropped.

    A row needs an operator, a category and as many values as the operator
    takes.
    """
    operator_id = get_operator_value(item.get("operator"))
    if not operator_id or not _text(item.get("category")):
        return True

    operator = get_operator(operator_id)
    if operator is None:
        return False
    if operator.arity == 1:
        return not _text(item.get("value1"))
    if operator.arity == 2:
        return not _text(item.get("value1")) or not _text(item.get("value2"))
    return False


def extract_user_rules(
    form_data: dict[str, Any], get_operator: OperatorLookup = get_operator_config
) -> list[Rule]:
    """Build engine rules from the form's rule rows, skipping incomplete ones.

    Values the operator does not take are cleared so stale input in a
    hidden field never reaches the router.
    """
    rules: list[Rule] = []
    for item in form_data.get("rules") or []:
        if not isinstance(item, dict) or is_empty_rule_item(item, get_operator):
            continue

        operator_id = get_operator_value(item.get("operator"))
        operator = get_operator(operator_id)
        value1 = _text(item.get("value1"))
        value2 = _text(item.get("value2"))

        if operator is not None:
            if operator.arity == 0:
                value1 = value2 = ""
            elif operator.arity == 1:
                value2 = ""

        rules.append(
            Rule(
                operator_id=operator_id,
                value1=value1,
                value2=value2,
                branch_name=_text(item.get("category")),
            )
        )
    return rules


def cases_to_form_rules(
    router: Router | None, get_operator: OperatorLookup = get_operator_config
) -> list[dict[str, Any]]:
    """Turn a router's cases back into editable rule rows.

    Cases routed to system categories (the default, timeouts) are not user
    rules and are left out.
    """
    if router is None:
        return []

    rows: list[dict[str, Any]] = []
    for case in router.cases:
        category = router.find_category(case.category_uuid)
        if category is None or is_system_category(category.name):
            continue

        operator = get_operator(case.type)
        if operator is not None and operator.arity == 0:
            value1, value2 = "", ""
        elif operator is not None and operator.arity == 2:
            value1 = case.arguments[0] if len(case.arguments) > 0 else ""
            value2 = case.arguments[1] if len(case.arguments) > 1 else ""
        else:
            value1, value2 = " ".join(case.arguments), ""

        rows.append(
            {
                "operator": {
                    "value": case.type,
                    "name": operator.name if operator else case.type,
                },
                "value1": value1,
                "value2": value2,
                "category": category.name,
            }
        )
    return rows


def update_rule_item(
    index: int,
    field: str,
    value: Any,
    items: list[dict[str, Any]],
    get_operator: OperatorLookup = get_operator_config,
) -> list[dict[str, Any]]:
    """Apply a field change to one rule row and keep its category name in step.

    The category follows the operator and values for as long as the user
    has not typed a name of their own, i.e. while it is blank or still
    equal to the name we would have suggested before this change.
    """
    updated = list(items)
    old_item = items[index] if index < len(items) else {}
    item = dict(old_item)
    item[field] = value

    old_operator_id = get_operator_value(old_item.get("operator"))
    new_operator_id = get_operator_value(item.get("operator"))

    old_default = generate_default_category_name(
        old_operator_id,
        old_item.get("value1"),
        old_item.get("value2"),
        get_operator,
    )
    new_default = generate_default_category_name(
        new_operator_id, item.get("value1"), item.get("value2"), get_operator
    )

    category = item.get("category")
    follows_default = not _text(category) or category == old_default
    if follows_default and new_default:
        logger.debug("rule %d category %r -> %r", index, category, new_default)
        item["category"] = new_default

    if index < len(updated):
        updated[index] = item
    else:
        updated.append(item)
    return updated
