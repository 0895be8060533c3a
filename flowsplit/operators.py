"""Operator registry for rule-based routing.

Each operator declares how many values it takes. Routers only read from
this registry, node editors use it to build their operator pickers.
"""

from flowsplit import config
from flowsplit.models.rule import OperatorConfig


HAS_LOCATIONS = "HAS_LOCATIONS"

OPERATORS: list[OperatorConfig] = [
    # text
    OperatorConfig(type="has_any_word", name="has any of the words", arity=1),
    OperatorConfig(type="has_all_words", name="has all of the words", arity=1),
    OperatorConfig(type="has_phrase", name="has the phrase", arity=1),
    OperatorConfig(type="has_only_phrase", name="has only the phrase", arity=1),
    OperatorConfig(type="has_beginning", name="starts with", arity=1),
    OperatorConfig(
        type="has_text", name="has some text", arity=0, category_name="Has Text"
    ),
    OperatorConfig(type="has_pattern", name="matches regex", arity=1),
    # number
    OperatorConfig(
        type="has_number", name="has a number", arity=0, category_name="Has Number"
    ),
    OperatorConfig(type="has_number_between", name="has a number between", arity=2),
    OperatorConfig(type="has_number_lt", name="has a number below", arity=1),
    OperatorConfig(type="has_number_lte", name="has a number at or below", arity=1),
    OperatorConfig(type="has_number_eq", name="has a number equal to", arity=1),
    OperatorConfig(type="has_number_gte", name="has a number at or above", arity=1),
    OperatorConfig(type="has_number_gt", name="has a number above", arity=1),
    # date
    OperatorConfig(
        type="has_date", name="has a date", arity=0, category_name="Has Date"
    ),
    OperatorConfig(type="has_date_lt", name="has a date before", arity=1),
    OperatorConfig(type="has_date_eq", name="has a date equal to", arity=1),
    OperatorConfig(type="has_date_gt", name="has a date after", arity=1),
    OperatorConfig(
        type="has_time", name="has a time", arity=0, category_name="Has Time"
    ),
    # contact data
    OperatorConfig(
        type="has_phone", name="has a phone number", arity=0, category_name="Has Phone"
    ),
    OperatorConfig(
        type="has_email", name="has an email", arity=0, category_name="Has Email"
    ),
    # locations, only offered when the workspace has locations
    OperatorConfig(
        type="has_state",
        name="has state",
        arity=0,
        category_name="Has State",
        feature=HAS_LOCATIONS,
    ),
    OperatorConfig(
        type="has_district",
        name="has district",
        arity=1,
        category_name="Has District",
        feature=HAS_LOCATIONS,
    ),
    OperatorConfig(
        type="has_ward",
        name="has ward",
        arity=2,
        category_name="Has Ward",
        feature=HAS_LOCATIONS,
    ),
    # classifier intents: intent name and confidence threshold
    OperatorConfig(type="has_intent", name="has intent", arity=2),
    OperatorConfig(type="has_top_intent", name="has top intent", arity=2),
    # system operators, never offered to users directly
    OperatorConfig(
        type="has_group", name="is in the group", arity=1, visibility="hidden"
    ),
    OperatorConfig(
        type="has_category", name="has the category", arity=0, visibility="hidden"
    ),
    OperatorConfig(
        type="has_error",
        name="has an error",
        arity=0,
        category_name="Has Error",
        visibility="hidden",
    ),
    OperatorConfig(
        type="has_value",
        name="is not empty",
        arity=0,
        category_name="Not Empty",
        visibility="hidden",
    ),
    OperatorConfig(
        type="has_only_text", name="has only the text", arity=1, visibility="hidden"
    ),
]

_OPERATORS_BY_TYPE = {op.type: op for op in OPERATORS}


def get_operator_config(type: str) -> OperatorConfig | None:
    """Get the operator configuration for an operator id, if registered."""
    return _OPERATORS_BY_TYPE.get(type)


def get_wait_for_response_operators(
    features: list[str] | None = None,
) -> list[OperatorConfig]:
    """Operators a user can pick for response rules.

    Hidden operators are never included. Feature-gated operators are only
    included when their feature is enabled; features defaults to the
    configured FLOWSPLIT_FEATURES.
    """
    enabled = set(config.FEATURES if features is None else features)
    return [
        op
        for op in OPERATORS
        if op.visibility != "hidden" and (op.feature is None or op.feature in enabled)
    ]


def get_intent_operators() -> list[OperatorConfig]:
    """Operators used when splitting by classifier intent."""
    return [op for op in OPERATORS if op.type in ("has_intent", "has_top_intent")]


def operators_to_select_options(operators: list[OperatorConfig]) -> list[dict[str, str]]:
    """Convert operators to select options."""
    return [{"value": op.type, "name": op.name} for op in operators]


def create_operator_option(type: str) -> dict[str, str]:
    """Create a select option for an operator id, unknown ids name themselves."""
    operator = get_operator_config(type)
    return {"value": type, "name": operator.name if operator else type}
