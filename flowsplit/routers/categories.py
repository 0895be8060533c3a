"""Category identity and naming helpers shared by the router builders.

A category, its exit and its cases keep their uuids across edits whenever
the category can be matched to one from the previous version of the node.
Downstream connections (exit destinations) and translations are keyed by
those uuids, so losing them on an edit would silently rewire the flow.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from flowsplit.models.flow_definition import Case, Category, Exit
from flowsplit.models.rule import CaseSpec, OperatorConfig
from flowsplit.operators import get_operator_config
from flowsplit.utils.identifiers import generate_uuid

logger = logging.getLogger(__name__)


DEFAULT_CATEGORY_NAME = "Other"
ALL_RESPONSES_CATEGORY_NAME = "All Responses"
NO_RESPONSE_CATEGORY_NAME = "No Response"
TIMEOUT_CATEGORY_NAME = "Timeout"
SUCCESS_CATEGORY_NAME = "Success"
FAILURE_CATEGORY_NAME = "Failure"

# branches with a reserved meaning, not offered to user rules as matches
SYSTEM_CATEGORY_NAMES = frozenset(
    {
        NO_RESPONSE_CATEGORY_NAME,
        DEFAULT_CATEGORY_NAME,
        ALL_RESPONSES_CATEGORY_NAME,
        TIMEOUT_CATEGORY_NAME,
    }
)

# names for comparison operators, keyed by operator id
_COMPARISON_NAMES = {
    "has_number_lt": "< {value}",
    "has_number_lte": "<= {value}",
    "has_number_eq": "= {value}",
    "has_number_gte": ">= {value}",
    "has_number_gt": "> {value}",
    "has_date_lt": "Before {value}",
    "has_date_eq": "{value}",
    "has_date_gt": "After {value}",
}


@dataclass
class PreservedCategory:
    """A category with its exit and (optionally) its case."""

    category: Category
    exit: Exit
    case: Case | None = None


def category_key(name: str) -> str:
    """Key for comparing branch names, ignoring case and surrounding spaces."""
    return name.strip().lower()


def is_system_category(name: str) -> bool:
    """Whether a category name is one of the reserved system branches."""
    return name in SYSTEM_CATEGORY_NAMES


def find_exit(exits: list[Exit], exit_uuid: str) -> Exit | None:
    return next((exit for exit in exits if exit.uuid == exit_uuid), None)


def create_or_preserve_category(
    name: str,
    existing_categories: list[Category],
    existing_exits: list[Exit],
    existing_cases: list[Case] | None = None,
    case_spec: CaseSpec | None = None,
) -> PreservedCategory:
    """Find or create a category named `name` along with its exit and case.

    The name match is exact; callers normalize case beforehand if they need
    to. When a category matches, its uuid, its exit's uuid and the exit
    destination are reused. When case_spec is given, a case already pointing
    at the matched category keeps its uuid. Nothing is mutated, the caller
    appends the results.
    """
    existing_category = next(
        (category for category in existing_categories if category.name == name), None
    )
    existing_exit = (
        find_exit(existing_exits, existing_category.exit_uuid)
        if existing_category
        else None
    )

    category_uuid = existing_category.uuid if existing_category else generate_uuid()
    exit_uuid = existing_exit.uuid if existing_exit else generate_uuid()

    if existing_category:
        logger.debug("preserving category %r (%s)", name, category_uuid)
    else:
        logger.debug("creating category %r (%s)", name, category_uuid)

    category = Category(uuid=category_uuid, name=name, exit_uuid=exit_uuid)
    exit = Exit(
        uuid=exit_uuid,
        destination_uuid=existing_exit.destination_uuid if existing_exit else None,
    )

    case = None
    if case_spec is not None:
        existing_case = None
        if existing_category:
            existing_case = next(
                (
                    c
                    for c in existing_cases or []
                    if c.category_uuid == existing_category.uuid
                ),
                None,
            )
        case = Case(
            uuid=existing_case.uuid if existing_case else generate_uuid(),
            type=case_spec.type,
            arguments=list(case_spec.arguments),
            category_uuid=category_uuid,
        )

    return PreservedCategory(category=category, exit=exit, case=case)


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def generate_default_category_name(
    operator_id: str,
    value1: str | None = "",
    value2: str | None = "",
    get_operator: Callable[[str], OperatorConfig | None] = get_operator_config,
) -> str:
    """Suggest a branch name for a rule.

    Returns an empty string when there is nothing sensible to suggest
    (unknown operator, or the values it needs are missing).
    """
    operator = get_operator(operator_id) if operator_id else None
    if operator is None:
        return ""

    if operator.arity == 0:
        return operator.category_name or ""

    first = (value1 or "").strip()
    second = (value2 or "").strip()

    if operator.arity == 1:
        if not first:
            return ""
        template = _COMPARISON_NAMES.get(operator.type)
        if template:
            return template.format(value=first)
        return _capitalize(first)

    if not first or not second:
        return operator.category_name or ""
    if operator.type == "has_number_between":
        return f"{first} - {second}"
    if operator.category_name:
        return operator.category_name
    # intents: name the branch after the intent, not the threshold
    return _capitalize(first)
