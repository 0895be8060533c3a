"""Build a switch router from an ordered list of user rules.

Rules are folded in order into categories, exits and cases. Rules that
target the same branch name (compared case-insensitively) share one
category, each rule still gets its own case. A default branch is always
appended last: "Other" when there are rules, "All Responses" when there
are none.

Identity is carried over from the previous version of the node:

1. a branch keeps the uuid of the existing user category with the same
   name (case-insensitive);
2. failing that, it takes the uuid of the existing user category at the
   same position among branches, which is how a renamed branch keeps its
   connections. A rename and a delete-plus-insert look the same, so this
   is an approximation, but flows already saved depend on it;
3. otherwise fresh uuids are generated.

System categories (see categories.SYSTEM_CATEGORY_NAMES) never lend their
uuids to user branches. A "Timeout" or "No Response" category with cases
pointing at it was a user branch and is matched like one.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from flowsplit.models.flow_definition import Case, Category, Exit, Router
from flowsplit.models.rule import OperatorConfig, Rule
from flowsplit.operators import get_operator_config
from flowsplit.routers.categories import (
    ALL_RESPONSES_CATEGORY_NAME,
    DEFAULT_CATEGORY_NAME,
    category_key,
    find_exit,
    is_system_category,
)
from flowsplit.utils.identifiers import generate_uuid

logger = logging.getLogger(__name__)


@dataclass
class _PreviousRouter:
    """what we know about the router being replaced."""

    categories: list[Category]
    exits: list[Exit]
    cases: list[Case]
    user_categories: list[Category]
    system_uuids: set[str]
    system_exit_uuids: set[str]
    categories_by_uuid: dict[str, Category]
    rule_keys: set[str]


@dataclass
class _Fold:
    """accumulator threaded through the rules, local to one build."""

    created: dict[str, Category] = field(default_factory=dict)
    categories: list[Category] = field(default_factory=list)
    exits: list[Exit] = field(default_factory=list)
    cases: list[Case] = field(default_factory=list)
    claimed_categories: set[str] = field(default_factory=set)
    claimed_exits: set[str] = field(default_factory=set)
    claimed_cases: set[str] = field(default_factory=set)


def parse_case_arguments(rule: Rule, operator: OperatorConfig | None) -> list[str]:
    """Turn a rule's values into case arguments based on the operator arity.

    Single-operand values are split on whitespace, so "very good" becomes
    two arguments. Unknown operators get whatever values are present, split
    the same way.
    """
    if operator is None:
        return f"{rule.value1} {rule.value2}".split()

    if operator.arity == 0:
        return []

    if operator.arity == 1:
        return rule.value1.split()

    value1 = rule.value1.strip()
    value2 = rule.value2.strip()
    if value2:
        return [value1, value2]

    # both values packed into one string
    return value1.split()[:2]


def _is_user_branch(category: Category, case_targets: set[str]) -> bool:
    """Whether an existing category came from user rules.

    A "Timeout" or "No Response" branch that cases point at was named by the
    user, the real timeout branch never has cases. The default names are
    left out, rules naming them are routed into the default.
    """
    if not is_system_category(category.name):
        return True
    return category.uuid in case_targets and category.name not in (
        DEFAULT_CATEGORY_NAME,
        ALL_RESPONSES_CATEGORY_NAME,
    )


def _match_previous_category(
    key: str, position: int, previous: _PreviousRouter, fold: _Fold
) -> Category | None:
    """Find the existing user category a new branch should inherit from."""
    for candidate in previous.user_categories:
        if (
            category_key(candidate.name) == key
            and candidate.uuid not in fold.claimed_categories
        ):
            return candidate

    if position >= len(previous.user_categories):
        return None

    candidate = previous.user_categories[position]
    if candidate.uuid in previous.system_uuids:
        return None
    if candidate.uuid in fold.claimed_categories:
        return None
    # another rule claims this category by name, names win over positions
    if category_key(candidate.name) in previous.rule_keys:
        return None

    logger.debug(
        "branch %r inherits category %r at position %d", key, candidate.name, position
    )
    return candidate


def _resolve_branch(
    name: str,
    key: str,
    previous: _PreviousRouter,
    fold: _Fold,
) -> Category:
    """Create the category/exit pair for a branch seen for the first time."""
    # position among user branches, the default is not one of them
    match = _match_previous_category(key, len(fold.categories), previous, fold)

    if match is not None and match.uuid not in previous.system_uuids:
        category_uuid = match.uuid
    else:
        category_uuid = generate_uuid()

    existing_exit = find_exit(previous.exits, match.exit_uuid) if match else None
    if existing_exit is not None and (
        existing_exit.uuid in previous.system_exit_uuids
        or existing_exit.uuid in fold.claimed_exits
    ):
        existing_exit = None

    exit = Exit(
        uuid=existing_exit.uuid if existing_exit else generate_uuid(),
        destination_uuid=existing_exit.destination_uuid if existing_exit else None,
    )
    category = Category(uuid=category_uuid, name=name, exit_uuid=exit.uuid)

    fold.created[key] = category
    fold.categories.append(category)
    fold.exits.append(exit)
    fold.claimed_categories.add(category.uuid)
    fold.claimed_exits.add(exit.uuid)
    return category


def _resolve_case_uuid(
    index: int,
    rule: Rule,
    key: str,
    category: Category,
    previous: _PreviousRouter,
    fold: _Fold,
) -> str:
    """Reuse the uuid of the case this rule produced last time, if any."""
    if index < len(previous.cases):
        positional = previous.cases[index]
        if (
            positional.type == rule.operator_id
            and positional.category_uuid == category.uuid
            and positional.uuid not in fold.claimed_cases
        ):
            return positional.uuid

    for existing in previous.cases:
        if existing.uuid in fold.claimed_cases or existing.type != rule.operator_id:
            continue
        existing_category = previous.categories_by_uuid.get(existing.category_uuid)
        if existing_category and category_key(existing_category.name) == key:
            return existing.uuid

    return generate_uuid()


def _resolve_default(
    name: str, previous: _PreviousRouter
) -> tuple[Category, Exit]:
    """Resolve the catch-all branch, which may have gone by the other default name."""
    alternate = (
        ALL_RESPONSES_CATEGORY_NAME
        if name == DEFAULT_CATEGORY_NAME
        else DEFAULT_CATEGORY_NAME
    )

    existing_category = None
    for candidate_name in (name, alternate):
        existing_category = next(
            (c for c in previous.categories if c.name == candidate_name), None
        )
        if existing_category is not None:
            break

    existing_exit = (
        find_exit(previous.exits, existing_category.exit_uuid)
        if existing_category
        else None
    )

    exit = Exit(
        uuid=existing_exit.uuid if existing_exit else generate_uuid(),
        destination_uuid=existing_exit.destination_uuid if existing_exit else None,
    )
    category = Category(
        uuid=existing_category.uuid if existing_category else generate_uuid(),
        name=name,
        exit_uuid=exit.uuid,
    )
    return category, exit


def create_rules_router(
    operand: str,
    user_rules: list[Rule],
    existing_categories: list[Category] | None = None,
    existing_exits: list[Exit] | None = None,
    existing_cases: list[Case] | None = None,
    get_operator: Callable[[str], OperatorConfig | None] = get_operator_config,
) -> tuple[Router, list[Exit]]:
    """Build a switch router and its exits from user rules.

    Args:
        operand: expression the cases are evaluated against, e.g. "@input.text"
        user_rules: rules in display order, already stripped of empty rows
        existing_categories: categories of the router being replaced
        existing_exits: exits of the node being replaced
        existing_cases: cases of the router being replaced
        get_operator: operator registry lookup

    Returns:
        the router and the exits, in the same order as router.categories
    """
    existing_categories = existing_categories or []
    existing_exits = existing_exits or []
    existing_cases = existing_cases or []

    rules = [rule for rule in user_rules if rule.branch_name.strip()]
    if len(rules) != len(user_rules):
        logger.warning(
            "skipping %d rule(s) without a branch name", len(user_rules) - len(rules)
        )

    case_targets = {case.category_uuid for case in existing_cases}
    user_categories = [
        c for c in existing_categories if _is_user_branch(c, case_targets)
    ]
    system_categories = [
        c for c in existing_categories if not _is_user_branch(c, case_targets)
    ]
    previous = _PreviousRouter(
        categories=existing_categories,
        exits=existing_exits,
        cases=existing_cases,
        user_categories=user_categories,
        system_uuids={c.uuid for c in system_categories},
        system_exit_uuids={c.exit_uuid for c in system_categories},
        categories_by_uuid={c.uuid: c for c in existing_categories},
        rule_keys={category_key(rule.branch_name) for rule in rules},
    )

    default_name = DEFAULT_CATEGORY_NAME if rules else ALL_RESPONSES_CATEGORY_NAME
    default_category, default_exit = _resolve_default(default_name, previous)

    fold = _Fold()
    # rules naming the default branch route into it
    fold.created[category_key(default_name)] = default_category
    fold.claimed_categories.add(default_category.uuid)
    fold.claimed_exits.add(default_exit.uuid)

    for index, rule in enumerate(rules):
        key = category_key(rule.branch_name)
        category = fold.created.get(key)
        if category is None:
            category = _resolve_branch(rule.branch_name.strip(), key, previous, fold)

        operator = get_operator(rule.operator_id)
        if operator is None:
            logger.warning(
                "unknown operator %r, splitting its values into arguments",
                rule.operator_id,
            )

        case_uuid = _resolve_case_uuid(index, rule, key, category, previous, fold)
        fold.claimed_cases.add(case_uuid)
        fold.cases.append(
            Case(
                uuid=case_uuid,
                type=rule.operator_id,
                arguments=parse_case_arguments(rule, operator),
                category_uuid=category.uuid,
            )
        )

    categories = fold.categories + [default_category]
    exits = fold.exits + [default_exit]

    router = Router(
        operand=operand,
        cases=fold.cases,
        categories=categories,
        default_category_uuid=default_category.uuid,
    )
    return router, exits
