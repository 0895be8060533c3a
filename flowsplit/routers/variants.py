"""Routers with fixed or enumerable branch sets.

These builders do not merge rules: every branch they create is already a
distinct identity, so each one goes straight through
create_or_preserve_category.
"""

import logging
from collections.abc import Callable

from flowsplit.models.flow_definition import Case, Category, Exit, Router
from flowsplit.models.rule import CaseSpec, GroupRef
from flowsplit.routers.categories import (
    DEFAULT_CATEGORY_NAME,
    FAILURE_CATEGORY_NAME,
    SUCCESS_CATEGORY_NAME,
    PreservedCategory,
    category_key,
    create_or_preserve_category,
)
from flowsplit.utils.identifiers import generate_uuid

logger = logging.getLogger(__name__)


GROUPS_OPERAND = "@contact.groups"
ERROR_SENTINEL = "<ERROR>"


class _RouterParts:
    """collects categories, exits and cases in output order."""

    def __init__(self) -> None:
        self.categories: list[Category] = []
        self.exits: list[Exit] = []
        self.cases: list[Case] = []

    def add(self, preserved: PreservedCategory) -> Category:
        self.categories.append(preserved.category)
        self.exits.append(preserved.exit)
        if preserved.case is not None:
            self.cases.append(preserved.case)
        return preserved.category

    def unclaimed(self, categories: list[Category]) -> list[Category]:
        """existing categories not already taken by this build."""
        taken = {category.uuid for category in self.categories}
        return [category for category in categories if category.uuid not in taken]

    def add_case(
        self, case_spec: CaseSpec, category: Category, existing_cases: list[Case]
    ) -> Case:
        """adds another case to a category already in the build.

        An existing case on that category with the same type and first
        argument keeps its uuid, unless this build already used it.
        """
        taken = {case.uuid for case in self.cases}
        existing = next(
            (
                case
                for case in existing_cases
                if case.uuid not in taken
                and case.category_uuid == category.uuid
                and case.type == case_spec.type
                and case.arguments[:1] == case_spec.arguments[:1]
            ),
            None,
        )
        case = Case(
            uuid=existing.uuid if existing else generate_uuid(),
            type=case_spec.type,
            arguments=list(case_spec.arguments),
            category_uuid=category.uuid,
        )
        self.cases.append(case)
        return case


def create_group_router(
    groups: list[GroupRef],
    existing_categories: list[Category] | None = None,
    existing_exits: list[Exit] | None = None,
    existing_cases: list[Case] | None = None,
    result_name: str | None = None,
) -> tuple[Router, list[Exit]]:
    """Route contacts by group membership, one branch per group plus "Other".

    Group names are compared ignoring case: groups sharing a name share a
    branch, and a group called "Other" gets its case on the default branch.
    """
    existing_categories = existing_categories or []
    existing_exits = existing_exits or []
    existing_cases = existing_cases or []

    parts = _RouterParts()
    by_key: dict[str, Category] = {}
    in_default: list[GroupRef] = []
    seen_groups: set[str] = set()
    for group in groups:
        if group.uuid in seen_groups:
            continue
        seen_groups.add(group.uuid)

        key = category_key(group.name)
        case_spec = CaseSpec(type="has_group", arguments=[group.uuid, group.name])
        if key == category_key(DEFAULT_CATEGORY_NAME):
            in_default.append(group)
        elif key in by_key:
            # groups sharing a name share a branch
            parts.add_case(case_spec, by_key[key], existing_cases)
        else:
            by_key[key] = parts.add(
                create_or_preserve_category(
                    group.name.strip(),
                    parts.unclaimed(existing_categories),
                    existing_exits,
                    existing_cases,
                    case_spec,
                )
            )

    other = parts.add(
        create_or_preserve_category(
            DEFAULT_CATEGORY_NAME, parts.unclaimed(existing_categories), existing_exits
        )
    )
    # a group called "Other" routes into the default
    for group in in_default:
        parts.add_case(
            CaseSpec(type="has_group", arguments=[group.uuid, group.name]),
            other,
            existing_cases,
        )

    router = Router(
        operand=GROUPS_OPERAND,
        cases=parts.cases,
        categories=parts.categories,
        default_category_uuid=other.uuid,
        result_name=result_name or None,
    )
    return router, parts.exits


def create_success_failure_router(
    operand: str,
    case_spec: CaseSpec,
    existing_categories: list[Category] | None = None,
    existing_exits: list[Exit] | None = None,
    existing_cases: list[Case] | None = None,
) -> tuple[Router, list[Exit]]:
    """Router for calls that either succeed or fail.

    "Success" carries the given case, "Failure" has none and is the default.
    """
    existing_categories = existing_categories or []
    existing_exits = existing_exits or []
    existing_cases = existing_cases or []

    parts = _RouterParts()
    parts.add(
        create_or_preserve_category(
            SUCCESS_CATEGORY_NAME,
            existing_categories,
            existing_exits,
            existing_cases,
            case_spec,
        )
    )
    failure = parts.add(
        create_or_preserve_category(
            FAILURE_CATEGORY_NAME, parts.unclaimed(existing_categories), existing_exits
        )
    )

    router = Router(
        operand=operand,
        cases=parts.cases,
        categories=parts.categories,
        default_category_uuid=failure.uuid,
    )
    return router, parts.exits


def create_multi_category_router(
    operand: str,
    category_names: list[str],
    case_factory: Callable[[str], CaseSpec],
    existing_categories: list[Category] | None = None,
    existing_exits: list[Exit] | None = None,
    existing_cases: list[Case] | None = None,
) -> tuple[Router, list[Exit]]:
    """Router with caller-named categories followed by "Other" and "Failure".

    Each named category gets the case built by case_factory(name). "Other"
    is the default, "Failure" matches the "<ERROR>" output of the step that
    produced the operand. Blank names, repeats and names equal to one of the
    fixed branches (ignoring case) are skipped.
    """
    existing_categories = existing_categories or []
    existing_exits = existing_exits or []
    existing_cases = existing_cases or []

    parts = _RouterParts()
    # the fixed branches count as seen, names colliding with them are skipped
    seen = {category_key(DEFAULT_CATEGORY_NAME), category_key(FAILURE_CATEGORY_NAME)}
    for raw_name in category_names:
        name = raw_name.strip()
        if not name or category_key(name) in seen:
            logger.warning("skipping blank or repeated category name %r", raw_name)
            continue
        seen.add(category_key(name))
        parts.add(
            create_or_preserve_category(
                name,
                parts.unclaimed(existing_categories),
                existing_exits,
                existing_cases,
                case_factory(name),
            )
        )

    other = parts.add(
        create_or_preserve_category(
            DEFAULT_CATEGORY_NAME, parts.unclaimed(existing_categories), existing_exits
        )
    )
    parts.add(
        create_or_preserve_category(
            FAILURE_CATEGORY_NAME,
            parts.unclaimed(existing_categories),
            existing_exits,
            existing_cases,
            CaseSpec(type="has_only_text", arguments=[ERROR_SENTINEL]),
        )
    )

    router = Router(
        operand=operand,
        cases=parts.cases,
        categories=parts.categories,
        default_category_uuid=other.uuid,
    )
    return router, parts.exits
