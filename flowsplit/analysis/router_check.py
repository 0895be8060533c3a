"""Structural checks and summaries for switch routers.

The builders always produce consistent routers, but nodes loaded from
disk or edited by hand may not be. These helpers report what is wrong
instead of failing on the first problem.
"""

from collections import Counter
from dataclasses import dataclass, field

from flowsplit.models.flow_definition import Exit, Router


@dataclass
class RouterIssue:
    """A single structural problem found on a router."""

    code: str  # e.g. "exit_count", "dangling_case"
    message: str


@dataclass
class BranchSummary:
    """One branch of a router with its cases and where it leads."""

    name: str
    category_uuid: str
    case_types: list[str] = field(default_factory=list)
    destination_uuid: str | None = None
    is_default: bool = False


@dataclass
class RouterSummary:
    """Summary of a router's branches."""

    operand: str | None
    branches: list[BranchSummary]
    case_count: int = 0
    connected_exits: int = 0
    has_timeout: bool = False


class RouterInvariantError(ValueError):
    """Raised when a router breaks the category/exit/case invariants."""

    def __init__(self, issues: list[RouterIssue]) -> None:
        self.issues = issues
        details = "; ".join(issue.message for issue in issues)
        super().__init__(f"router has {len(issues)} issue(s): {details}")


def check_router(router: Router, exits: list[Exit]) -> list[RouterIssue]:
    """Check the router against its exits.

    Covers exit/category pairing and order, cases and default pointing at
    missing categories, repeated category names (case-insensitive) and
    repeated uuids.
    """
    issues: list[RouterIssue] = []
    category_uuids = {category.uuid for category in router.categories}

    if len(exits) != len(router.categories):
        issues.append(RouterIssue(
            code="exit_count",
            message=f"{len(router.categories)} categories but {len(exits)} exits",
        ))

    for index, category in enumerate(router.categories):
        if index < len(exits) and exits[index].uuid != category.exit_uuid:
            issues.append(RouterIssue(
                code="exit_order",
                message=f"category {category.name!r} is not paired with exit {index}",
            ))

    for case in router.cases:
        if case.category_uuid not in category_uuids:
            issues.append(RouterIssue(
                code="dangling_case",
                message=f"case {case.uuid} points at missing category {case.category_uuid}",
            ))

    if router.default_category_uuid and router.default_category_uuid not in category_uuids:
        issues.append(RouterIssue(
            code="dangling_default",
            message=f"default category {router.default_category_uuid} is missing",
        ))

    if router.wait and router.wait.timeout:
        if router.wait.timeout.category_uuid not in category_uuids:
            issues.append(RouterIssue(
                code="dangling_timeout",
                message=f"timeout category {router.wait.timeout.category_uuid} is missing",
            ))

    names = Counter(category.name.strip().lower() for category in router.categories)
    for name, count in names.items():
        if count > 1:
            issues.append(RouterIssue(
                code="duplicate_name",
                message=f"{count} categories named {name!r}",
            ))

    uuids = Counter(
        [category.uuid for category in router.categories]
        + [exit.uuid for exit in exits]
        + [case.uuid for case in router.cases]
    )
    for uuid, count in uuids.items():
        if count > 1:
            issues.append(RouterIssue(
                code="duplicate_uuid",
                message=f"uuid {uuid} is used {count} times",
            ))

    return issues


def assert_router_valid(router: Router, exits: list[Exit]) -> None:
    """Raise RouterInvariantError if check_router finds anything."""
    issues = check_router(router, exits)
    if issues:
        raise RouterInvariantError(issues)


def summarize_router(router: Router, exits: list[Exit]) -> RouterSummary:
    """Summarize branches, their cases and their destinations."""
    exits_by_uuid = {exit.uuid: exit for exit in exits}

    branches: list[BranchSummary] = []
    for category in router.categories:
        exit = exits_by_uuid.get(category.exit_uuid)
        branches.append(BranchSummary(
            name=category.name,
            category_uuid=category.uuid,
            case_types=[
                case.type for case in router.cases
                if case.category_uuid == category.uuid
            ],
            destination_uuid=exit.destination_uuid if exit else None,
            is_default=category.uuid == router.default_category_uuid,
        ))

    return RouterSummary(
        operand=router.operand,
        branches=branches,
        case_count=len(router.cases),
        connected_exits=sum(1 for exit in exits if exit.destination_uuid),
        has_timeout=bool(router.wait and router.wait.timeout),
    )
