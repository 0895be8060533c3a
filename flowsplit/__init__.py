"""flowsplit - reconcile edited routing rules into flow router nodes."""

from flowsplit.models import (
    Case,
    CaseSpec,
    Category,
    Exit,
    GroupRef,
    Node,
    OperatorConfig,
    Router,
    Rule,
)
from flowsplit.routers import (
    create_group_router,
    create_multi_category_router,
    create_or_preserve_category,
    create_rules_router,
    create_success_failure_router,
)
from flowsplit.analysis import assert_router_valid, check_router

__all__ = [
    # Flow definition
    "Case",
    "Category",
    "Exit",
    "Node",
    "Router",
    # Builder inputs
    "CaseSpec",
    "GroupRef",
    "OperatorConfig",
    "Rule",
    # Builders
    "create_group_router",
    "create_multi_category_router",
    "create_or_preserve_category",
    "create_rules_router",
    "create_success_failure_router",
    # Checks
    "assert_router_valid",
    "check_router",
]
