"""Router builders that reconcile edited branches with the saved node."""

from flowsplit.routers.categories import (
    ALL_RESPONSES_CATEGORY_NAME,
    DEFAULT_CATEGORY_NAME,
    SYSTEM_CATEGORY_NAMES,
    PreservedCategory,
    create_or_preserve_category,
    generate_default_category_name,
    is_system_category,
)
from flowsplit.routers.rules import create_rules_router, parse_case_arguments
from flowsplit.routers.variants import (
    create_group_router,
    create_multi_category_router,
    create_success_failure_router,
)

__all__ = [
    # Identity and naming
    "ALL_RESPONSES_CATEGORY_NAME",
    "DEFAULT_CATEGORY_NAME",
    "SYSTEM_CATEGORY_NAMES",
    "PreservedCategory",
    "create_or_preserve_category",
    "generate_default_category_name",
    "is_system_category",
    # Builders
    "create_rules_router",
    "parse_case_arguments",
    "create_group_router",
    "create_multi_category_router",
    "create_success_failure_router",
]
