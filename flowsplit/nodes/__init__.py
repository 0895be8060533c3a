"""Node-level helpers layered on top of the router builders."""

from flowsplit.nodes.localization import (
    categories_to_localization_form,
    localization_form_to_categories,
    prune_localization,
)
from flowsplit.nodes.split import apply_router, build_rules_node
from flowsplit.nodes.wait import (
    apply_timeout,
    build_wait_for_response,
    get_timeout_seconds,
    parse_timeout_seconds,
    wait_for_response_to_form,
)

__all__ = [
    "apply_router",
    "build_rules_node",
    "apply_timeout",
    "build_wait_for_response",
    "get_timeout_seconds",
    "parse_timeout_seconds",
    "wait_for_response_to_form",
    "categories_to_localization_form",
    "localization_form_to_categories",
    "prune_localization",
]
