"""Wait for response nodes: rules on the reply plus an optional timeout.

The timeout is an extra "No Response" branch layered on top of the rules
router. It is added or removed here, after the router is built, and its
uuid is kept across edits by name so connections from it survive.
"""

import logging
from typing import Any

from flowsplit import config
from flowsplit.forms.rules import cases_to_form_rules, extract_user_rules
from flowsplit.models.flow_definition import Category, Exit, Node, Router, Timeout, Wait
from flowsplit.nodes.split import apply_router
from flowsplit.routers.categories import (
    NO_RESPONSE_CATEGORY_NAME,
    category_key,
    find_exit,
)
from flowsplit.routers.rules import create_rules_router
from flowsplit.utils.identifiers import generate_uuid

logger = logging.getLogger(__name__)


def _is_timeout_category(category: Category, router: Router) -> bool:
    # a user branch that happens to be called "No Response" still has cases
    return category.name == NO_RESPONSE_CATEGORY_NAME and not any(
        case.category_uuid == category.uuid for case in router.cases
    )


def parse_timeout_seconds(value: Any) -> int | None:
    """Read a timeout from the form, which may be a number, string or option.

    A bare True (the timeout switched on without a duration) means the
    configured default.
    """
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("value")
    if value is True:
        return config.DEFAULT_TIMEOUT_SECONDS
    if value is None or value is False or value == "":
        return None
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        logger.warning("ignoring unreadable timeout %r", value)
        return None
    return seconds if seconds > 0 else None


def get_timeout_seconds(node: Node) -> int | None:
    """The node's timeout in seconds, or None when it waits forever."""
    if node.router and node.router.wait and node.router.wait.timeout:
        return node.router.wait.timeout.seconds
    return None


def apply_timeout(
    node: Node,
    seconds: int | None,
    existing_categories: list[Category] | None = None,
    existing_exits: list[Exit] | None = None,
) -> Node:
    """Add or remove the "No Response" branch and the router's wait timeout.

    existing_categories/existing_exits describe the node before the edit and
    default to the node's own; a previous "No Response" branch found there
    keeps its uuids and destination. When the rules already have a branch
    named "No Response", the timeout points at it instead of adding another.
    """
    router = node.router or Router()
    if existing_categories is None:
        existing_categories = router.categories
    if existing_exits is None:
        existing_exits = node.exits

    removed = [c for c in router.categories if _is_timeout_category(c, router)]
    removed_uuids = {c.uuid for c in removed}
    removed_exits = {c.exit_uuid for c in removed}
    categories = [c for c in router.categories if c.uuid not in removed_uuids]
    exits = [exit for exit in node.exits if exit.uuid not in removed_exits]

    wait_type = router.wait.type if router.wait else "msg"
    timeout = None

    # a user branch already called "No Response" doubles as the timeout branch
    same_named = next(
        (
            c
            for c in categories
            if category_key(c.name) == category_key(NO_RESPONSE_CATEGORY_NAME)
        ),
        None,
    )

    if seconds and same_named is not None:
        logger.debug("timeout routed to existing branch %r", same_named.name)
        timeout = Timeout(category_uuid=same_named.uuid, seconds=seconds)
    elif seconds:
        claimed = {c.uuid for c in categories}
        previous = next(
            (
                c
                for c in existing_categories
                if c.name == NO_RESPONSE_CATEGORY_NAME and c.uuid not in claimed
            ),
            None,
        )
        previous_exit = (
            find_exit(existing_exits, previous.exit_uuid) if previous else None
        )

        exit = Exit(
            uuid=previous_exit.uuid if previous_exit else generate_uuid(),
            destination_uuid=previous_exit.destination_uuid if previous_exit else None,
        )
        category = Category(
            uuid=previous.uuid if previous else generate_uuid(),
            name=NO_RESPONSE_CATEGORY_NAME,
            exit_uuid=exit.uuid,
        )
        categories.append(category)
        exits.append(exit)
        timeout = Timeout(category_uuid=category.uuid, seconds=seconds)

    router = router.model_copy(
        update={
            "categories": categories,
            "wait": Wait(type=wait_type, timeout=timeout),
        }
    )
    return node.model_copy(update={"router": router, "exits": exits})


def build_wait_for_response(form_data: dict[str, Any], original: Node) -> Node:
    """Rebuild a wait for response node from its editor form."""
    previous = original.router
    existing_categories = previous.categories if previous else []

    router, exits = create_rules_router(
        config.DEFAULT_OPERAND,
        extract_user_rules(form_data),
        existing_categories,
        original.exits,
        previous.cases if previous else [],
    )
    if previous and previous.wait:
        router = router.model_copy(update={"wait": previous.wait})

    result_name = form_data.get("result_name") or config.DEFAULT_RESULT_NAME
    node = apply_router(original, router, exits, result_name)
    return apply_timeout(
        node,
        parse_timeout_seconds(form_data.get("timeout")),
        existing_categories,
        original.exits,
    )


def wait_for_response_to_form(node: Node) -> dict[str, Any]:
    """Editor form data for a wait for response node."""
    router = node.router
    return {
        "uuid": node.uuid,
        "rules": cases_to_form_rules(router),
        "timeout": get_timeout_seconds(node),
        "result_name": (router.result_name if router else None)
        or config.DEFAULT_RESULT_NAME,
    }
