"""Write router builder results back into flow nodes."""

from typing import Any

from flowsplit import config
from flowsplit.forms.rules import extract_user_rules
from flowsplit.models.flow_definition import Exit, Node, Router
from flowsplit.routers.rules import create_rules_router


def apply_router(
    original: Node,
    router: Router,
    exits: list[Exit],
    result_name: str | None = None,
) -> Node:
    """Return a copy of the node with the new router and exits.

    The node's uuid and actions are kept. A non-blank result_name is
    stripped and stored on the router.
    """
    if result_name and result_name.strip():
        router = router.model_copy(update={"result_name": result_name.strip()})
    return original.model_copy(update={"router": router, "exits": list(exits)})


def build_rules_node(
    form_data: dict[str, Any],
    original: Node,
    operand: str | None = None,
) -> Node:
    """Rebuild a rules split from its editor form.

    The operand comes from the argument, then the form's "operand" field,
    then the configured default.
    """
    form_operand = form_data.get("operand")
    if not operand:
        operand = (
            form_operand.strip() if isinstance(form_operand, str) else ""
        ) or config.DEFAULT_OPERAND

    previous = original.router
    router, exits = create_rules_router(
        operand,
        extract_user_rules(form_data),
        previous.categories if previous else [],
        original.exits,
        previous.cases if previous else [],
    )
    return apply_router(original, router, exits, form_data.get("result_name"))
