"""Rebuild a router node from edited form data.

Reads a flow node and the editor form for it, rebuilds the router while
keeping existing uuids, and writes the updated node.

Usage:
    python -m flowsplit.scripts.reconcile_node node.json form.json
    python -m flowsplit.scripts.reconcile_node node.json form.json --wait -o out.json

The form JSON holds "rules" (rows with operator, value1, value2, category),
and optionally "operand", "result_name" and, with --wait, "timeout".
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from flowsplit.analysis.router_check import check_router, summarize_router
from flowsplit.config import configure_logging
from flowsplit.models.flow_definition import Node
from flowsplit.nodes.split import build_rules_node
from flowsplit.nodes.wait import build_wait_for_response

logger = logging.getLogger(__name__)


def reconcile(node: Node, form_data: dict, wait: bool = False) -> Node:
    """Rebuild the node's router from the form."""
    if wait:
        return build_wait_for_response(form_data, node)
    return build_rules_node(form_data, node)


def print_summary(node: Node) -> None:
    """Print the branches of the rebuilt router to stderr."""
    summary = summarize_router(node.router, node.exits)
    print(f"Operand: {summary.operand}", file=sys.stderr)
    for branch in summary.branches:
        marker = " (default)" if branch.is_default else ""
        cases = ", ".join(branch.case_types) or "-"
        print(f"  {branch.name}{marker}: {cases} -> {branch.destination_uuid}", file=sys.stderr)
    print(
        f"Cases: {summary.case_count}, connected exits: {summary.connected_exits}",
        file=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("node", type=Path, help="flow node JSON file")
    parser.add_argument("form", type=Path, help="editor form JSON file")
    parser.add_argument("--wait", action="store_true", help="treat the node as a wait for response")
    parser.add_argument("-o", "--output", type=Path, help="write the node here instead of stdout")
    parser.add_argument("--log-level", default=None, help="override FLOWSPLIT_LOG_LEVEL")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        node = Node.model_validate_json(args.node.read_text())
        form_data = json.loads(args.form.read_text())
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Error: could not read input: {e}", file=sys.stderr)
        return 1

    updated = reconcile(node, form_data, wait=args.wait)

    for issue in check_router(updated.router, updated.exits):
        logger.warning("%s: %s", issue.code, issue.message)

    output = updated.to_flow_json(indent=2)
    if args.output:
        args.output.write_text(output + "\n")
    else:
        print(output)

    print_summary(updated)
    return 0


if __name__ == "__main__":
    sys.exit(main())
