"""Core data models for flowsplit."""

from flowsplit.models.flow_definition import (
    Case,
    Category,
    Exit,
    Node,
    Router,
    Timeout,
    Wait,
)
from flowsplit.models.rule import (
    CaseSpec,
    GroupRef,
    OperatorConfig,
    Rule,
)

__all__ = [
    # Flow definition
    "Case",
    "Category",
    "Exit",
    "Node",
    "Router",
    "Timeout",
    "Wait",
    # Builder inputs
    "CaseSpec",
    "GroupRef",
    "OperatorConfig",
    "Rule",
]
