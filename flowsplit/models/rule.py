"""Input models for the router builders."""

from typing import Literal

from pydantic import BaseModel


class OperatorConfig(BaseModel):
    """An operator that can be used in a rule.

    arity is how many values the operator takes. Zero-operand operators
    carry a category_name that is used as the branch name by default.
    """

    type: str
    name: str
    arity: Literal[0, 1, 2]
    category_name: str | None = None
    visibility: Literal["visible", "hidden"] = "visible"
    feature: str | None = None  # feature flag required to offer this operator


class Rule(BaseModel):
    """a user-authored rule: operator, its value(s) and the target branch."""

    operator_id: str
    value1: str = ""
    value2: str = ""
    branch_name: str


class CaseSpec(BaseModel):
    """operator and arguments for a case the caller wants on a category."""

    type: str
    arguments: list[str] = []


class GroupRef(BaseModel):
    """a contact group selected for a group split."""

    uuid: str
    name: str
