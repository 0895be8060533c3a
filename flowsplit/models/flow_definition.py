"""Flow definition models for router nodes.

Field names follow the flow JSON exactly since the same documents are read
by the flow runtime.
"""

import json
from typing import Any, Literal

from pydantic import BaseModel


class Category(BaseModel):
    """a named branch of a router."""

    uuid: str
    name: str
    exit_uuid: str


class Exit(BaseModel):
    """the continuation of a category, pointing at the next node (if any)."""

    uuid: str
    destination_uuid: str | None = None


class Case(BaseModel):
    """a single condition that routes to a category when it matches."""

    uuid: str
    type: str  # operator id, e.g. "has_any_word"
    arguments: list[str] = []
    category_uuid: str


class Timeout(BaseModel):
    """timeout settings for a waiting router."""

    category_uuid: str
    seconds: int


class Wait(BaseModel):
    """wait settings for routers that pause for input."""

    type: str = "msg"
    timeout: Timeout | None = None


class Router(BaseModel):
    """A switch router: cases are evaluated in order against the operand,
    the first match picks a category, otherwise the default category is used.
    """

    type: Literal["switch"] = "switch"
    operand: str | None = None
    cases: list[Case] = []
    categories: list[Category] = []
    default_category_uuid: str | None = None
    result_name: str | None = None
    wait: Wait | None = None

    def find_category(self, uuid: str) -> Category | None:
        """Look up a category by uuid."""
        return next((c for c in self.categories if c.uuid == uuid), None)

    def find_category_by_name(self, name: str) -> Category | None:
        """Look up a category by its exact name."""
        return next((c for c in self.categories if c.name == name), None)


class Node(BaseModel):
    """a flow node; exits are kept in the same order as router categories."""

    uuid: str
    actions: list[dict[str, Any]] = []
    router: Router | None = None
    exits: list[Exit] = []

    def to_flow_json(self, indent: int | None = None) -> str:
        """Serialize to the flow JSON format.

        Unset router and wait options are left out. Actions are written as
        given and exits always carry destination_uuid (null when unconnected).
        """
        data = self.model_dump(mode="json", exclude_none=True)
        data["actions"] = list(self.actions)
        data["exits"] = [exit.model_dump(mode="json") for exit in self.exits]
        return json.dumps(data, indent=indent)
