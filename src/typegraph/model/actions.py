# Copyright 2026 typegraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Action trees: the request/response shapes of exposed API operations."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field as _Field

from typegraph.model.types import FieldSpec

# ###############
# Public Interface
# ###############


class ActionRequest(BaseModel):
    """Query and body fields accepted by an action."""

    query: dict[str, FieldSpec] = _Field(default_factory=dict)
    body: dict[str, FieldSpec] = _Field(default_factory=dict)


class ActionResponse(BaseModel):
    """Response body of an action; ``None`` means no content."""

    body: FieldSpec | None = None


class Action(BaseModel):
    """One exposed operation of a resource."""

    resource: str
    name: str
    method: str = "GET"
    path: str = ""
    request: ActionRequest = _Field(default_factory=ActionRequest)
    response: ActionResponse = _Field(default_factory=ActionResponse)
    raises: list[str] = _Field(default_factory=list)

    @property
    def identifier(self) -> str:
        return f"{self.resource}.{self.name}"


ActionRequest.model_rebuild()
ActionResponse.model_rebuild()
Action.model_rebuild()
