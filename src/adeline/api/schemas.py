"""Pydantic schemas for API request/response models."""

from typing import Optional

from pydantic import Field

from adeline.genui.models import (
    CamelModel,
    InteractionEvent,
    InteractionResponse,
    StudentContext,
)


def _anonymous_context() -> StudentContext:
    return StudentContext(user_id="anonymous")


# GenUI schemas
class ComposeRequest(CamelModel):
    """Request to compose a Journal Page."""

    message: str = Field(min_length=1)
    context: StudentContext = Field(default_factory=_anonymous_context)
    strict: bool = False  # surface AI failures instead of falling back


class InteractionRequest(CamelModel):
    """A student interaction forwarded from the front end."""

    event: InteractionEvent
    context: StudentContext = Field(default_factory=_anonymous_context)


class InteractionResult(CamelModel):
    """Adeline's reaction, if any, to an interaction."""

    response: Optional[InteractionResponse] = None


class ComponentTypesResponse(CamelModel):
    """Component types shared with the rendering layer."""

    component_types: list[str]
