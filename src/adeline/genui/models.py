"""Models for generative UI composition.

These define the "Journal Page" contract shared with the rendering layer.
Attributes are snake_case in Python and camelCase on the wire, so pages
serialize with ``model_dump(by_alias=True)`` into exactly the JSON shape
the front end expects.
"""

import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# Composed Page
# =============================================================================


class UIComponent(CamelModel):
    """A typed, data-only description of a widget on a Journal Page.

    Example:
        UIComponent(type="guidingQuestion", props={"text": "What changed?"})
    """

    type: str = Field(description="Component type from the shared allow-list")
    props: dict[str, Any] = Field(description="Properties required to render the component")


class NextAction(CamelModel):
    """A suggested next action for the student."""

    id: str
    label: str
    action: str = Field(description="Command executed when the action is triggered")


class ComposedUIPage(CamelModel):
    """A fully composed Journal Page experience."""

    model_config = ConfigDict(frozen=True)

    dialogue: str = Field(description="Adeline's introductory narration")
    components: list[UIComponent] = Field(description="Ordered components on the page")
    next_actions: list[NextAction] = Field(
        default_factory=list,
        description="Suggested actions for the student to take next",
    )


# =============================================================================
# Known component props
# =============================================================================


class HandDrawnIllustrationProps(CamelModel):
    """Props for ``handDrawnIllustration``."""

    src: str = Field(description="Path to a /doodles/*.svg sketch")
    alt: str


class LedgerItem(CamelModel):
    """One row of a merchant's ledger."""

    name: str
    wholesale_price: float
    retail_price: float

    @field_validator("wholesale_price", "retail_price", mode="before")
    @classmethod
    def _require_number(cls, v: Any) -> Any:
        # Finite JSON numbers only; pydantic would otherwise coerce "2" or True
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("price must be a number")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("price must be finite")
        return v


class DynamicLedgerProps(CamelModel):
    """Props for ``dynamicLedger``."""

    scenario: str
    items: list[LedgerItem] = Field(min_length=1)
    learning_goal: str


class GuidingQuestionProps(CamelModel):
    """Props for ``guidingQuestion``."""

    text: str = Field(min_length=1)


# =============================================================================
# Request context and interactions
# =============================================================================


class StudentContext(CamelModel):
    """The student's current learning context, supplied by the caller."""

    user_id: str
    current_interests: list[str] = Field(default_factory=list)
    recent_activity: list[Any] = Field(default_factory=list)


class InteractionEvent(CamelModel):
    """A single discrete manipulation of an already-rendered component.

    Example:
        InteractionEvent(
            component_type="dynamicLedger",
            action="slider_change",
            data={"itemName": "Loaf", "newPrice": 4.5, "newProfit": 2.5},
            timestamp=1718000000000,
        )
    """

    component_id: Optional[str] = None
    component_type: str
    action: str
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: float


class InteractionResponse(CamelModel):
    """Adeline's reaction to an interaction event.

    Smaller and more targeted than a full page composition.
    """

    response_type: Literal["dialogue", "newComponent", "acknowledgement"]
    content: dict[str, Any] = Field(default_factory=dict)
