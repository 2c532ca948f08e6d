"""Adeline Generative UI layer.

This module composes Journal Pages from student messages, validates
model output against the component contracts shared with the renderer,
and reacts to interaction events from rendered components.
"""

from adeline.genui.adapter import (
    AdapterError,
    ContentGenerator,
    GeminiAdapter,
    create_gemini_adapter,
)
from adeline.genui.models import (
    ComposedUIPage,
    InteractionEvent,
    InteractionResponse,
    NextAction,
    StudentContext,
    UIComponent,
)
from adeline.genui.orchestrator import (
    PROFIT_MARGIN_THRESHOLD,
    GenUIOrchestrator,
)
from adeline.genui.schema import (
    ComponentRegistry,
    GenUIError,
    PageParseError,
    PageValidationError,
    parse_composed_page,
    strip_code_fence,
)

__all__ = [
    # Models
    "ComposedUIPage",
    "InteractionEvent",
    "InteractionResponse",
    "NextAction",
    "StudentContext",
    "UIComponent",
    # Schema
    "ComponentRegistry",
    "GenUIError",
    "PageParseError",
    "PageValidationError",
    "parse_composed_page",
    "strip_code_fence",
    # Adapter
    "AdapterError",
    "ContentGenerator",
    "GeminiAdapter",
    "create_gemini_adapter",
    # Orchestrator
    "GenUIOrchestrator",
    "PROFIT_MARGIN_THRESHOLD",
]
