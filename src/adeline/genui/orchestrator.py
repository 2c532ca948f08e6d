"""GenUI Orchestrator - Adeline's composition "brain".

Turns a student's message plus context into a Journal Page, and watches
fine-grained interaction events for moments worth acknowledging.

Two composition policies are exposed as separate methods:
- compose_page_with_ai: fail-fast, raises on adapter or parse failures
- compose_page_with_ai_with_fallback: fail-safe, substitutes the
  deterministic baseline page and never raises

Every call is independent; the orchestrator keeps no per-request state.
"""

import logging
import math
from typing import Any, Callable, Optional

from adeline.genui.adapter import ContentGenerator, create_gemini_adapter
from adeline.genui.baseline import baseline_page
from adeline.genui.models import (
    ComposedUIPage,
    InteractionEvent,
    InteractionResponse,
    StudentContext,
)
from adeline.genui.prompts import build_compose_prompt
from adeline.genui.schema import ComponentRegistry, parse_composed_page

logger = logging.getLogger(__name__)


# Margin (percent) above which a pricing discovery is acknowledged
PROFIT_MARGIN_THRESHOLD = 50.0


# =============================================================================
# Discovery Dialogue Patterns
# =============================================================================


def _as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it isn't a JSON number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _acknowledge_margin_discovery(event: InteractionEvent) -> Optional[InteractionResponse]:
    """Pattern: acknowledge a strong profit margin found with the ledger slider."""
    new_price = _as_number(event.data.get("newPrice"))
    new_profit = _as_number(event.data.get("newProfit"))
    if new_price is None or new_profit is None or new_price == 0:
        return None

    margin = (new_profit / new_price) * 100
    if margin <= PROFIT_MARGIN_THRESHOLD:
        return None

    # TODO: Generate this acknowledgement with Gemini for variation.
    return InteractionResponse(
        response_type="acknowledgement",
        content={
            "dialogue": (
                f"Excellent! A profit margin of {margin:.0f}% is quite strong. "
                "That's a sign of a savvy merchant."
            ),
        },
    )


def _prompt_if_stuck(event: InteractionEvent) -> Optional[InteractionResponse]:
    """Pattern: nudge a student who hasn't touched the ledger in a while."""
    item_name = event.data.get("itemName")
    if not isinstance(item_name, str) or not item_name.strip():
        return None

    return InteractionResponse(
        response_type="dialogue",
        content={
            "dialogue": (
                f"Feeling stuck? Try lowering the price of the {item_name.strip()} "
                "to see how it affects your profit."
            ),
        },
    )


InteractionPattern = Callable[[InteractionEvent], Optional[InteractionResponse]]

_INTERACTION_PATTERNS: dict[tuple[str, str], InteractionPattern] = {
    ("dynamicLedger", "slider_change"): _acknowledge_margin_discovery,
    ("dynamicLedger", "no_change_for_30_seconds"): _prompt_if_stuck,
}


# =============================================================================
# Orchestrator
# =============================================================================


class GenUIOrchestrator:
    """Composes generative UI experiences for Adeline.

    Example:
        orchestrator = GenUIOrchestrator()
        page = await orchestrator.compose_page_with_ai_with_fallback(
            "I want to learn about money",
            StudentContext(user_id="u1", current_interests=["baking"]),
        )
    """

    def __init__(
        self,
        adapter: Optional[ContentGenerator] = None,
        *,
        registry: Optional[ComponentRegistry] = None,
    ):
        """Initialize the orchestrator.

        Args:
            adapter: Object with ``async generate_content(prompt) -> str``
                (default: GeminiAdapter from settings)
            registry: Component allow-list and contracts (default: from settings)
        """
        self.adapter = adapter if adapter is not None else create_gemini_adapter()
        self.registry = registry or ComponentRegistry.from_settings()

    def compose_page(self, message: str, context: StudentContext) -> ComposedUIPage:
        """Compose a page from static heuristics, without calling the model.

        Args:
            message: The student's message
            context: The student's learning context

        Returns:
            A baseline page with at least one component
        """
        logger.info(f"Composing baseline page for user {context.user_id}")
        return baseline_page(message, context)

    def build_prompt(self, message: str, context: StudentContext) -> str:
        """Build the composition prompt for a message and context."""
        return build_compose_prompt(message, context, self.registry)

    async def compose_page_with_ai(
        self,
        message: str,
        context: StudentContext,
    ) -> ComposedUIPage:
        """Compose a page with Gemini.

        Makes exactly one adapter call and no retries.

        Args:
            message: The student's message
            context: The student's learning context

        Returns:
            The page exactly as the model described it

        Raises:
            AdapterError: If the model call fails
            PageParseError: If the response is not JSON
            PageValidationError: If the response doesn't match the page contract
        """
        prompt = self.build_prompt(message, context)
        logger.info(f"Composing AI page for user {context.user_id}")

        try:
            response = await self.adapter.generate_content(prompt)
            return parse_composed_page(response, self.registry)
        except Exception as e:
            logger.error(f"Failed to compose page with AI: {e}")
            raise

    async def compose_page_with_ai_with_fallback(
        self,
        message: str,
        context: StudentContext,
    ) -> ComposedUIPage:
        """Compose a page with Gemini, falling back to the baseline page.

        Safe to call from any user-facing path; never raises.
        """
        try:
            return await self.compose_page_with_ai(message, context)
        except Exception as e:
            logger.warning(f"AI page composition failed, using fallback: {e}")
            return self.compose_page(message, context)

    def process_interaction_event(
        self,
        event: InteractionEvent,
        context: StudentContext,
    ) -> Optional[InteractionResponse]:
        """React to a single interaction event from the student.

        Args:
            event: The interaction event from the front end
            context: The student's current learning context

        Returns:
            A response when a discovery pattern matches, otherwise None
        """
        logger.debug(
            f"Processing interaction event {event.component_type}/{event.action} "
            f"for user {context.user_id}"
        )

        pattern = _INTERACTION_PATTERNS.get((event.component_type, event.action))
        if pattern is None:
            return None
        return pattern(event)
