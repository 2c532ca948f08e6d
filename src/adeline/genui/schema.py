"""Schema validation for composed pages.

Turns the raw text returned by the model into a validated ComposedUIPage:
strip Markdown code fences, parse JSON, check the page shape, then check
each component against its type's props contract.

The set of component types is shared with the rendering layer, so the
allow-list is configuration rather than a constant here. Types without a
registered contract pass through with untyped props.
"""

import json
import logging
import re
from typing import Iterable, Optional

from pydantic import BaseModel, ValidationError

from adeline.core.config import DEFAULT_COMPONENT_TYPES, Settings, get_settings
from adeline.genui.models import (
    ComposedUIPage,
    DynamicLedgerProps,
    GuidingQuestionProps,
    HandDrawnIllustrationProps,
    UIComponent,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Errors
# =============================================================================


class GenUIError(ValueError):
    """Base error for generative UI composition failures."""


class PageParseError(GenUIError):
    """The model response was not valid JSON after fence stripping."""


class PageValidationError(GenUIError):
    """The parsed response does not match the ComposedUIPage contract."""


# =============================================================================
# Component contracts
# =============================================================================


KNOWN_CONTRACTS: dict[str, type[BaseModel]] = {
    "handDrawnIllustration": HandDrawnIllustrationProps,
    "dynamicLedger": DynamicLedgerProps,
    "guidingQuestion": GuidingQuestionProps,
}

# (props hint, use for) pairs shown to the model
COMPONENT_HINTS: dict[str, tuple[str, str]] = {
    "handDrawnIllustration": (
        "{ src: string (path to /doodles/*.svg), alt: string }",
        "Visual context, setting the scene",
    ),
    "dynamicLedger": (
        "{\n"
        "     scenario: string (engaging scenario description),\n"
        "     items: Array<{ name: string, wholesalePrice: number, retailPrice: number }>,\n"
        "     learningGoal: string\n"
        "   }",
        "Math concepts (fractions, percentages, profit margins, ratios)",
    ),
    "guidingQuestion": (
        "{ text: string }",
        "Prompting reflection, discovery-based learning",
    ),
}


class ComponentRegistry:
    """Allow-list of component types plus per-type props contracts.

    Example:
        registry = ComponentRegistry(["dynamicLedger", "guidingQuestion"])
        registry.validate_component(component)  # raises PageValidationError
    """

    def __init__(
        self,
        allowed_types: Optional[Iterable[str]] = None,
        contracts: Optional[dict[str, type[BaseModel]]] = None,
    ):
        """Initialize the registry.

        Args:
            allowed_types: Component types the renderer understands
                (default: the three built-in Journal Page components)
            contracts: Props models keyed by component type
        """
        if allowed_types is None:
            allowed_types = DEFAULT_COMPONENT_TYPES
        self.allowed_types: tuple[str, ...] = tuple(allowed_types)
        self.contracts = dict(KNOWN_CONTRACTS if contracts is None else contracts)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ComponentRegistry":
        """Build a registry from the configured allow-list."""
        settings = settings or get_settings()
        return cls(settings.genui_component_types)

    def is_allowed(self, component_type: str) -> bool:
        return component_type in self.allowed_types

    def contract_for(self, component_type: str) -> Optional[type[BaseModel]]:
        return self.contracts.get(component_type)

    def validate_component(self, component: UIComponent, index: int = 0) -> None:
        """Check a component's props against its type's contract.

        Props are validated, not replaced, so the page keeps exactly what
        the model produced.

        Raises:
            PageValidationError: If a known type's props break its contract
        """
        contract = self.contract_for(component.type)
        if contract is None:
            if not self.is_allowed(component.type):
                logger.debug(f"Passing through unknown component type: {component.type}")
            return

        try:
            contract.model_validate(component.props)
        except ValidationError as e:
            raise PageValidationError(
                f"Invalid props for {component.type} component at index {index}: {e}"
            ) from e

    def describe(self) -> str:
        """Describe the allowed component types for a prompt."""
        lines = []
        for number, component_type in enumerate(self.allowed_types, start=1):
            props_hint, use_for = COMPONENT_HINTS.get(
                component_type, ("{ ... }", "See the rendering layer")
            )
            lines.append(f"{number}. {component_type}")
            lines.append(f"   Props: {props_hint}")
            lines.append(f"   Use for: {use_for}")
            lines.append("")
        return "\n".join(lines).rstrip()


# =============================================================================
# Parsing
# =============================================================================


_WRAPPING_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n?(?P<body>.*?)\s*```\s*$", re.DOTALL)
_FENCED_BLOCK_RE = re.compile(r"```[\w-]*[ \t]*\n?(?P<body>.*?)```", re.DOTALL)
_OPENING_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n?")


def _is_json(text: str) -> bool:
    try:
        json.loads(text)
    except json.JSONDecodeError:
        return False
    return True


def strip_code_fence(text: str) -> str:
    """Remove Markdown code fencing around a model response.

    Handles ```json ... ```, bare ``` ... ```, and a truncated response
    that opens a fence but never closes it. A fence wrapping the whole
    response is matched up to its final ```, so backticks inside JSON
    strings survive. Text that already parses as JSON is returned as is;
    a fenced block inside surrounding prose is only extracted otherwise.
    """
    stripped = text.strip()

    if stripped.startswith("```"):
        match = _WRAPPING_FENCE_RE.match(stripped)
        if match:
            return match.group("body").strip()
        match = _FENCED_BLOCK_RE.match(stripped)
        if match:
            return match.group("body").strip()
        return _OPENING_FENCE_RE.sub("", stripped, count=1).strip()

    if "```" in stripped and not _is_json(stripped):
        match = _FENCED_BLOCK_RE.search(stripped)
        if match:
            return match.group("body").strip()

    return stripped


def parse_composed_page(
    text: str,
    registry: Optional[ComponentRegistry] = None,
) -> ComposedUIPage:
    """Parse a raw model response into a validated ComposedUIPage.

    Args:
        text: Raw response text, optionally fenced in Markdown
        registry: Component registry (default: built-in contracts)

    Returns:
        The page, mirroring the parsed JSON

    Raises:
        PageParseError: If the text is not valid JSON
        PageValidationError: If the JSON does not match the page contract
    """
    registry = registry or ComponentRegistry()

    try:
        data = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise PageParseError(f"Failed to parse JSON response: {e}") from e

    if not isinstance(data, dict):
        raise PageValidationError(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    try:
        page = ComposedUIPage.model_validate(data)
    except ValidationError as e:
        raise PageValidationError(f"Failed to validate composed page: {e}") from e

    for index, component in enumerate(page.components):
        registry.validate_component(component, index)

    return page
