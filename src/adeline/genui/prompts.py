"""Prompt construction for Journal Page composition."""

import json

from adeline.genui.models import StudentContext
from adeline.genui.schema import ComponentRegistry


COMPOSE_PAGE_TEMPLATE = """You are Adeline, an AI tutor composing an interactive, personalized learning experience.

STUDENT MESSAGE: "{message}"

STUDENT CONTEXT:
- Interests: {interests}
- Recent Activity: {recent_activity}

YOUR TASK:
Compose a rich, interactive "Journal Page" learning experience that responds to the student's message.

AVAILABLE COMPONENT TYPES:
{component_types}

DESIGN PRINCIPLES:
- Connect to student's interests ({interests})
- Use narrative, not lectures ("Let's step into a medieval marketplace...")
- Make it feel like an adventure, not homework
- Multi-component experiences are encouraged (image + tool + question)
- Keep dialogue warm but concise (2-3 sentences max)

RESPONSE FORMAT:
Return ONLY valid JSON matching this structure:
{{
  "dialogue": "Your warm 2-3 sentence introduction",
  "components": [
{component_examples}
  ],
  "nextActions": [
    {{ "id": "explore", "label": "Explore More", "action": "explore_tool" }},
    {{ "id": "ask", "label": "Ask a Question", "action": "open_chat" }}
  ]
}}

IMPORTANT:
- Return ONLY the JSON, no markdown, no explanations
- Only use the component types listed above
{component_rules}- Make scenarios engaging and relevant to student interests
- Use Charlotte Mason principles (discovery, narration, real-world connections)"""


# Extra instructions for component types the model often gets wrong
COMPONENT_RULES = {
    "dynamicLedger": "Ensure all items in dynamicLedger have name, wholesalePrice, and retailPrice",
}


def format_interests(context: StudentContext) -> str:
    if not context.current_interests:
        return "general learning"
    return ", ".join(context.current_interests)


def format_recent_activity(context: StudentContext) -> str:
    if not context.recent_activity:
        return "None"
    return json.dumps(context.recent_activity, default=str)


def build_compose_prompt(
    message: str,
    context: StudentContext,
    registry: ComponentRegistry,
) -> str:
    """Build the prompt asking the model for a Journal Page.

    Args:
        message: The student's message, embedded verbatim
        context: The student's learning context
        registry: Component types the model may use

    Returns:
        The full prompt text
    """
    component_examples = ",\n".join(
        f'    {{ "type": "{component_type}", "props": {{...}} }}'
        for component_type in registry.allowed_types
    )

    component_rules = "".join(
        f"- {COMPONENT_RULES[component_type]}\n"
        for component_type in registry.allowed_types
        if component_type in COMPONENT_RULES
    )

    return COMPOSE_PAGE_TEMPLATE.format(
        message=message,
        interests=format_interests(context),
        recent_activity=format_recent_activity(context),
        component_types=registry.describe(),
        component_examples=component_examples,
        component_rules=component_rules,
    )
