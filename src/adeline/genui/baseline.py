"""Deterministic baseline Journal Pages.

Used when no model call is wanted, and as the fallback when one fails.
Selection is a plain keyword heuristic over the student's message.
"""

import re

from adeline.genui.models import (
    ComposedUIPage,
    NextAction,
    StudentContext,
    UIComponent,
)


# Words that signal a money/economics flavoured request
FINANCE_KEYWORDS = frozenset({
    "money", "price", "prices", "pricing", "profit", "profits", "margin",
    "margins", "market", "marketplace", "economics", "economy", "finance",
    "business", "buy", "sell", "selling", "cost", "costs", "percent",
    "percentage", "percentages", "trade", "merchant", "budget", "coins",
})

_WORD_RE = re.compile(r"[a-z]+")


def is_finance_request(message: str) -> bool:
    """Check whether a message is about money, trade, or percentages."""
    return not FINANCE_KEYWORDS.isdisjoint(_WORD_RE.findall(message.lower()))


def marketplace_experience() -> ComposedUIPage:
    """The "medieval marketplace" page: a bakery ledger for profit margins."""
    return ComposedUIPage(
        dialogue=(
            "An excellent question! To truly understand money, let's step into a "
            "bustling medieval marketplace. You are a baker, and your goal is to sell "
            "your goods for a profit without being unfair to your customers."
        ),
        components=[
            UIComponent(
                type="handDrawnIllustration",
                props={
                    "src": "/doodles/marketplace.svg",
                    "alt": "A hand-drawn sketch of a medieval marketplace with stalls and people.",
                },
            ),
            UIComponent(
                type="dynamicLedger",
                props={
                    "scenario": "You are a merchant at a bustling medieval market trying to sell bread.",
                    "items": [
                        {"name": "Loaf of Bread", "wholesalePrice": 2, "retailPrice": 3},
                        {"name": "Baguette", "wholesalePrice": 1.5, "retailPrice": 2.5},
                        {"name": "Sweet Roll", "wholesalePrice": 1, "retailPrice": 2},
                    ],
                    "learningGoal": "Understand profit margins and percentages.",
                },
            ),
            UIComponent(
                type="guidingQuestion",
                props={
                    "text": "What happens to your profit margin when you raise the price of a Sweet Roll by 50%?",
                },
            ),
        ],
        next_actions=[
            NextAction(id="explore_ledger", label="Explore the Ledger", action="focus_tool(dynamicLedger)"),
            NextAction(id="ask_question", label="Ask a question", action="open_chat"),
            NextAction(id="move_on", label="I am finished", action="complete_activity"),
        ],
    )


def exploration_experience(context: StudentContext) -> ComposedUIPage:
    """An explorer's notebook page built around the student's interests."""
    if context.current_interests:
        focus = context.current_interests[0]
        question = (
            f"What is one thing about {focus} you have always wondered about? "
            "Sketch or narrate what you already know."
        )
    else:
        focus = "the world around you"
        question = (
            "What is something you noticed this week that made you curious? "
            "Sketch or narrate what you already know."
        )

    return ComposedUIPage(
        dialogue=(
            f"Let's open your explorer's notebook and wander into {focus} together. "
            "Every great discovery starts with a good question."
        ),
        components=[
            UIComponent(
                type="handDrawnIllustration",
                props={
                    "src": "/doodles/notebook.svg",
                    "alt": "A hand-drawn sketch of an open explorer's notebook with a compass.",
                },
            ),
            UIComponent(
                type="guidingQuestion",
                props={"text": question},
            ),
        ],
        next_actions=[
            NextAction(id="ask_question", label="Ask a question", action="open_chat"),
            NextAction(id="move_on", label="I am finished", action="complete_activity"),
        ],
    )


def baseline_page(message: str, context: StudentContext) -> ComposedUIPage:
    """Pick the deterministic page for a message."""
    if is_finance_request(message):
        return marketplace_experience()
    return exploration_experience(context)
