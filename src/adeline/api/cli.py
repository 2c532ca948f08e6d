"""Adeline Command Line Interface.

Composes Journal Pages and replays interaction events from the terminal,
for trying prompts and diagnosing model output without the front end.
"""

import asyncio
import json
import logging
import time
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from adeline.core.logging import configure_logging
from adeline.genui.models import ComposedUIPage, InteractionEvent, StudentContext
from adeline.genui.orchestrator import GenUIOrchestrator
from adeline.genui.schema import GenUIError

app = typer.Typer(
    name="adeline",
    help="Adeline - compose interactive Journal Pages from a student's message",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def _get_orchestrator() -> GenUIOrchestrator:
    """Get orchestrator configured from settings."""
    return GenUIOrchestrator()


def _print_page(page: ComposedUIPage) -> None:
    """Render a composed page for the terminal."""
    console.print(Panel(escape(page.dialogue), title="Adeline", border_style="blue"))

    components = Table(title="Components")
    components.add_column("#", style="dim")
    components.add_column("Type", style="bold")
    components.add_column("Props")
    for number, component in enumerate(page.components, start=1):
        components.add_row(str(number), escape(component.type), escape(json.dumps(component.props)))
    console.print(components)

    if page.next_actions:
        console.print("[bold]Next Actions:[/bold]")
        for action in page.next_actions:
            console.print(f"  • {escape(action.label)} [dim]({escape(action.action)})[/dim]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for every command."""
    configure_logging(level=logging.DEBUG if verbose else None, quiet=not verbose)


@app.command()
def compose(
    message: str = typer.Argument(..., help="The student's message"),
    interest: Optional[list[str]] = typer.Option(
        None, "--interest", "-i", help="Student interest (repeatable)"
    ),
    user: str = typer.Option("cli-user", "--user", "-u", help="Student user ID"),
    strict: bool = typer.Option(
        False, "--strict", help="Fail instead of falling back when the AI call fails"
    ),
    offline: bool = typer.Option(
        False, "--offline", help="Use the deterministic baseline page only"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the page as JSON"),
):
    """Compose a Journal Page for a message.

    Examples:
        adeline compose "I want to learn about money"
        adeline compose "Teach me fractions" -i pizza -i minecraft --strict
        adeline compose "Tell me about money" --offline --json
    """
    if not message.strip():
        raise typer.BadParameter("Message must not be empty", param_hint="MESSAGE")

    context = StudentContext(user_id=user, current_interests=interest or [])
    orchestrator = _get_orchestrator()
    start_time = time.time()

    if offline:
        page = orchestrator.compose_page(message, context)
    elif strict:
        try:
            page = asyncio.run(orchestrator.compose_page_with_ai(message, context))
        except GenUIError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)
    else:
        page = asyncio.run(
            orchestrator.compose_page_with_ai_with_fallback(message, context)
        )

    logger.debug(f"Composed page in {(time.time() - start_time) * 1000:.0f}ms")

    if as_json:
        typer.echo(page.model_dump_json(by_alias=True, indent=2))
    else:
        _print_page(page)


@app.command()
def interact(
    component_type: str = typer.Argument(..., help="Component type, e.g. dynamicLedger"),
    action: str = typer.Argument(..., help="Action, e.g. slider_change"),
    data: str = typer.Option("{}", "--data", "-d", help="Event data as a JSON object"),
    user: str = typer.Option("cli-user", "--user", "-u", help="Student user ID"),
):
    """Replay an interaction event and show Adeline's reaction.

    Examples:
        adeline interact dynamicLedger slider_change -d '{"newPrice": 10, "newProfit": 6}'
    """
    try:
        event_data = json.loads(data)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Invalid JSON: {e}", param_hint="--data")
    if not isinstance(event_data, dict):
        raise typer.BadParameter("Event data must be a JSON object", param_hint="--data")

    event = InteractionEvent(
        component_type=component_type,
        action=action,
        data=event_data,
        timestamp=time.time() * 1000,
    )
    response = _get_orchestrator().process_interaction_event(
        event, StudentContext(user_id=user)
    )

    if response is None:
        console.print("[dim]No response - nothing to say about that interaction.[/dim]")
        return

    console.print(
        Panel(
            escape(response.content.get("dialogue", json.dumps(response.content))),
            title=response.response_type,
            border_style="green",
        )
    )


@app.command()
def components():
    """List the component types Adeline may compose."""
    registry = _get_orchestrator().registry

    table = Table(title="Component Types")
    table.add_column("Type", style="bold")
    table.add_column("Validated", style="dim")
    for component_type in registry.allowed_types:
        validated = "yes" if registry.contract_for(component_type) else "no"
        table.add_row(component_type, validated)
    console.print(table)


if __name__ == "__main__":
    app()
