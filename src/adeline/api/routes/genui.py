"""Generative UI API routes.

Entry point for Journal Page experiences. Composition uses the fallback
policy unless the caller asks for strict mode, which is meant for
diagnostics and surfaces AI failures as 502 responses.
"""

import logging

from fastapi import APIRouter, HTTPException

from adeline.api.schemas import (
    ComponentTypesResponse,
    ComposeRequest,
    InteractionRequest,
    InteractionResult,
)
from adeline.genui.models import ComposedUIPage
from adeline.genui.schema import GenUIError

from ..deps import Orchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/genui", tags=["genui"])


@router.post("/compose", response_model=ComposedUIPage)
async def compose_page(
    request: ComposeRequest,
    orchestrator: Orchestrator,
) -> ComposedUIPage:
    """Compose a Journal Page for the student's message."""
    if not request.strict:
        return await orchestrator.compose_page_with_ai_with_fallback(
            request.message, request.context
        )

    try:
        return await orchestrator.compose_page_with_ai(request.message, request.context)
    except GenUIError as e:
        logger.error(f"Strict composition failed: {e}")
        raise HTTPException(
            status_code=502,
            detail=f"Failed to compose UI experience: {e}",
        )


@router.get("/components", response_model=ComponentTypesResponse)
def list_component_types(orchestrator: Orchestrator) -> ComponentTypesResponse:
    """List the component types the orchestrator may compose."""
    return ComponentTypesResponse(
        component_types=list(orchestrator.registry.allowed_types)
    )


@router.post("/interactions", response_model=InteractionResult)
def process_interaction(
    request: InteractionRequest,
    orchestrator: Orchestrator,
) -> InteractionResult:
    """React to a student's interaction with a rendered component."""
    response = orchestrator.process_interaction_event(request.event, request.context)
    return InteractionResult(response=response)
