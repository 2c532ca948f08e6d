"""API dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from adeline.genui.orchestrator import GenUIOrchestrator


@lru_cache
def get_orchestrator() -> GenUIOrchestrator:
    """Get the process-wide orchestrator built from settings."""
    return GenUIOrchestrator()


# Type aliases for cleaner route signatures
Orchestrator = Annotated[GenUIOrchestrator, Depends(get_orchestrator)]
