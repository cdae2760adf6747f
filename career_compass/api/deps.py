"""FastAPI dependencies.

The generation service and the session registry are created once per
application in create_app() and stored on app.state, so each test app
gets its own registry and tests can swap the service with
app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends, Request

from career_compass.services.generation_service import CareerGenerationService
from career_compass.wizard.sessions import SessionRegistry


def get_generation_service(request: Request) -> CareerGenerationService:
    """Application-wide generation facade."""
    return request.app.state.generation_service


def get_session_registry(request: Request) -> SessionRegistry:
    """Application-wide wizard session registry."""
    return request.app.state.sessions


GenerationService = Annotated[CareerGenerationService, Depends(get_generation_service)]
Sessions = Annotated[SessionRegistry, Depends(get_session_registry)]
