"""Wizard sessions API router.

Endpoints:
- POST   /wizard/sessions               Create a session
- GET    /wizard/sessions/{id}          Current session view
- POST   /wizard/sessions/{id}/actions  Apply one action, return the view
- DELETE /wizard/sessions/{id}          Close a session

Actions return after outstanding generation has settled, so the view a
client receives always carries the suggestions for the step it is on.
"""

import structlog
from fastapi import APIRouter, status

from career_compass.api.deps import GenerationService, Sessions
from career_compass.core.config import settings
from career_compass.core.responses import DataResponse
from career_compass.models.profile import ProfileDraft
from career_compass.schemas.wizard import (
    CreateSessionRequest,
    EducationScratchView,
    ExperienceSchema,
    IndexAction,
    JumpAction,
    PositionView,
    ProfileSchema,
    SuggestionView,
    TextAction,
    WizardAction,
    WizardView,
)
from career_compass.wizard.controller import WizardController
from career_compass.wizard.position import STEP_LABELS, SUB_FLOW_LABELS, SubFlowPosition
from career_compass.wizard.sessions import WizardSession
from career_compass.wizard.suggestions import SuggestionCategory

logger = structlog.get_logger()

router = APIRouter()


def _position_view(controller: WizardController) -> PositionView:
    position = controller.position
    if isinstance(position, SubFlowPosition):
        return PositionView(
            mode=position.mode.value,
            step=int(position.step),
            label=SUB_FLOW_LABELS[position.step],
            return_step=int(position.return_step),
        )
    return PositionView(
        mode=position.mode.value,
        step=int(position.step),
        label=STEP_LABELS[position.step],
    )


def _build_view(session: WizardSession) -> WizardView:
    """Snapshot a session for the response body."""
    controller = session.controller
    scratch = controller.education_scratch
    return WizardView(
        session_id=session.id,
        position=_position_view(controller),
        direction=controller.direction.value,
        can_advance=controller.can_advance,
        profile=ProfileSchema.from_draft(controller.profile),
        new_experience=ExperienceSchema.from_experience(controller.new_experience),
        education_scratch=EducationScratchView(
            level=scratch.level,
            custom_level=scratch.custom_level,
            subject=scratch.subject,
            use_custom_level=scratch.use_custom_level,
        ),
        suggestions={
            category.value: SuggestionView(
                items=controller.display_list(category),
                is_loading=controller.suggestions(category).is_loading,
            )
            for category in SuggestionCategory
        },
        statement=controller.statement,
        is_statement_loading=controller.is_statement_loading,
        finalized=controller.is_finalized,
        exited=session.exited,
        completed_profile=(
            ProfileSchema.from_draft(session.completed_profile)
            if session.completed_profile is not None
            else None
        ),
    )


def _apply(controller: WizardController, action: WizardAction) -> None:
    """Dispatch an action to the controller method of the same name."""
    handler = getattr(controller, action.type)
    if isinstance(action, JumpAction):
        handler(action.step)
    elif isinstance(action, TextAction):
        handler(action.value)
    elif isinstance(action, IndexAction):
        handler(action.index)
    else:
        handler()


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(
    service: GenerationService,
    sessions: Sessions,
    body: CreateSessionRequest | None = None,
) -> DataResponse[WizardView]:
    """Open a new wizard session.

    Args:
        service: Generation facade (injected).
        sessions: Session registry (injected).
        body: Optional initial profile and resume flag.

    Returns:
        DataResponse with the new session's view.

    Raises:
        SessionLimitError: If too many sessions are open.
    """
    request = body or CreateSessionRequest()
    initial = (
        request.initial_profile.to_draft() if request.initial_profile is not None else None
    )

    def build(session: WizardSession) -> WizardController:
        def on_complete(profile: ProfileDraft) -> None:
            session.completed_profile = profile

        def on_exit() -> None:
            session.exited = True

        return WizardController(
            service,
            initial=initial,
            resume_at_review=request.resume_at_review,
            on_complete=on_complete,
            on_exit=on_exit,
            auto_statement=settings.wizard_auto_statement,
        )

    session = sessions.create(build)
    await session.controller.settle()
    return DataResponse(data=_build_view(session))


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, sessions: Sessions) -> DataResponse[WizardView]:
    """Return the current view of a session.

    Raises:
        NotFoundError: If the session does not exist.
    """
    return DataResponse(data=_build_view(sessions.get(session_id)))


@router.post("/sessions/{session_id}/actions")
async def apply_action(
    session_id: str,
    action: WizardAction,
    sessions: Sessions,
) -> DataResponse[WizardView]:
    """Apply one wizard action and wait for generation to settle.

    A blocked advance is not an error: the returned view still shows the
    same position with can_advance false.

    Raises:
        NotFoundError: If the session, or an indexed entry, does not exist.
        InvalidStateError: If the action is not allowed in the current state.
    """
    session = sessions.get(session_id)
    _apply(session.controller, action)
    await session.controller.settle()
    logger.debug("wizard_action_applied", session_id=session_id, action=action.type)
    return DataResponse(data=_build_view(session))


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, sessions: Sessions) -> None:
    """Close a session. Generation still in flight is discarded.

    Raises:
        NotFoundError: If the session does not exist.
    """
    sessions.close(session_id)
