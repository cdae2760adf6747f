"""Career profile loader.

Runs whole-profile generation for a finalized wizard profile and tracks
its status so the identity screen can show a spinner, the result, or an
error with a retry button.
"""

from enum import Enum

import structlog

from career_compass.core.errors import InvalidStateError, ProfileGenerationError
from career_compass.models.profile import ProfileDraft
from career_compass.schemas.career import CareerProfile
from career_compass.services.generation_service import CareerGenerationService

logger = structlog.get_logger()


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class CareerProfileLoader:
    """Loads the career profile for one finalized profile.

    Args:
        service: Generation facade.
        profile: The finalized wizard profile.

    Attributes:
        status: Current load status.
        result: The generated profile once status is READY.
        error_message: User-facing message once status is ERROR.
    """

    def __init__(self, service: CareerGenerationService, profile: ProfileDraft) -> None:
        self._service = service
        self._profile = profile.copy()
        self.status = LoadStatus.IDLE
        self.result: CareerProfile | None = None
        self.error_message: str | None = None

    async def load(self) -> CareerProfile | None:
        """Generate the profile.

        A load already in progress is not repeated.

        Returns:
            The career profile, or None if generation failed.
        """
        if self.status is LoadStatus.LOADING:
            return None
        self.status = LoadStatus.LOADING
        self.error_message = None
        try:
            result = await self._service.suggest_career_profile(self._profile)
        except ProfileGenerationError as exc:
            self.status = LoadStatus.ERROR
            self.result = None
            self.error_message = exc.message
            logger.info("career_profile_load_failed")
            return None

        self.result = result
        self.status = LoadStatus.READY
        return result

    async def retry(self) -> CareerProfile | None:
        """Load again after a failure.

        Raises:
            InvalidStateError: If the loader is not in the error state.
        """
        if self.status is not LoadStatus.ERROR:
            raise InvalidStateError("Only a failed career profile load can be retried")
        return await self.load()
