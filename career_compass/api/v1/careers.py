"""Career exploration API router.

Endpoints:
- POST /careers/profile           Identity statement and arranged career paths
- POST /careers/paths             Re-filter and re-sort already loaded paths
- POST /careers/detail            Enrich one path with its detail fields
- POST /careers/learning-plan     Markdown learning plan for a skill
- POST /careers/education-skills  Skills implied by an education entry

Only /profile can fail (502 PROFILE_GENERATION_FAILED). The others fall
back to fixed content when generation fails.
"""

from collections.abc import Iterable

from fastapi import APIRouter

from career_compass.api.deps import GenerationService
from career_compass.core.errors import ProfileGenerationError
from career_compass.core.responses import DataResponse
from career_compass.schemas.career import CareerPath
from career_compass.schemas.wizard import (
    ArrangedPathsView,
    ArrangePathsRequest,
    CareerDetailRequest,
    CareerProfileRequest,
    CareerProfileView,
    EducationSkillsRequest,
    ExploredPath,
    LearningPlanRequest,
    LearningPlanResponse,
    PathArrangement,
)
from career_compass.services.career_explorer import (
    arrange_paths,
    learning_plan,
    load_path_detail,
    path_sources,
)
from career_compass.services.career_profile_service import CareerProfileLoader

router = APIRouter()


def _arranged(paths: Iterable[CareerPath], body: PathArrangement) -> ArrangedPathsView:
    """Apply the request's filters and sort to paths."""
    paths = list(paths)
    state = body.sort_state()
    arranged = arrange_paths(paths, body.filters, state)
    return ArrangedPathsView(
        paths=[ExploredPath(path=path, sources=path_sources(path)) for path in arranged],
        total_paths=len(paths),
        sort=state.field,
        order=state.order,
    )


@router.post("/profile")
async def generate_career_profile(
    body: CareerProfileRequest, service: GenerationService
) -> DataResponse[CareerProfileView]:
    """Generate the career profile for a finalized wizard profile.

    Paths are returned filtered and sorted by the request's explorer
    controls; total_paths counts them before filtering.

    Raises:
        ProfileGenerationError: If generation or validation fails.
    """
    loader = CareerProfileLoader(service, body.profile.to_draft())
    result = await loader.load()
    if result is None:
        message = loader.error_message or ProfileGenerationError().message
        raise ProfileGenerationError(message)

    arranged = _arranged(result.paths, body)
    return DataResponse(
        data=CareerProfileView(
            identity=result.identity,
            paths=arranged.paths,
            total_paths=arranged.total_paths,
            sort=arranged.sort,
            order=arranged.order,
        )
    )


@router.post("/paths")
async def arrange_career_paths(
    body: ArrangePathsRequest,
) -> DataResponse[ArrangedPathsView]:
    """Apply filter chips and sort controls to paths the client already has."""
    return DataResponse(data=_arranged(body.paths, body))


@router.post("/detail")
async def get_career_detail(
    body: CareerDetailRequest, service: GenerationService
) -> DataResponse[CareerPath]:
    path = await load_path_detail(service, body.path, body.profile.to_draft())
    return DataResponse(data=path)


@router.post("/learning-plan")
async def get_learning_plan(
    body: LearningPlanRequest, service: GenerationService
) -> DataResponse[LearningPlanResponse]:
    plan = await learning_plan(service, body.skill)
    return DataResponse(data=LearningPlanResponse(skill=body.skill, plan=plan))


@router.post("/education-skills")
async def suggest_education_skills(
    body: EducationSkillsRequest, service: GenerationService
) -> DataResponse[list[str]]:
    """Suggest skills for an education level and optional subject."""
    skills = await service.suggest_skills_for_education(body.level, body.subject)
    return DataResponse(data=skills)
