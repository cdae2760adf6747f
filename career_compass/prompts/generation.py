"""Prompt templates for career generation.

System/user prompt pairs and builder functions for every generation task:
step suggestions (tasks, skills, interests, education skills), the
personal statement, the whole career profile, path details, and learning
plans. All user-entered values pass through sanitize_llm_input before they
are interpolated.
"""

from career_compass.core.llm_sanitization import sanitize_all, sanitize_llm_input
from career_compass.models.profile import Experience, ProfileDraft

_MARKET = "the UK job market"

_DEMAND_LABELS = "'High', 'Growing', 'Medium', 'Stable', 'Low'"

# =============================================================================
# Shared profile rendering
# =============================================================================


def _render_roles(experiences: list[Experience]) -> str:
    """One line per experience with role and industry only."""
    lines = [
        f'Role: {sanitize_llm_input(exp.role.strip())} in Industry: '
        f'"{sanitize_llm_input(exp.industry.strip()) or "N/A"}".'
        for exp in experiences
        if exp.role.strip()
    ]
    return "\n".join(lines)


def _render_experiences_with_tasks(experiences: list[Experience]) -> str:
    lines = []
    for exp in experiences:
        if not exp.role.strip():
            continue
        tasks = sanitize_llm_input(exp.tasks) or "not specified"
        lines.append(
            f'Role: {sanitize_llm_input(exp.role.strip())} in Industry: '
            f'"{sanitize_llm_input(exp.industry.strip()) or "N/A"}". '
            f"Key tasks included: {tasks}."
        )
    return "\n".join(lines)


def _render_profile(profile: ProfileDraft, *, include_tasks: bool = True) -> str:
    experiences = (
        _render_experiences_with_tasks(profile.experiences)
        if include_tasks
        else _render_roles(profile.experiences)
    )
    lines = [
        f"- Experiences: {experiences or 'none provided'}",
        f"- Stated Skills: {sanitize_llm_input(profile.skills) or 'none provided'}",
        f"- Interests/Values: {sanitize_llm_input(profile.interests) or 'none provided'}",
    ]
    education = sanitize_all(profile.education)
    if education:
        lines.append(f"- Education: {', '.join(education)}")
    return "\n".join(lines)


def _already_seen(kind: str, excluding: list[str]) -> str:
    seen = sanitize_all(excluding)
    if not seen:
        return ""
    return (
        f"The user has already seen these {kind}: {', '.join(seen)}. "
        f"Generate NEW and DIFFERENT {kind} that are also relevant."
    )


# =============================================================================
# Step suggestions
# =============================================================================

SUGGESTION_SYSTEM_PROMPT = f"""You are a career coach helping someone describe their \
working life for {_MARKET}.

Return ONLY a JSON array of short strings. No markdown, no explanation."""

_TASKS_USER_TEMPLATE = """Based on the following professional experiences:
{experiences}

Generate a concise list of 5 common tasks or responsibilities. Synthesise \
information from all provided roles to create a comprehensive list.
Keep each task concise (under 10 words).
{already_seen}"""

_SKILLS_USER_TEMPLATE = """Based on the following professional experiences:
{experiences}

Generate a list of 15 to 20 common skills, mixing soft and hard skills. \
Synthesise from all roles to create a comprehensive list.
Keep each skill concise (1-2 words).
{already_seen}"""

_INTERESTS_USER_TEMPLATE = """Based on the following professional experiences:
{experiences}

Generate a list of 15 to 20 items. Include a diverse mix of potential career \
fields, related industries, professional interests, and work environment \
preferences.
Keep each item concise (1-2 words). Examples: 'Sustainable Technology', \
'Mentoring others', 'Data-driven decisions', 'FinTech Sector'.
{already_seen}"""

_EDUCATION_SKILLS_USER_TEMPLATE = """Based on the education level of "{level}" \
with a subject area in "{subject}", generate a list of 10 to 12 common skills, \
mixing soft and hard skills, that a person would likely acquire.
Keep each skill concise (1-2 words)."""


def build_tasks_prompt(experiences: list[Experience], excluding: list[str]) -> str:
    """Build the user prompt for task suggestions."""
    return _TASKS_USER_TEMPLATE.format(
        experiences=_render_roles(experiences),
        already_seen=_already_seen("tasks", excluding),
    ).strip()


def build_skills_prompt(experiences: list[Experience], excluding: list[str]) -> str:
    """Build the user prompt for skill suggestions."""
    return _SKILLS_USER_TEMPLATE.format(
        experiences=_render_roles(experiences),
        already_seen=_already_seen("skills", excluding),
    ).strip()


def build_interests_prompt(experiences: list[Experience], excluding: list[str]) -> str:
    """Build the user prompt for interest suggestions."""
    return _INTERESTS_USER_TEMPLATE.format(
        experiences=_render_roles(experiences),
        already_seen=_already_seen("items", excluding),
    ).strip()


def build_education_skills_prompt(level: str, subject: str) -> str:
    """Build the user prompt for skills implied by an education entry."""
    return _EDUCATION_SKILLS_USER_TEMPLATE.format(
        level=sanitize_llm_input(level.strip()),
        subject=sanitize_llm_input(subject.strip()) or "general studies",
    )


# =============================================================================
# Personal statement
# =============================================================================

STATEMENT_SYSTEM_PROMPT = f"""You are an expert career coach specialising in CV \
writing for {_MARKET}.

Write a short, impactful personal statement: 2-3 powerful sentences in the \
first person. Avoid clichés.

Return ONLY a JSON object of the form {{"statement": "..."}}."""

_STATEMENT_USER_TEMPLATE = """User's Profile:
{profile}"""


def build_statement_prompt(profile: ProfileDraft) -> str:
    """Build the user prompt for the review-step personal statement."""
    return _STATEMENT_USER_TEMPLATE.format(profile=_render_profile(profile))


# =============================================================================
# Whole career profile
# =============================================================================

CAREER_PROFILE_SYSTEM_PROMPT = f"""You are an expert career strategist for \
{_MARKET}. Generate a career profile containing:
1. identity.statement: a 2-3 sentence career identity "elevator pitch".
2. identity.transferableSkills: 5-7 key transferable skills.
3. paths: 15 to 20 diverse but relevant career paths.

Rules for paths:
- Analyse intent first. If interests and skills diverge from past \
experience, treat it as a career change and weight interests and skills \
above experience.
- Balance aspirational paths (from interests), skill-based pivots, direct \
evolutions of experience, and education-based paths where relevant.
- relevanceTags must be the direct, primary reason for a suggestion. \
source is one of 'experience', 'skill', 'interest', 'education'. Never tag \
a path with a source that is not logically connected to it.

Each path has exactly: title, skillMatchPercentage (0-100 integer), \
industry, marketDemand (one of {_DEMAND_LABELS}), relevanceTags \
([{{"tag": ..., "source": ...}}]).

Return ONLY a single JSON object: {{"identity": {{...}}, "paths": [...]}}."""

_CAREER_PROFILE_USER_TEMPLATE = """User's Profile:
{profile}"""


def build_career_profile_prompt(profile: ProfileDraft) -> str:
    """Build the user prompt for whole-profile generation."""
    return _CAREER_PROFILE_USER_TEMPLATE.format(profile=_render_profile(profile))


# =============================================================================
# Career path detail
# =============================================================================

CAREER_DETAIL_SYSTEM_PROMPT = f"""You are an expert career strategist for \
{_MARKET}. Describe one career path for a specific user.

Return ONLY a JSON object with:
- description: 2 sentences on the role and why it fits the user.
- requiredSkills: 5-7 top skills required.
- salaryRange: a typical UK salary range, e.g. '£40,000 - £60,000 per year'.
- marketDemand: one of {_DEMAND_LABELS}.
- certifications: 1-3 common certifications, or an empty array.
- experienceNeeded: typical years of experience, e.g. '2-4 years'."""

_CAREER_DETAIL_USER_TEMPLATE = """Career path: "{title}" in the "{industry}" industry.

User's Profile:
{profile}"""


def build_career_detail_prompt(title: str, industry: str, profile: ProfileDraft) -> str:
    """Build the user prompt for a single path's details."""
    return _CAREER_DETAIL_USER_TEMPLATE.format(
        title=sanitize_llm_input(title),
        industry=sanitize_llm_input(industry),
        profile=_render_profile(profile, include_tasks=False),
    )


# =============================================================================
# Learning plan
# =============================================================================

LEARNING_PLAN_SYSTEM_PROMPT = """You write concise, actionable learning plans in \
Markdown. Keep descriptions brief and focused on action."""

_LEARNING_PLAN_USER_TEMPLATE = """Create a 1-month learning plan for a beginner \
looking to gain proficiency in "{skill}".
Include these sections:
- **Week 1: Foundations**: the absolute basics, with 1-2 key free resources.
- **Week 2: Core Concepts**: next-level concepts, with 1-2 resources.
- **Week 3: Practical Application**: a small, specific project idea.
- **Week 4: Advanced Topics & Project**: one advanced topic and how to \
extend the project."""


def build_learning_plan_prompt(skill: str) -> str:
    """Build the user prompt for a skill learning plan."""
    return _LEARNING_PLAN_USER_TEMPLATE.format(skill=sanitize_llm_input(skill.strip()))
