"""Tests for the wizard sessions API.

Every call goes through the full app (error handlers, validation, and the
session registry) with the generation service backed by MockLLMProvider.
"""

import pytest

from career_compass.providers.llm.base import TaskType

_SESSIONS = "/api/v1/wizard/sessions"

_COMPLETED_PROFILE = {
    "experiences": [{"role": "Teacher", "industry": "Education", "tasks": "Grading"}],
    "skills": "Communication, Public Speaking, Curriculum Design",
    "interests": "Mentoring",
    "education": ["Master's degree in Education"],
}


async def _create(client, body=None):
    response = await client.post(_SESSIONS, json=body)
    assert response.status_code == 201
    return response.json()["data"]


async def _act(client, session_id, **action):
    response = await client.post(f"{_SESSIONS}/{session_id}/actions", json=action)
    assert response.status_code == 200, response.json()
    return response.json()["data"]


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestCreateSession:
    """Tests for POST /wizard/sessions."""

    @pytest.mark.asyncio
    async def test_create_starts_at_role(self, client):
        """A new session starts on the first step with an empty profile."""
        view = await _create(client)
        assert view["position"] == {
            "mode": "primary",
            "step": 0,
            "label": "Your Role",
            "return_step": None,
        }
        assert view["can_advance"] is False
        assert view["profile"]["experiences"] == []
        assert set(view["suggestions"]) == {
            "tasks",
            "skills",
            "interests",
            "sub_flow_tasks",
        }
        assert view["finalized"] is False

    @pytest.mark.asyncio
    async def test_resume_at_review_generates_statement(self, client, mock_llm):
        """Resuming a completed profile opens on review with a statement."""
        view = await _create(
            client,
            {"initial_profile": _COMPLETED_PROFILE, "resume_at_review": True},
        )
        assert view["position"]["step"] == 6
        assert view["statement"] == "I help people learn."
        assert view["is_statement_loading"] is False
        assert view["profile"] == _COMPLETED_PROFILE
        assert len(mock_llm.calls_for(TaskType.PERSONAL_STATEMENT)) == 1

    @pytest.mark.asyncio
    async def test_unknown_profile_field_rejected(self, client):
        """Extra fields in the initial profile fail validation."""
        response = await client.post(
            _SESSIONS, json={"initial_profile": {"hobbies": "chess"}}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_security_headers(self, client):
        """Session views are marked no-store."""
        response = await client.post(_SESSIONS)
        assert response.headers["Cache-Control"] == "no-store, max-age=0"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestWizardFlow:
    """End-to-end runs through the actions endpoint."""

    @pytest.mark.asyncio
    async def test_full_run_to_completion(self, client, mock_llm):
        """Role to review to finalize produces the completed profile."""
        view = await _create(client)
        sid = view["session_id"]

        await _act(client, sid, type="set_role", value="Teacher")
        view = await _act(client, sid, type="advance")
        assert view["position"]["label"] == "Industry"

        await _act(client, sid, type="set_industry", value="Education")
        view = await _act(client, sid, type="advance")
        assert view["suggestions"]["tasks"] == {
            "items": ["Lesson Planning", "Grading", "Parent Meetings"],
            "is_loading": False,
        }

        await _act(client, sid, type="toggle_task", value="Grading")
        view = await _act(client, sid, type="advance")
        assert view["position"]["label"] == "Skills"
        assert view["can_advance"] is False

        for skill in ("Communication", "Public Speaking", "Curriculum Design"):
            view = await _act(client, sid, type="toggle_skill", value=skill)
        assert view["can_advance"] is True
        view = await _act(client, sid, type="advance")
        assert view["suggestions"]["interests"]["items"] == ["Education", "Mentoring"]

        await _act(client, sid, type="toggle_interest", value="Mentoring")
        await _act(client, sid, type="advance")
        await _act(client, sid, type="choose_education_level", value="Master's degree")
        await _act(client, sid, type="set_education_subject", value="Education")
        view = await _act(client, sid, type="advance")

        assert view["position"]["label"] == "Review"
        assert view["profile"] == _COMPLETED_PROFILE
        assert view["statement"] == "I help people learn."

        view = await _act(client, sid, type="advance")
        assert view["finalized"] is True
        assert view["completed_profile"] == _COMPLETED_PROFILE

        # Each list was generated once, keyed on the Teacher experience
        assert len(mock_llm.calls_for(TaskType.TASK_SUGGESTIONS)) == 1
        assert len(mock_llm.calls_for(TaskType.SKILL_SUGGESTIONS)) == 1

    @pytest.mark.asyncio
    async def test_blocked_advance_is_not_an_error(self, client):
        """Advancing an invalid step returns the unchanged view."""
        view = await _create(client)
        view = await _act(client, view["session_id"], type="advance")
        assert view["position"]["step"] == 0
        assert view["can_advance"] is False

    @pytest.mark.asyncio
    async def test_retreat_from_first_step_exits(self, client):
        view = await _create(client)
        view = await _act(client, view["session_id"], type="retreat")
        assert view["exited"] is True
        assert view["position"]["step"] == 0

    @pytest.mark.asyncio
    async def test_regenerate_unions_suggestions(self, client, mock_llm):
        """Regenerating adds new items without dropping existing ones."""
        view = await _create(client)
        sid = view["session_id"]
        await _act(client, sid, type="set_role", value="Teacher")
        await _act(client, sid, type="jump_to", step=2)

        mock_llm.set_response(TaskType.TASK_SUGGESTIONS, '["Grading", "Tutoring"]')
        view = await _act(client, sid, type="regenerate")

        assert view["suggestions"]["tasks"]["items"] == [
            "Lesson Planning",
            "Grading",
            "Parent Meetings",
            "Tutoring",
        ]
        assert view["direction"] == "forward"

    @pytest.mark.asyncio
    async def test_add_experience_sub_flow(self, client):
        """A sub-flow run appends an experience and returns to review."""
        view = await _create(
            client,
            {"initial_profile": _COMPLETED_PROFILE, "resume_at_review": True},
        )
        sid = view["session_id"]

        view = await _act(client, sid, type="enter_sub_flow")
        assert view["position"] == {
            "mode": "addExperience",
            "step": 0,
            "label": "New Role",
            "return_step": 6,
        }

        await _act(client, sid, type="set_new_role", value="Nurse")
        await _act(client, sid, type="advance")
        await _act(client, sid, type="set_new_industry", value="Healthcare")
        view = await _act(client, sid, type="advance")
        assert view["suggestions"]["sub_flow_tasks"]["items"]

        await _act(client, sid, type="toggle_new_task", value="Grading")
        view = await _act(client, sid, type="advance")

        assert view["position"]["mode"] == "primary"
        assert view["position"]["step"] == 6
        assert [e["role"] for e in view["profile"]["experiences"]] == ["Teacher", "Nurse"]
        assert view["new_experience"] == {"role": "", "industry": "", "tasks": ""}

    @pytest.mark.asyncio
    async def test_remove_education_and_experience(self, client):
        view = await _create(
            client,
            {"initial_profile": _COMPLETED_PROFILE, "resume_at_review": True},
        )
        sid = view["session_id"]

        view = await _act(client, sid, type="remove_education", index=0)
        assert view["profile"]["education"] == []

        view = await _act(client, sid, type="remove_experience", index=0)
        assert view["profile"]["experiences"] == []


class TestWizardErrors:
    """Tests for error responses from the wizard endpoints."""

    @pytest.mark.asyncio
    async def test_unknown_session_is_404(self, client):
        response = await client.get(f"{_SESSIONS}/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_jump_from_sub_flow_is_422(self, client):
        """Jumping is only allowed in the primary sequence."""
        view = await _create(client)
        sid = view["session_id"]
        await _act(client, sid, type="enter_sub_flow")

        response = await client.post(
            f"{_SESSIONS}/{sid}/actions", json={"type": "jump_to", "step": 3}
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_STATE_TRANSITION"

    @pytest.mark.asyncio
    async def test_actions_after_finalize_are_422(self, client):
        view = await _create(
            client,
            {"initial_profile": _COMPLETED_PROFILE, "resume_at_review": True},
        )
        sid = view["session_id"]
        await _act(client, sid, type="advance")

        response = await client.post(
            f"{_SESSIONS}/{sid}/actions", json={"type": "set_role", "value": "Chef"}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "action",
        [
            {"type": "fly"},
            {"type": "jump_to", "step": 9},
            {"type": "set_role"},
            {"type": "remove_education", "index": -1},
            {"type": "advance", "value": "x"},
        ],
    )
    async def test_malformed_action_is_400(self, client, action):
        """Malformed actions fail request validation."""
        view = await _create(client)
        response = await client.post(
            f"{_SESSIONS}/{view['session_id']}/actions", json=action
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_remove_missing_entry_is_404(self, client):
        view = await _create(
            client,
            {"initial_profile": _COMPLETED_PROFILE, "resume_at_review": True},
        )
        response = await client.post(
            f"{_SESSIONS}/{view['session_id']}/actions",
            json={"type": "remove_education", "index": 3},
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_before_review_is_422(self, client):
        """Entries can only be removed from the review step."""
        view = await _create(client, {"initial_profile": _COMPLETED_PROFILE})
        sid = view["session_id"]

        response = await client.post(
            f"{_SESSIONS}/{sid}/actions", json={"type": "remove_education", "index": 0}
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_STATE_TRANSITION"

        response = await client.get(f"{_SESSIONS}/{sid}")
        assert response.json()["data"]["profile"]["education"] == [
            "Master's degree in Education"
        ]

    @pytest.mark.asyncio
    async def test_delete_session(self, client):
        """Deleted sessions are gone."""
        view = await _create(client)
        sid = view["session_id"]

        response = await client.delete(f"{_SESSIONS}/{sid}")
        assert response.status_code == 204

        response = await client.get(f"{_SESSIONS}/{sid}")
        assert response.status_code == 404
