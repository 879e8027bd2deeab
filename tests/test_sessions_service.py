"""Tests for questionnaire sessions."""

from datetime import timedelta
from uuid import uuid4

import pytest

from carbon_footprint.domain.errors import (
    ProfileValidationError,
    SessionNotFoundError,
    UnknownStepError,
)
from carbon_footprint.services.sessions import (
    SESSION_TTL,
    STEP_CATEGORIES,
    QuestionnaireService,
)
from tests.conftest import TickingClock


def _save_all_steps(service, session_id, payload) -> None:
    service.save_step(
        session_id,
        "basic",
        {"location": payload["location"], "householdSize": payload["householdSize"]},
    )
    for category in STEP_CATEGORIES[1:]:
        service.save_step(session_id, category, payload[category])


def test_create_session_sets_expiry(questionnaire_service) -> None:
    session = questionnaire_service.create_session()

    assert session.expires_at - session.created_at == SESSION_TTL
    assert session.steps == {}
    assert session.profile is None


def test_get_unknown_session_raises(questionnaire_service) -> None:
    with pytest.raises(SessionNotFoundError):
        questionnaire_service.get_session(uuid4())


def test_save_step_rejects_unknown_category(questionnaire_service) -> None:
    session = questionnaire_service.create_session()

    with pytest.raises(UnknownStepError):
        questionnaire_service.save_step(session.id, "aviation", {"flights": 2})


def test_progress_tracks_answered_steps(
    questionnaire_service, profile_payload
) -> None:
    session = questionnaire_service.create_session()
    questionnaire_service.save_step(
        session.id, "transportation", profile_payload["transportation"]
    )
    questionnaire_service.save_step(session.id, "foodDiet", {"foodWaste": "minimal"})

    progress = questionnaire_service.get_progress(session.id)

    assert progress.progress["transportation"] is True
    assert progress.progress["foodDiet"] is False
    assert progress.completed_steps == 1
    assert progress.total_steps == 6
    assert progress.percentage_complete == 17
    assert not progress.is_complete


def test_submit_assembles_profile_from_steps(
    questionnaire_service, session_repository, profile_payload
) -> None:
    session = questionnaire_service.create_session()
    _save_all_steps(questionnaire_service, session.id, profile_payload)

    assert questionnaire_service.get_progress(session.id).is_complete
    profile = questionnaire_service.submit(session.id)

    assert profile.household_size == 2
    assert profile.transportation.primary_mode == "car"
    stored = session_repository.sessions[session.id].profile
    assert stored is not None
    assert stored["foodDiet"]["dietType"] == "non_vegetarian"
    assert questionnaire_service.load_profile(session.id) == profile


def test_submit_with_payload(questionnaire_service, profile_payload) -> None:
    session = questionnaire_service.create_session()

    profile = questionnaire_service.submit(session.id, profile_payload)

    assert profile.location.country == "Canada"


def test_submit_incomplete_steps_names_missing_field(questionnaire_service) -> None:
    session = questionnaire_service.create_session()
    questionnaire_service.save_step(
        session.id, "basic", {"location": {"country": "uk"}, "householdSize": 1}
    )

    with pytest.raises(ProfileValidationError) as exc_info:
        questionnaire_service.submit(session.id)

    assert exc_info.value.field == "transportation"
    assert exc_info.value.message == "field required"


def test_load_profile_before_submit_raises(questionnaire_service) -> None:
    session = questionnaire_service.create_session()

    with pytest.raises(ProfileValidationError) as exc_info:
        questionnaire_service.load_profile(session.id)

    assert exc_info.value.field == "profile"


def test_expired_session_is_not_found(session_repository) -> None:
    clock = TickingClock(step=timedelta(0))
    service = QuestionnaireService(session_repository, clock=clock)
    session = service.create_session()
    assert service.get_session(session.id) == session

    clock.current = session.expires_at

    with pytest.raises(SessionNotFoundError):
        service.get_session(session.id)
    with pytest.raises(SessionNotFoundError):
        service.save_step(session.id, "basic", {"householdSize": 2})
