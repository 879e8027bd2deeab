"""Questionnaire session bookkeeping."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from carbon_footprint.domain.errors import (
    ProfileValidationError,
    SessionNotFoundError,
    UnknownStepError,
)
from carbon_footprint.domain.profile import LifestyleProfile, parse_profile
from carbon_footprint.domain.sessions import QuestionnaireProgress, SessionRecord

SESSION_TTL = timedelta(hours=24)

# Step category -> field whose presence marks the step as answered.
_STEP_MARKERS = {
    "transportation": "primaryMode",
    "homeEnergy": "homeType",
    "foodDiet": "dietType",
    "waterUsage": "showerDuration",
    "shopping": "clothingFrequency",
}
STEP_CATEGORIES = ("basic", *_STEP_MARKERS)

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class SessionRepository(Protocol):
    """Persistence interface for questionnaire sessions."""

    def create_session(self, created_at: datetime, expires_at: datetime) -> SessionRecord:
        """Create a new session and return it."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def update_steps(self, session_id: UUID, steps: dict[str, object]) -> None:
        """Replace the draft answers of a session."""

    def save_profile(self, session_id: UUID, profile: dict[str, object]) -> None:
        """Store the validated profile of a session."""


@dataclass
class QuestionnaireService:
    """Collects questionnaire answers and produces a validated profile."""

    repository: SessionRepository
    clock: Callable[[], datetime] = _utcnow

    def create_session(self) -> SessionRecord:
        """Start a new questionnaire session."""
        now = self.clock()
        return self.repository.create_session(now, now + SESSION_TTL)

    def get_session(self, session_id: UUID) -> SessionRecord:
        """Return a live session or raise SessionNotFoundError.

        Sessions past their expiry are treated as missing.
        """
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        if session.expires_at <= self.clock():
            _logger.info("Session %s expired at %s", session_id, session.expires_at)
            raise SessionNotFoundError(str(session_id))
        return session

    def save_step(
        self, session_id: UUID, category: str, data: dict[str, object]
    ) -> SessionRecord:
        """Store the raw answers for one questionnaire step."""
        if category not in STEP_CATEGORIES:
            raise UnknownStepError(category)
        session = self.get_session(session_id)
        steps = dict(session.steps)
        steps[category] = dict(data)
        self.repository.update_steps(session_id, steps)
        return SessionRecord(
            id=session.id,
            created_at=session.created_at,
            expires_at=session.expires_at,
            steps=steps,
            profile=session.profile,
        )

    def get_progress(self, session_id: UUID) -> QuestionnaireProgress:
        """Return which steps have been answered."""
        session = self.get_session(session_id)
        progress = {"basic": _basic_complete(session.steps.get("basic"))}
        for category, marker in _STEP_MARKERS.items():
            step = session.steps.get(category)
            progress[category] = isinstance(step, dict) and bool(step.get(marker))
        return QuestionnaireProgress(session_id=session_id, progress=progress)

    def submit(
        self, session_id: UUID, payload: dict[str, object] | None = None
    ) -> LifestyleProfile:
        """Validate and store the full profile.

        Without a payload the profile is assembled from the saved steps.
        """
        session = self.get_session(session_id)
        raw = payload if payload is not None else _assemble_profile(session.steps)
        profile = parse_profile(raw)
        self.repository.save_profile(session_id, profile.to_payload())
        _logger.info("Profile submitted for session %s", session_id)
        return profile

    def load_profile(self, session_id: UUID) -> LifestyleProfile:
        """Return the submitted profile of a session."""
        session = self.get_session(session_id)
        if session.profile is None:
            raise ProfileValidationError(
                "profile", "questionnaire has not been submitted"
            )
        return parse_profile(session.profile)


def _basic_complete(step: object) -> bool:
    return (
        isinstance(step, dict)
        and bool(step.get("location"))
        and bool(step.get("householdSize"))
    )


def _assemble_profile(steps: dict[str, object]) -> dict[str, object]:
    raw: dict[str, object] = {}
    basic = steps.get("basic")
    if isinstance(basic, dict):
        raw.update(basic)
    for category in _STEP_MARKERS:
        step = steps.get(category)
        if isinstance(step, dict):
            raw[category] = step
    return raw
