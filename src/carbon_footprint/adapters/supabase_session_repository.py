"""Supabase-backed questionnaire session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from carbon_footprint.domain.sessions import SessionRecord
from carbon_footprint.services.sessions import SessionRepository

_COLUMNS = "id, created_at, expires_at, steps_json, profile_json"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for questionnaire sessions."""

    client: Client

    def create_session(self, created_at: datetime, expires_at: datetime) -> SessionRecord:
        """Create a session row and return it."""
        response = (
            self.client.table("questionnaire_sessions")
            .insert(
                {
                    "created_at": created_at.isoformat(),
                    "expires_at": expires_at.isoformat(),
                    "steps_json": {},
                    "profile_json": None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _parse_row(response.data[0])

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("questionnaire_sessions")
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def update_steps(self, session_id: UUID, steps: dict[str, object]) -> None:
        """Replace the draft answers of a session."""
        self.client.table("questionnaire_sessions").update(
            {
                "steps_json": steps,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(session_id)).execute()

    def save_profile(self, session_id: UUID, profile: dict[str, object]) -> None:
        """Store the validated profile."""
        self.client.table("questionnaire_sessions").update(
            {
                "profile_json": profile,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(session_id)).execute()


def _parse_row(row: dict[str, object]) -> SessionRecord:
    steps = row.get("steps_json")
    profile = row.get("profile_json")
    return SessionRecord(
        id=UUID(str(row["id"])),
        created_at=_parse_timestamp(row["created_at"]),
        expires_at=_parse_timestamp(row["expires_at"]),
        steps=steps if isinstance(steps, dict) else {},
        profile=profile if isinstance(profile, dict) else None,
    )


def _parse_timestamp(value: object) -> datetime:
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
