"""Domain models for questionnaire sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted questionnaire session."""

    id: UUID
    created_at: datetime
    expires_at: datetime
    steps: dict[str, object] = field(default_factory=dict)
    profile: dict[str, object] | None = None


@dataclass(frozen=True)
class QuestionnaireProgress:
    """Completion state of the questionnaire steps."""

    session_id: UUID
    progress: dict[str, bool]

    @property
    def completed_steps(self) -> int:
        return sum(1 for done in self.progress.values() if done)

    @property
    def total_steps(self) -> int:
        return len(self.progress)

    @property
    def percentage_complete(self) -> int:
        if not self.total_steps:
            return 0
        return round(self.completed_steps / self.total_steps * 100)

    @property
    def is_complete(self) -> bool:
        return self.completed_steps == self.total_steps
