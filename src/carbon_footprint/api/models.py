"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field


class StepRequest(BaseModel):
    """Answers for one questionnaire step."""

    category: str
    data: dict[str, object] = Field(default_factory=dict)


class PercentageChange(BaseModel):
    """Reduction expressed as a share of the category total."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    percentage: float


class ScenarioRequest(BaseModel):
    """Per-category reductions, absolute kg CO2e or a percentage."""

    model_config = ConfigDict(allow_inf_nan=False)

    changes: dict[str, float | PercentageChange] = Field(default_factory=dict)

    def as_changes(self) -> dict[str, object]:
        return self.model_dump()["changes"]


class RecalculateRequest(BaseModel):
    """Profile field edits keyed by category."""

    changes: dict[str, dict[str, object]] = Field(default_factory=dict)
