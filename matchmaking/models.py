"""
Domain models for the matchmaking engine.

Participants and their preference/avoid sets come in fresh on every call;
assignments and failures go back out to the caller for storage or display.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from matchmaking.errors import FailureKind


class Participant(BaseModel):
    """A roster entry: identity, display name, and the two request lists."""

    model_config = ConfigDict(frozen=True)

    participant_id: str
    name: str = ""
    preferences: frozenset[str] = Field(default_factory=frozenset)  # soft: try these first
    avoids: frozenset[str] = Field(default_factory=frozenset)  # hard: never assign

    @field_validator("participant_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: object) -> object:
        # Integer ids are stored as strings so they match entries in the request lists
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("preferences", "avoids", mode="before")
    @classmethod
    def _coerce_ids(cls, v: object) -> frozenset[str]:
        if v is None:
            return frozenset()
        if isinstance(v, str):
            return frozenset([v])
        return frozenset(str(item) for item in v)  # type: ignore[union-attr]

    @property
    def display_name(self) -> str:
        """Name for diagnostics, falling back to the id."""
        return self.name or self.participant_id

    @property
    def effective_avoids(self) -> frozenset[str]:
        """Avoids with self-reference dropped."""
        return self.avoids - {self.participant_id}

    @property
    def effective_preferences(self) -> frozenset[str]:
        """Preferences with self-reference and anything also avoided dropped (avoid wins)."""
        return self.preferences - self.avoids - {self.participant_id}


class GameConfig(BaseModel):
    """Run parameters. The caps are enforced by roster editing, not by the search."""

    targets_per_player: int = Field(default=2, ge=1)
    max_preferences: int = Field(default=10, ge=0)
    max_avoids: int = Field(default=5, ge=0)


class Assignment(BaseModel):
    """One edge of the result: writer writes about target."""

    model_config = ConfigDict(frozen=True)

    writer_id: str
    target_id: str


class Failure(BaseModel):
    """Structured failure detail, enough for the caller to render an actionable message."""

    kind: FailureKind
    message: str
    participant_id: str | None = None
    participant_name: str | None = None
    available: int | None = None  # valid counterparts found
    required: int | None = None  # counterparts needed (N)


class FeasibilityResult(BaseModel):
    """Outcome of the pre-search degree checks."""

    ok: bool
    failure: Failure | None = None

    @classmethod
    def passed(cls) -> FeasibilityResult:
        return cls(ok=True)

    @classmethod
    def failed(cls, failure: Failure) -> FeasibilityResult:
        return cls(ok=False, failure=failure)


class SearchStatus(str, Enum):
    """Terminal states of a search run."""

    DONE = "done"
    FAILED = "failed"


class SearchResult(BaseModel):
    """Search outcome. Assignments are only ever present when status is DONE."""

    status: SearchStatus
    assignments: list[Assignment] = Field(default_factory=list)
    failure: Failure | None = None
    attempts: int = 0
    stats: dict[str, int] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == SearchStatus.DONE


class ConfigSuggestion(BaseModel):
    """Advisory caps for preference and avoid list sizes."""

    max_preferences: int
    max_avoids: int
    reasoning: list[str] = Field(default_factory=list)
