"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The report exporter can serialize a whole run with `model_dump`.

Note:
- These models describe *what* a check produced, not *how* it was obtained.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field
from pydantic.config import ConfigDict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StreamEntry(BaseModel):
    """One playlist item: a stream URL plus its display metadata.

    Immutable once parsed; its position in the playlist is tracked by the
    check run, not by the entry itself.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Absolute stream URI, as written in the playlist.",
    )
    title: str = Field(
        default="Unknown",
        description="Display title taken from the preceding #EXTINF line.",
    )
    group_title: str = Field(
        default="",
        description="Value of the group-title attribute (empty if absent).",
    )

    def display_title(self) -> str:
        if self.group_title:
            return f"{self.title} ({self.group_title})"
        return self.title


class ProbeResult(BaseModel):
    """Liveness verdict for a single stream."""

    model_config = ConfigDict(frozen=True)

    is_alive: bool = Field(
        ...,
        description="True iff the best available HTTP status is below 400.",
    )
    error_message: str = Field(
        default="",
        description="Short human-readable failure reason (empty when alive).",
    )
    status_code: int = Field(
        default=0,
        ge=0,
        description="HTTP status of the deciding response (0 if none was received).",
    )

    @classmethod
    def alive(cls, status_code: int) -> "ProbeResult":
        return cls(is_alive=True, error_message="", status_code=status_code)

    @classmethod
    def dead(cls, error_message: str, status_code: int = 0) -> "ProbeResult":
        return cls(is_alive=False, error_message=error_message, status_code=status_code)

    @classmethod
    def from_status(cls, status_code: int) -> "ProbeResult":
        if status_code < 400:
            return cls.alive(status_code)
        return cls.dead(f"HTTP {status_code}", status_code)


class CheckedEntry(BaseModel):
    """An entry paired with its probe result and 1-based playlist position."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=1)
    entry: StreamEntry
    result: ProbeResult


class CheckRun(BaseModel):
    """Aggregate for one execution of the checker.

    Why an aggregate:
    - Keeps results in playlist order so reports are deterministic.
    - Counts and the success rate are derived, never stored separately.
    """

    entries: list[CheckedEntry] = Field(
        default_factory=list,
        description="Checked entries in playlist order.",
    )
    started_at: datetime = Field(default_factory=_utcnow)
    finished_at: datetime | None = Field(default=None)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return len(self.entries)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def alive_count(self) -> int:
        return sum(1 for checked in self.entries if checked.result.is_alive)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dead_count(self) -> int:
        return self.total - self.alive_count

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_rate(self) -> float | None:
        """Fraction of live entries (0..1), or None for an empty run."""

        if not self.entries:
            return None
        return self.alive_count / self.total

    @property
    def dead_entries(self) -> list[CheckedEntry]:
        return [checked for checked in self.entries if not checked.result.is_alive]
