"""Notifications emitted by the intrusion monitor.

Listeners registered with :meth:`IntrusionMonitor.add_listener` receive
either an :class:`IntrusionTransition` (one trackable entered or left the
set of armed fences) or an :class:`AlarmEvent` (the aggregate alarm
flipped).
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MonitorState(StrEnum):
    IDLE = "idle"
    MONITORING = "monitoring"


class TransitionKind(StrEnum):
    ENTERED = "entered"
    CLEARED = "cleared"


class AlarmStatus(StrEnum):
    ACTIVATED = "activated"
    CLEARED = "cleared"


class _MonitorEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class IntrusionTransition(_MonitorEvent):
    """A watched trackable changed between inside and outside armed fences."""

    trackable_id: str
    kind: TransitionKind
    fence_ids: frozenset[str] = Field(
        default_factory=frozenset,
        description="Armed fences containing the trackable (empty when cleared).",
    )


class AlarmEvent(_MonitorEvent):
    """The aggregate alarm flipped."""

    status: AlarmStatus
    intruders: frozenset[str] = Field(default_factory=frozenset)

    @property
    def intrusion_count(self) -> int:
        return len(self.intruders)


MonitorEvent = IntrusionTransition | AlarmEvent
