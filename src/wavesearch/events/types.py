"""Domain event types for wave store mutations."""
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from wavesearch.model.ids import WaveletName


class EventType(str, Enum):
    """Domain event types raised by the wave store."""

    WAVE_INIT = "wave.init"
    WAVELET_COMMITTED = "wavelet.committed"
    WAVELET_UPDATE = "wavelet.update"
    PARTICIPANT_ADDED = "participant.added"
    PARTICIPANT_REMOVED = "participant.removed"


Topic = Literal["waves"]


class DomainEvent(BaseModel):
    """Typed domain event for a wave store mutation.

    Attributes:
        id: Unique event identifier (UUID).
        type: Event type indicating the mutation.
        timestamp: Event timestamp in UTC.
        topic: Event topic for routing to subscribers.
        wave_id: Wave the mutation applies to.
        wavelet_id: Wavelet the mutation applies to.
        version: Committed or applied version, when known.
        delta_count: Number of deltas in an incremental update.
        participant: Participant address for membership events.
    """

    id: str = Field(description="Unique event identifier (UUID)")
    type: EventType = Field(description="Event type")
    timestamp: datetime = Field(description="Event timestamp (UTC)")
    topic: Topic = Field(default="waves", description="Event topic for routing")
    wave_id: str | None = Field(default=None, description="Wave id")
    wavelet_id: str | None = Field(default=None, description="Wavelet id")
    version: int | None = Field(default=None, description="Wavelet version")
    delta_count: int | None = Field(default=None, description="Deltas in update")
    participant: str | None = Field(default=None, description="Participant address")

    @property
    def wavelet_name(self) -> WaveletName | None:
        """Wavelet identity carried by the event, if complete."""
        if self.wave_id is None or self.wavelet_id is None:
            return None
        return WaveletName.of(self.wave_id, self.wavelet_id)


def wave_event(
    event_type: EventType,
    name: WaveletName,
    version: int | None = None,
    delta_count: int | None = None,
    participant: str | None = None,
) -> DomainEvent:
    """Build a wave-topic event for a wavelet.

    Args:
        event_type: Mutation kind.
        name: Wavelet the mutation applies to.
        version: Version reached, if relevant.
        delta_count: Number of deltas applied, if relevant.
        participant: Participant address, for membership events.

    Returns:
        A new DomainEvent stamped with the current UTC time.
    """
    return DomainEvent(
        id=str(uuid.uuid4()),
        type=event_type,
        timestamp=datetime.now(UTC),
        topic="waves",
        wave_id=name.wave_id,
        wavelet_id=name.wavelet_id,
        version=version,
        delta_count=delta_count,
        participant=participant,
    )
