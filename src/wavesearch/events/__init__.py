"""Events subsystem carrying wave store mutations to subscribers."""
from wavesearch.events.bus import EventBus
from wavesearch.events.publisher import EventPublisher
from wavesearch.events.types import DomainEvent, EventType, wave_event

__all__ = [
    "DomainEvent",
    "EventBus",
    "EventPublisher",
    "EventType",
    "wave_event",
]
