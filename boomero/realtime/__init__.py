"""
Boomero Game State Store.

Atomic command handling and the observable streams read by the UI layer.
"""

from boomero.realtime.events import EventPayload, GameEvent, classify_transition
from boomero.realtime.store import GameStore
from boomero.realtime.streams import MessageStream, StateStream

__all__ = [
    "EventPayload",
    "GameEvent",
    "GameStore",
    "MessageStream",
    "StateStream",
    "classify_transition",
]
