"""
Lookup Domain

Tracks submissions per client session: state machine, sequencing and
cancellation of superseded lookups.
"""

from .entities import LookupCycle
from .services import LookupSession, LookupSessionRegistry
from .value_objects import CancellationToken, LookupOutcome, LookupState

__all__ = [
    "LookupCycle",
    "LookupSession",
    "LookupSessionRegistry",
    "CancellationToken",
    "LookupOutcome",
    "LookupState",
]
