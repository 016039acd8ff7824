"""Service layer: event feed and the pick linking pipeline."""

from picklink.services.event_feed import EventFeedService
from picklink.services.pick_linker import (
    LinkResult,
    LinkStatus,
    PickLinker,
    create_pick_linker,
)

__all__ = [
    "EventFeedService",
    "LinkResult",
    "LinkStatus",
    "PickLinker",
    "create_pick_linker",
]
