"""
Change broadcasting - registry-free listeners kept in sync with the store.
"""

from chuk_mcp_tokens.broadcast.broadcaster import ChangeBroadcaster, ChangeEvent, Subscription
from chuk_mcp_tokens.broadcast.matchers import AlwaysMatcher, ExactMatcher, Matcher, SubstringMatcher
from chuk_mcp_tokens.broadcast.scheduler import (
    AsyncioScheduler,
    ImmediateScheduler,
    ManualScheduler,
    Scheduler,
)

__all__ = [
    "AlwaysMatcher",
    "AsyncioScheduler",
    "ChangeBroadcaster",
    "ChangeEvent",
    "ExactMatcher",
    "ImmediateScheduler",
    "ManualScheduler",
    "Matcher",
    "Scheduler",
    "SubstringMatcher",
    "Subscription",
]
