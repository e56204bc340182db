"""
Change broadcaster - tells listeners which variables changed.

There is no registry of which listener depends on which variable.
Every subscriber carries a matcher and decides relevance itself; a
global change (no names) reaches everyone.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from chuk_mcp_tokens.broadcast.matchers import AlwaysMatcher, Matcher
from chuk_mcp_tokens.broadcast.scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)


class ChangeEvent(BaseModel):
    """One published change."""

    names: frozenset[str] = Field(
        default_factory=frozenset,
        description="Changed variable names; empty means everything may have changed",
    )

    model_config = {"frozen": True}

    @property
    def is_global(self) -> bool:
        return not self.names

    def concerns(self, matcher: Matcher) -> bool:
        """Whether a listener with this matcher must re-evaluate."""
        return self.is_global or any(matcher.matches(name) for name in self.names)


Listener = Callable[[ChangeEvent], object]


@dataclass(frozen=True, eq=False)
class Subscription:
    """Handle returned by ``subscribe``."""

    callback: Listener
    matcher: Matcher
    broadcaster: ChangeBroadcaster = field(repr=False)

    @property
    def active(self) -> bool:
        return self.broadcaster.is_subscribed(self)

    def unsubscribe(self) -> None:
        self.broadcaster.unsubscribe(self)


class ChangeBroadcaster:
    """
    Publishes change events to self-selecting subscribers.

    ``publish`` delivers synchronously. ``schedule`` collects names and
    delivers one coalesced event on the scheduler's next tick.
    """

    def __init__(self, scheduler: Scheduler | None = None):
        """
        Initialize the broadcaster.

        Args:
            scheduler: Runs deferred flushes (asyncio next tick when omitted)
        """
        self.scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._subscriptions: list[Subscription] = []
        self._pending_names: set[str] = set()
        self._pending_global = False
        self._flush_scheduled = False

    def subscribe(self, callback: Listener, matcher: Matcher | None = None) -> Subscription:
        """
        Register a listener.

        Args:
            callback: Called with the ChangeEvent
            matcher: Relevance test (every change when omitted)

        Returns:
            Subscription handle
        """
        subscription = Subscription(
            callback=callback,
            matcher=matcher or AlwaysMatcher(),
            broadcaster=self,
        )
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a listener; returns False if it was not subscribed."""
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
            return True
        return False

    def is_subscribed(self, subscription: Subscription) -> bool:
        return subscription in self._subscriptions

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def publish(self, names: Iterable[str] | None = None) -> int:
        """
        Deliver a change event now.

        Args:
            names: Changed variable names; None or empty means a global change

        Returns:
            Number of listeners the event was delivered to
        """
        event = ChangeEvent(names=frozenset(names or ()))
        notified = 0
        for subscription in list(self._subscriptions):
            if not event.concerns(subscription.matcher):
                continue
            notified += 1
            try:
                subscription.callback(event)
            except Exception:
                logger.exception("Change listener failed")
        logger.debug(
            f"Published {'global change' if event.is_global else sorted(event.names)} "
            f"to {notified} listeners"
        )
        return notified

    def schedule(self, names: Iterable[str] | None = None) -> None:
        """Queue names for the next coalesced publish."""
        batch = set(names or ())
        if batch:
            self._pending_names |= batch
        else:
            self._pending_global = True

        if not self._flush_scheduled:
            self._flush_scheduled = True
            self.scheduler.call_soon(self.flush)

    @property
    def pending(self) -> bool:
        return self._pending_global or bool(self._pending_names)

    def flush(self) -> int:
        """Publish everything queued so far; returns listeners notified."""
        self._flush_scheduled = False
        if not self.pending:
            return 0
        names = None if self._pending_global else set(self._pending_names)
        self._pending_names = set()
        self._pending_global = False
        return self.publish(names)
