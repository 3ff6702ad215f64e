"""
In-process feed of newly submitted feedback.

The app owns one FeedbackFeed (``app.extensions["feedback_feed"]``). Callers get an
explicit FeedSubscription handle back from ``subscribe`` and tear it down with
``unsubscribe`` (or by using the handle as a context manager).
"""
from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

FeedCallback = Callable[[Dict[str, Any]], None]


class FeedSubscription:
    def __init__(self, feed: "FeedbackFeed", sub_id: int, business_id: Optional[int], callback: FeedCallback):
        self._feed = feed
        self.id = sub_id
        self.business_id = business_id
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._feed._remove(self)

    def __enter__(self) -> "FeedSubscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()

    def __repr__(self) -> str:
        return f"<FeedSubscription id={self.id} business_id={self.business_id} active={self.active}>"


class FeedbackFeed:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self._log = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._subs: Dict[int, FeedSubscription] = {}

    def subscribe(self, business_id: Optional[int], callback: FeedCallback) -> FeedSubscription:
        """business_id=None receives inserts for every tenant."""
        with self._lock:
            sub = FeedSubscription(self, next(self._ids), business_id, callback)
            self._subs[sub.id] = sub
        return sub

    def _remove(self, sub: FeedSubscription) -> None:
        with self._lock:
            self._subs.pop(sub.id, None)

    def subscriber_count(self, business_id: Optional[int] = None) -> int:
        with self._lock:
            if business_id is None:
                return len(self._subs)
            return sum(1 for s in self._subs.values() if s.business_id in (None, business_id))

    def publish(self, business_id: int, payload: Dict[str, Any]) -> int:
        """
        Deliver one inserted record to matching subscribers, synchronously and in
        subscription order. Returns how many callbacks completed.
        """
        with self._lock:
            targets: List[FeedSubscription] = [
                s for s in self._subs.values() if s.business_id in (None, business_id)
            ]

        delivered = 0
        for sub in targets:
            if not sub.active:
                continue
            try:
                sub.callback(payload)
                delivered += 1
            except Exception:
                self._log.exception("feed callback failed (subscription=%s)", sub.id)
        return delivered
