"""Live-feed fan-out of newly created needs.

Each open server-sent-events connection owns a Subscription: an asyncio
queue bound to the event loop that serves the connection. Publishing may
happen from any thread; every push is handed to the subscriber's loop with
``call_soon_threadsafe``.

Subscription states: open -> closed. A closed subscription is removed from
the subscriber set and never receives further events.
"""
import asyncio
import threading
import uuid
from typing import List, Optional

from sevagan.services.logger import log_debug, log_warning

# queued to a subscriber to end its stream
CLOSED = None


class Subscription:
    def __init__(self, loop: asyncio.AbstractEventLoop, maxsize: int = 100):
        self.id = str(uuid.uuid4())
        self._loop = loop
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self.closed = False
        self.dropped = 0

    def push(self, payload: str) -> bool:
        """Schedules delivery on the subscriber's loop. False if it is gone."""
        if self.closed:
            return False
        try:
            self._loop.call_soon_threadsafe(self._deliver, payload)
        except RuntimeError:
            # loop already closed: the connection is dead
            self.closed = True
            return False
        return True

    def _deliver(self, payload: Optional[str]):
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            if payload is CLOSED:
                # make room so the stream still learns it is closed
                self._queue.get_nowait()
                self._queue.put_nowait(payload)
                return
            self.dropped += 1
            log_warning("feed_event_dropped", {"subscription": self.id, "dropped": self.dropped})

    async def get(self) -> Optional[str]:
        """Next payload, or CLOSED once the subscription has been closed."""
        return await self._queue.get()

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            self._loop.call_soon_threadsafe(self._deliver, CLOSED)
        except RuntimeError:
            pass


class Broadcaster:
    def __init__(self, queue_size: int = 100):
        self._queue_size = queue_size
        self._lock = threading.Lock()
        self._subscribers: List[Subscription] = []

    def subscribe(self, loop: asyncio.AbstractEventLoop = None) -> Subscription:
        sub = Subscription(loop or asyncio.get_running_loop(), maxsize=self._queue_size)
        with self._lock:
            self._subscribers.append(sub)
        log_debug("feed_subscribed", {"subscription": sub.id, "open": self.count()})
        return sub

    def unsubscribe(self, sub: Subscription):
        sub.close()
        with self._lock:
            if sub in self._subscribers:
                self._subscribers.remove(sub)
        log_debug("feed_unsubscribed", {"subscription": sub.id, "open": self.count()})

    def publish(self, payload: str) -> int:
        """
        Pushes one payload to every open subscription.
        Iterates over a snapshot so subscribers may come and go meanwhile;
        a failing subscriber is dropped without affecting the others.
        Returns the number of subscriptions the payload was handed to.
        """
        # one publish at a time keeps every subscriber's event order identical
        with self._lock:
            snapshot = list(self._subscribers)
            delivered = 0
            dead = []
            for sub in snapshot:
                try:
                    ok = sub.push(payload)
                except Exception as exc:
                    log_warning("feed_push_failed", {"subscription": sub.id, "error": str(exc)})
                    ok = False
                if ok:
                    delivered += 1
                else:
                    dead.append(sub)
            for sub in dead:
                if sub in self._subscribers:
                    self._subscribers.remove(sub)
        return delivered

    def count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def close_all(self):
        with self._lock:
            subs = list(self._subscribers)
            self._subscribers.clear()
        for sub in subs:
            sub.close()
