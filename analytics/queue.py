# analytics/queue.py
import logging
import threading
from collections import deque

import requests

logger = logging.getLogger(__name__)

DROP_OLDEST = 'drop_oldest'
BLOCK = 'block'
POLICIES = (DROP_OLDEST, BLOCK)


class AnalyticsTransportError(Exception):
    """A batch could not be delivered to the analytics service."""


class HttpTransport:
    """Posts batches to the analytics ingestion API."""

    def __init__(self, endpoint, api_key, timeout=5):
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout

    def send(self, events):
        try:
            response = requests.post(
                self.endpoint,
                json={'apiKey': self.api_key, 'events': events},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise AnalyticsTransportError(str(e)) from e


class EventQueue:
    """
    Bounded in-memory buffer of analytics events, shared by request threads.

    When full, `drop_oldest` evicts the oldest pending event to make room;
    `block` waits up to `block_timeout` seconds for a flush to free space and
    rejects the event if none comes. Either way `dropped` counts the loss.
    """

    def __init__(self, transport, max_pending=500, batch_size=25, policy=DROP_OLDEST, block_timeout=2.0):
        if policy not in POLICIES:
            raise ValueError(f"Unknown overflow policy '{policy}'. Expected one of: {', '.join(POLICIES)}")
        if max_pending < 1 or batch_size < 1:
            raise ValueError("max_pending and batch_size must be positive")
        self.transport = transport
        self.max_pending = max_pending
        self.batch_size = batch_size
        self.policy = policy
        self.block_timeout = block_timeout
        self.dropped = 0
        self._events = deque()
        self._space = threading.Condition()

    def __len__(self):
        with self._space:
            return len(self._events)

    @property
    def batch_ready(self):
        # A full queue is always ready, even when max_pending < batch_size
        return len(self) >= min(self.batch_size, self.max_pending)

    def put(self, event):
        """Enqueues one event. Returns False when the event was rejected."""
        with self._space:
            if len(self._events) >= self.max_pending:
                if self.policy == DROP_OLDEST:
                    self._events.popleft()
                    self.dropped += 1
                    logger.warning("Analytics queue full, dropped oldest event (%s dropped so far)", self.dropped)
                elif not self._space.wait_for(lambda: len(self._events) < self.max_pending,
                                              timeout=self.block_timeout):
                    self.dropped += 1
                    logger.warning("Analytics queue full for %ss, rejected event", self.block_timeout)
                    return False
            self._events.append(event)
            return True

    def _take_batch(self):
        with self._space:
            batch = [self._events.popleft() for _ in range(min(self.batch_size, len(self._events)))]
            if batch:
                self._space.notify_all()
            return batch

    def flush(self):
        """
        Sends everything pending, batch by batch. A failed batch is logged
        and discarded. Returns the number of events delivered.
        """
        delivered = 0
        while True:
            batch = self._take_batch()
            if not batch:
                return delivered
            try:
                self.transport.send(batch)
            except AnalyticsTransportError as e:
                logger.warning("Discarding %s analytics events: %s", len(batch), e)
                continue
            delivered += len(batch)
