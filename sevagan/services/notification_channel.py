"""Out-of-band delivery of OTPs and donor messages.

No SMS or email provider is wired in; deliveries are printed and kept in
memory so they can be inspected in development.
"""
import threading
from collections import deque
from typing import Callable, Deque, List

from sevagan.core.auth_utils import channel_for
from sevagan.models.notification import Delivery
from sevagan.services.logger import log_debug
from sevagan.services.time_utils import now_ms

DELIVERY_LOG_SIZE = 500


class LogNotificationChannel:
    def __init__(self, clock: Callable[[], int] = now_ms, max_log: int = DELIVERY_LOG_SIZE):
        self._clock = clock
        self._lock = threading.Lock()
        # oldest deliveries fall off once the log is full
        self.deliveries: Deque[Delivery] = deque(maxlen=max_log)

    def deliver(self, identifier: str, message: str) -> Delivery:
        delivery = Delivery(
            identifier=identifier,
            channel=channel_for(identifier),
            message=message,
            created_at=self._clock(),
        )
        with self._lock:
            self.deliveries.append(delivery)
        log_debug("notification_delivered", delivery.to_json_dict())
        return delivery

    def sent_to(self, identifier: str) -> List[Delivery]:
        with self._lock:
            return [d for d in self.deliveries if d.identifier == identifier]
