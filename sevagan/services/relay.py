"""Donor responses to needs and ad-hoc donor notifications.

Both are append-only logs; delivery goes through the notification channel
and is best effort.
"""
import threading
import uuid
from typing import Callable, List, Tuple

from sevagan.models.need import NeedResponseRecord
from sevagan.models.notification import NotificationRecord
from sevagan.services.account_store import AccountStore
from sevagan.services.logger import log_warning
from sevagan.services.need_registry import NeedRegistry
from sevagan.services.time_utils import now_ms


class ResponseRelay:
    def __init__(self, needs: NeedRegistry, accounts: AccountStore, channel,
                 clock: Callable[[], int] = now_ms):
        self._needs = needs
        self._accounts = accounts
        self._channel = channel
        self._clock = clock
        self._lock = threading.Lock()
        self.responses: List[NeedResponseRecord] = []
        self.notifications: List[NotificationRecord] = []

    def respond_to_need(self, need_id: str, contact: str, message: str = None,
                        donor_name: str = None) -> Tuple[NeedResponseRecord, List[str]]:
        """Raises NeedNotFound for an unknown need."""
        need = self._needs.get(need_id)

        record = NeedResponseRecord(
            id=str(uuid.uuid4()),
            need_id=need.id,
            contact=contact,
            message=message,
            donor_name=donor_name,
            created_at=self._clock(),
        )
        with self._lock:
            self.responses.append(record)

        recipients = []
        requester = self._accounts.get(need.requester_account_id)
        if requester is not None:
            recipients.extend([requester.mobile, requester.email])
        recipients.append(contact)
        notify_to = list(dict.fromkeys(r for r in recipients if r))

        text = message or f"{donor_name or 'A donor'} can donate {need.blood_group} in {need.city}. Contact: {contact}"
        self._send(notify_to, text)
        return record, notify_to

    def notify_donor(self, mobile: str, donor_id: str, message: str) -> NotificationRecord:
        record = NotificationRecord(
            id=str(uuid.uuid4()),
            mobile=mobile,
            donor_id=donor_id,
            message=message,
            created_at=self._clock(),
        )
        with self._lock:
            self.notifications.append(record)
        self._send([mobile], message)
        return record

    def _send(self, identifiers: List[str], message: str):
        for identifier in identifiers:
            try:
                self._channel.deliver(identifier, message)
            except Exception as exc:
                log_warning("relay_delivery_failed", {"identifier": identifier, "error": str(exc)})
