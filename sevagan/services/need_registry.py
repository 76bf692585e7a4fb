"""Blood-need registry.

Stores needs and hands every newly created one to the live-feed broadcaster.
"""
import threading
import uuid
from typing import Callable, List

from sevagan.core.errors import NeedNotFound
from sevagan.models.need import BloodNeedCreate, BloodNeedRequest, NeedFeedItem
from sevagan.services.account_store import AccountStore
from sevagan.services.broadcast import Broadcaster
from sevagan.services.logger import log_debug
from sevagan.services.time_utils import now_ms, start_of_day_ms, urgency_tag


class NeedRegistry:
    def __init__(self, accounts: AccountStore, broadcaster: Broadcaster,
                 clock: Callable[[], int] = now_ms):
        self._accounts = accounts
        self._broadcaster = broadcaster
        self._clock = clock
        self._lock = threading.Lock()
        self._needs: List[BloodNeedRequest] = []

    def create(self, data: BloodNeedCreate) -> BloodNeedRequest:
        fields = data.model_dump()

        # snapshot of the requester's name; later renames do not touch it
        if not fields.get("requester_name"):
            account = self._accounts.get(fields.get("requester_account_id"))
            if account is not None:
                fields["requester_name"] = account.name

        need = BloodNeedRequest(**fields, id=str(uuid.uuid4()), created_at=self._clock())
        payload = need.model_dump_json(by_alias=True, exclude_none=True)

        # append and publish under one lock so feed order matches creation order
        with self._lock:
            self._needs.append(need)
            delivered = self._broadcaster.publish(payload)

        log_debug("need_created", {"id": need.id, "bloodGroup": need.blood_group,
                                   "city": need.city, "delivered": delivered})
        return need

    def list(self) -> List[BloodNeedRequest]:
        with self._lock:
            return list(reversed(self._needs))

    def get(self, need_id: str) -> BloodNeedRequest:
        with self._lock:
            for need in self._needs:
                if need.id == need_id:
                    return need
        raise NeedNotFound()

    def feed(self, limit: int = 20) -> List[NeedFeedItem]:
        now = self._clock()
        return [
            NeedFeedItem(
                **need.model_dump(),
                urgency=urgency_tag(need.needed_at_iso, now, need.time_option),
            )
            for need in self.list()[:limit]
        ]

    def count(self) -> int:
        with self._lock:
            return len(self._needs)

    def count_today(self) -> int:
        since = start_of_day_ms(self._clock())
        with self._lock:
            return sum(1 for n in self._needs if n.created_at >= since)
