"""In-memory donor directory.

Stores donor records and answers filtered searches. Records are never
deleted; only their contact fields change when the owning account does.
"""
import threading
import uuid
from typing import Callable, List, Optional

from sevagan.models.donor import Donor, DonorCreate, DonorSearchQuery
from sevagan.services.time_utils import now_ms


class DonorDirectory:
    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._lock = threading.Lock()
        self._donors: List[Donor] = []

    def create(self, data: DonorCreate) -> Donor:
        # no duplicate-mobile rejection: the same person may register twice
        donor = Donor(
            **data.model_dump(),
            id=str(uuid.uuid4()),
            created_at=self._clock(),
        )
        with self._lock:
            self._donors.append(donor)
        return donor

    def search(self, query: Optional[DonorSearchQuery] = None) -> List[Donor]:
        """Most-recently-created first; every supplied filter must match."""
        query = query or DonorSearchQuery()
        city = query.city.lower() if query.city else None

        with self._lock:
            results = list(reversed(self._donors))

        if query.blood_group:
            results = [d for d in results if d.blood_group == query.blood_group]
        if city:
            results = [d for d in results if d.city.lower() == city]
        if query.pincode:
            results = [d for d in results if d.pincode == query.pincode]
        return results

    def count(self) -> int:
        with self._lock:
            return len(self._donors)

    def find_for_account(self, account_id: str, mobile: str = None,
                         email: str = None) -> Optional[Donor]:
        """
        Donor linked by accountId, else the first donor whose mobile or
        email matches the account's contact details.
        """
        with self._lock:
            donors = list(self._donors)

        for d in donors:
            if d.account_id and d.account_id == account_id:
                return d
        for d in donors:
            if mobile and d.mobile == mobile:
                return d
            if email and d.email == email:
                return d
        return None

    def sync_contact(self, account_id: str, old_mobile: str, old_email: str,
                     new_mobile: str, new_email: str) -> int:
        """
        Re-points donor contact fields after an account's contact change.
        Donors linked by accountId get the account's current values; donors
        still carrying the account's previous mobile/email (registered before
        the account existed) are moved to the new values too.
        Returns the number of donors touched.
        """
        touched = 0
        with self._lock:
            for d in self._donors:
                changed = False
                if d.account_id and d.account_id == account_id:
                    if new_mobile and d.mobile != new_mobile:
                        d.mobile = new_mobile
                        changed = True
                    if new_email and d.email != new_email:
                        d.email = new_email
                        changed = True
                if old_mobile and new_mobile and d.mobile == old_mobile:
                    d.mobile = new_mobile
                    changed = True
                if old_email and new_email and d.email == old_email:
                    d.email = new_email
                    changed = True
                if changed:
                    touched += 1
        return touched
