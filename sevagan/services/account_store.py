"""In-memory store of verified accounts."""
import threading
import uuid
from typing import Callable, Dict, Optional

from sevagan.models.account import Account
from sevagan.services.time_utils import now_ms


class AccountStore:
    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._lock = threading.Lock()
        self._accounts: Dict[str, Account] = {}

    def add(self, account: Account) -> Account:
        with self._lock:
            self._accounts[account.id] = account
        return account

    def create(self, account_type: str, name: str, mobile: str = None,
               email: str = None, verified: bool = False) -> Account:
        now = self._clock()
        account = Account(
            id=str(uuid.uuid4()),
            type=account_type,
            name=name,
            mobile=mobile or None,
            email=email or None,
            created_at=now,
            verified_at=now if verified else None,
        )
        return self.add(account)

    def get(self, account_id: str) -> Optional[Account]:
        if not account_id:
            return None
        with self._lock:
            return self._accounts.get(account_id)

    def find_by_contact(self, mobile: str = None, email: str = None) -> Optional[Account]:
        """First account whose mobile or email matches, in creation order."""
        if not mobile and not email:
            return None
        with self._lock:
            accounts = list(self._accounts.values())
        for a in accounts:
            if mobile and a.mobile == mobile:
                return a
            if email and a.email == email:
                return a
        return None

    def mark_verified(self, account: Account) -> Account:
        with self._lock:
            account.verified_at = self._clock()
        return account

    def update(self, account: Account, changes: dict) -> Account:
        """Applies only the supplied fields."""
        with self._lock:
            for field, value in changes.items():
                setattr(account, field, value)
        return account

    def count(self) -> int:
        with self._lock:
            return len(self._accounts)
