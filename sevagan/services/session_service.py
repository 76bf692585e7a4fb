"""Bearer-token sessions and the caller's own profile."""
from typing import Optional, Tuple

from sevagan.core.auth_utils import account_id_from_token
from sevagan.core.errors import NotAuthorized
from sevagan.models.account import Account, AccountUpdate
from sevagan.models.donor import Donor
from sevagan.services.account_store import AccountStore
from sevagan.services.donor_directory import DonorDirectory
from sevagan.services.logger import log_debug


class SessionService:
    def __init__(self, accounts: AccountStore, donors: DonorDirectory,
                 token_prefix: str = "dev-token"):
        self._accounts = accounts
        self._donors = donors
        self._token_prefix = token_prefix

    def resolve(self, token: Optional[str]) -> Account:
        account_id = account_id_from_token(token, self._token_prefix)
        account = self._accounts.get(account_id)
        if account is None:
            raise NotAuthorized()
        return account

    def get_me(self, token: Optional[str]) -> Tuple[Account, Optional[Donor]]:
        account = self.resolve(token)
        donor = self._donors.find_for_account(account.id, account.mobile, account.email)
        return account, donor

    def update_me(self, token: Optional[str], update: AccountUpdate) -> Account:
        account = self.resolve(token)
        changes = update.model_dump(exclude_unset=True, exclude_none=True)

        # the donor sweep compares against the contact values before this update
        old_mobile, old_email = account.mobile, account.email
        self._accounts.update(account, changes)

        touched = self._donors.sync_contact(
            account.id, old_mobile, old_email, account.mobile, account.email
        )
        log_debug("account_updated", {"id": account.id, "fields": sorted(changes),
                                      "donorsSynced": touched})
        return account
