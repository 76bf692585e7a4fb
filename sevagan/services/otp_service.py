"""OTP authenticator.

Per recipient key: no code -> pending(code, expiresAt) -> consumed on a
successful verify, or expired once expiresAt passes. Failed attempts leave
the pending code untouched (no lockout, no window extension).
"""
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from sevagan.core.auth_utils import channel_for, generate_otp_code, make_session_token
from sevagan.core.errors import InvalidOtp, NoOtpRequested, OtpExpired
from sevagan.models.account import Account
from sevagan.models.auth import SignupProfile
from sevagan.services.account_store import AccountStore
from sevagan.services.logger import log_debug, log_warning
from sevagan.services.time_utils import now_ms


@dataclass
class OtpRecord:
    code: str
    expires_at: int
    keys: List[str] = field(default_factory=list)


@dataclass
class OtpIssue:
    request_id: str
    channels: List[str]
    code: str


def recipient_key(account_type: str, mobile: str = None, email: str = None) -> str:
    return mobile or email or account_type


class OtpAuthenticator:
    def __init__(
        self,
        accounts: AccountStore,
        channel,
        profile_sink,
        token_prefix: str = "dev-token",
        ttl_seconds: int = 300,
        single_use: bool = True,
        clock: Callable[[], int] = now_ms,
        code_factory: Callable[[], str] = generate_otp_code,
    ):
        self._accounts = accounts
        self._channel = channel
        self._profile_sink = profile_sink
        self._token_prefix = token_prefix
        self._ttl_ms = ttl_seconds * 1000
        self._single_use = single_use
        self._clock = clock
        self._code_factory = code_factory
        self._lock = threading.Lock()
        self._otps: Dict[str, OtpRecord] = {}

    def _identifiers(self, mobile: str = None, email: str = None) -> List[str]:
        """Every delivery identifier known for the party behind mobile/email."""
        account = self._accounts.find_by_contact(mobile, email)
        if account is not None:
            candidates = [account.mobile, account.email, mobile, email]
        else:
            candidates = [mobile, email]
        ids: List[str] = []
        for c in candidates:
            if c and c not in ids:
                ids.append(c)
        return ids

    def request_otp(self, account_type: str, mobile: str = None, email: str = None,
                    profile: Optional[SignupProfile] = None) -> OtpIssue:
        key = recipient_key(account_type, mobile, email)
        identifiers = self._identifiers(mobile, email)
        keys = list(identifiers)
        if key not in keys:
            keys.insert(0, key)

        code = self._code_factory()
        now = self._clock()
        record = OtpRecord(code=code, expires_at=now + self._ttl_ms, keys=keys)
        with self._lock:
            self._purge_expired(now)
            # a newer request replaces, never stacks
            for k in keys:
                self._otps[k] = record

        message = f"Your SEVAGAN verification code is {code}. It expires in {self._ttl_ms // 60000} minutes."
        for identifier in identifiers:
            try:
                self._channel.deliver(identifier, message)
            except Exception as exc:
                log_warning("otp_delivery_failed", {"identifier": identifier, "error": str(exc)})
        log_debug("otp_issued", {"key": key, "identifiers": identifiers, "code": code})

        if profile is not None:
            self._export_profile(account_type, key, profile)

        channels = [channel_for(i) for i in identifiers] or [channel_for(key)]
        return OtpIssue(request_id=key, channels=list(dict.fromkeys(channels)), code=code)

    def _export_profile(self, account_type: str, key: str, profile: SignupProfile):
        row = {
            "requestedAt": self._clock(),
            "accountType": account_type,
            "recipientKey": key,
            **profile.model_dump(by_alias=True),
        }
        try:
            self._profile_sink.append(row)
        except Exception as exc:
            # the export must never fail the OTP request
            log_warning("profile_export_failed", {"key": key, "error": str(exc)})

    def _purge_expired(self, now: int):
        """Caller holds the lock."""
        for k in [k for k, r in self._otps.items() if now >= r.expires_at]:
            del self._otps[k]

    def pending(self, key: str) -> Optional[OtpRecord]:
        with self._lock:
            return self._otps.get(key)

    def verify_otp(self, account_type: str, otp: str, mobile: str = None,
                   email: str = None) -> Tuple[str, Account]:
        key = recipient_key(account_type, mobile, email)
        with self._lock:
            record = self._otps.get(key)
            if record is None:
                raise NoOtpRequested()
            if self._clock() >= record.expires_at:
                raise OtpExpired()
            if record.code != (otp or "").strip():
                raise InvalidOtp()
            if self._single_use:
                for k in record.keys:
                    if self._otps.get(k) is record:
                        del self._otps[k]

        account = self._accounts.find_by_contact(mobile, email)
        if account is None:
            account = self._accounts.create(
                account_type,
                name=mobile or email or account_type,
                mobile=mobile,
                email=email,
                verified=True,
            )
            log_debug("account_created", {"id": account.id, "type": account.type})
        else:
            self._accounts.mark_verified(account)

        token = make_session_token(account.id, self._token_prefix)
        return token, account
