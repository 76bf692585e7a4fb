import secrets
from typing import Optional

OTP_MIN = 100000
OTP_MAX = 999999


def generate_otp_code() -> str:
    """Uniformly random 6-digit code in [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def make_session_token(account_id: str, prefix: str) -> str:
    # Dev-only scheme; replace with a signed token before any real deployment
    return f"{prefix}-{account_id}"


def account_id_from_token(token: Optional[str], prefix: str) -> Optional[str]:
    if not token:
        return None
    marker = f"{prefix}-"
    if not token.startswith(marker):
        return None
    account_id = token[len(marker):].strip()
    return account_id or None


def channel_for(identifier: str) -> str:
    """Delivery channel kind for a recipient identifier."""
    if "@" in identifier:
        return "email"
    if len(identifier) == 10 and identifier.isascii() and identifier.isdigit():
        return "sms"
    return "other"
