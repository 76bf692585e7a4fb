"""Wires the in-memory stores and services for one application instance."""
from dataclasses import dataclass
from typing import Callable

from sevagan.core.config import Settings
from sevagan.services.account_store import AccountStore
from sevagan.services.broadcast import Broadcaster
from sevagan.services.donor_directory import DonorDirectory
from sevagan.services.need_registry import NeedRegistry
from sevagan.services.notification_channel import LogNotificationChannel
from sevagan.services.otp_service import OtpAuthenticator
from sevagan.services.profile_sink import CsvProfileSink, NullProfileSink
from sevagan.services.relay import ResponseRelay
from sevagan.services.session_service import SessionService
from sevagan.services.time_utils import now_ms


@dataclass
class Services:
    settings: Settings
    donors: DonorDirectory
    accounts: AccountStore
    broadcaster: Broadcaster
    needs: NeedRegistry
    channel: LogNotificationChannel
    otp: OtpAuthenticator
    sessions: SessionService
    relay: ResponseRelay


def build_services(settings: Settings, clock: Callable[[], int] = now_ms,
                   profile_sink=None) -> Services:
    if profile_sink is None:
        if settings.PROFILE_EXPORT_PATH:
            profile_sink = CsvProfileSink(settings.PROFILE_EXPORT_PATH)
        else:
            profile_sink = NullProfileSink()

    donors = DonorDirectory(clock=clock)
    accounts = AccountStore(clock=clock)
    broadcaster = Broadcaster(queue_size=settings.STREAM_QUEUE_SIZE)
    needs = NeedRegistry(accounts, broadcaster, clock=clock)
    channel = LogNotificationChannel(clock=clock)
    otp = OtpAuthenticator(
        accounts,
        channel,
        profile_sink,
        token_prefix=settings.TOKEN_PREFIX,
        ttl_seconds=settings.OTP_TTL_SECONDS,
        single_use=settings.OTP_SINGLE_USE,
        clock=clock,
    )
    sessions = SessionService(accounts, donors, token_prefix=settings.TOKEN_PREFIX)
    relay = ResponseRelay(needs, accounts, channel, clock=clock)
    return Services(
        settings=settings,
        donors=donors,
        accounts=accounts,
        broadcaster=broadcaster,
        needs=needs,
        channel=channel,
        otp=otp,
        sessions=sessions,
        relay=relay,
    )
