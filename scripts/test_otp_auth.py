import re
import unittest

from sevagan.core.auth_utils import channel_for, generate_otp_code
from sevagan.core.errors import InvalidOtp, NoOtpRequested, OtpExpired
from sevagan.models.auth import SignupProfile
from sevagan.services.account_store import AccountStore
from sevagan.services.donor_directory import DonorDirectory
from sevagan.services.notification_channel import LogNotificationChannel
from sevagan.services.otp_service import OtpAuthenticator
from sevagan.services.session_service import SessionService


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now


class RecordingSink:
    def __init__(self):
        self.rows = []

    def append(self, row):
        self.rows.append(row)


class BrokenSink:
    def append(self, row):
        raise IOError("disk full")


class TestOtpCodes(unittest.TestCase):
    def test_code_is_six_digits_in_range(self):
        for _ in range(500):
            code = generate_otp_code()
            self.assertRegex(code, r"^[0-9]{6}$")
            self.assertTrue(100000 <= int(code) <= 999999)

    def test_channel_kinds(self):
        self.assertEqual(channel_for("9876543210"), "sms")
        self.assertEqual(channel_for("ops@cityhospital.in"), "email")
        self.assertEqual(channel_for("individual"), "other")
        self.assertEqual(channel_for("98765"), "other")


class TestOtpAuthenticator(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.accounts = AccountStore(clock=self.clock)
        self.channel = LogNotificationChannel(clock=self.clock)
        self.sink = RecordingSink()
        self.otp = OtpAuthenticator(
            self.accounts, self.channel, self.sink,
            token_prefix="dev-token", ttl_seconds=300, clock=self.clock,
        )
        self.sessions = SessionService(self.accounts, DonorDirectory(clock=self.clock))

    def test_round_trip(self):
        issue = self.otp.request_otp("individual", mobile="9876543210")
        self.assertEqual(issue.request_id, "9876543210")
        self.assertEqual(issue.channels, ["sms"])

        token, account = self.otp.verify_otp("individual", issue.code, mobile="9876543210")
        self.assertEqual(token, f"dev-token-{account.id}")
        resolved = self.sessions.resolve(token)
        self.assertEqual(resolved.id, account.id)
        self.assertEqual(resolved.mobile, "9876543210")
        self.assertEqual(resolved.type, "individual")
        self.assertEqual(resolved.name, "9876543210")
        self.assertEqual(resolved.verified_at, self.clock.now)

    def test_code_is_delivered(self):
        issue = self.otp.request_otp("hospital", email="ops@cityhospital.in")
        deliveries = self.channel.sent_to("ops@cityhospital.in")
        self.assertEqual(len(deliveries), 1)
        self.assertIn(issue.code, deliveries[0].message)
        self.assertEqual(issue.channels, ["email"])

    def test_no_request(self):
        with self.assertRaises(NoOtpRequested):
            self.otp.verify_otp("individual", "123456", mobile="9876543210")

    def test_expired(self):
        issue = self.otp.request_otp("individual", mobile="9876543210")
        self.clock.now += 300 * 1000
        with self.assertRaises(OtpExpired):
            self.otp.verify_otp("individual", issue.code, mobile="9876543210")

    def test_wrong_code_keeps_pending_code(self):
        issue = self.otp.request_otp("individual", mobile="9876543210")
        wrong = "000000" if issue.code != "000000" else "111111"
        for _ in range(3):
            with self.assertRaises(InvalidOtp):
                self.otp.verify_otp("individual", wrong, mobile="9876543210")
        token, _ = self.otp.verify_otp("individual", issue.code, mobile="9876543210")
        self.assertTrue(token)

    def test_second_request_overwrites(self):
        codes = iter(["111111", "222222"])
        self.otp._code_factory = lambda: next(codes)
        self.otp.request_otp("individual", mobile="9876543210")
        self.otp.request_otp("individual", mobile="9876543210")
        with self.assertRaises(InvalidOtp):
            self.otp.verify_otp("individual", "111111", mobile="9876543210")
        self.otp.verify_otp("individual", "222222", mobile="9876543210")

    def test_code_is_single_use(self):
        issue = self.otp.request_otp("individual", mobile="9876543210")
        self.otp.verify_otp("individual", issue.code, mobile="9876543210")
        with self.assertRaises(NoOtpRequested):
            self.otp.verify_otp("individual", issue.code, mobile="9876543210")

    def test_multi_use_when_configured(self):
        otp = OtpAuthenticator(self.accounts, self.channel, self.sink,
                               single_use=False, clock=self.clock)
        issue = otp.request_otp("individual", mobile="9876543210")
        _, first = otp.verify_otp("individual", issue.code, mobile="9876543210")
        _, second = otp.verify_otp("individual", issue.code, mobile="9876543210")
        self.assertEqual(first.id, second.id)

    def test_existing_account_reuses_and_files_under_all_identifiers(self):
        account = self.accounts.create("individual", "Priya", mobile="9876543210",
                                       email="priya@mail.in", verified=True)
        issue = self.otp.request_otp("individual", mobile="9876543210")
        self.assertEqual(issue.channels, ["sms", "email"])
        self.assertIs(self.otp.pending("priya@mail.in"), self.otp.pending("9876543210"))

        token, verified = self.otp.verify_otp("individual", issue.code, email="priya@mail.in")
        self.assertEqual(verified.id, account.id)
        self.assertEqual(self.accounts.count(), 1)
        # consuming through one identifier clears the others too
        self.assertIsNone(self.otp.pending("9876543210"))

    def test_account_type_fallback_key(self):
        issue = self.otp.request_otp("ngo")
        self.assertEqual(issue.request_id, "ngo")
        self.assertEqual(issue.channels, ["other"])
        token, account = self.otp.verify_otp("ngo", issue.code)
        self.assertEqual(account.name, "ngo")

    def test_expired_codes_are_purged_on_next_request(self):
        self.otp.request_otp("individual", mobile="9876543210")
        self.clock.now += 300 * 1000
        self.otp.request_otp("hospital", email="ops@cityhospital.in")
        self.assertIsNone(self.otp.pending("9876543210"))
        self.assertIsNotNone(self.otp.pending("ops@cityhospital.in"))

    def test_delivery_log_is_bounded(self):
        channel = LogNotificationChannel(clock=self.clock, max_log=3)
        for i in range(5):
            channel.deliver(f"900000000{i}", "hello")
        self.assertEqual(len(channel.deliveries), 3)
        self.assertEqual(channel.sent_to("9000000000"), [])
        self.assertEqual(len(channel.sent_to("9000000004")), 1)

    def test_profile_is_exported(self):
        profile = SignupProfile(name="Priya", mobile="9876543210", bloodGroup="O+", city="Salem")
        self.otp.request_otp("individual", mobile="9876543210", profile=profile)
        self.assertEqual(len(self.sink.rows), 1)
        row = self.sink.rows[0]
        self.assertEqual(row["recipientKey"], "9876543210")
        self.assertEqual(row["bloodGroup"], "O+")
        self.assertEqual(row["accountType"], "individual")

    def test_sink_failure_does_not_fail_request(self):
        otp = OtpAuthenticator(self.accounts, self.channel, BrokenSink(), clock=self.clock)
        issue = otp.request_otp("individual", mobile="9876543210",
                                profile=SignupProfile(name="Priya"))
        self.assertTrue(re.match(r"^\d{6}$", issue.code))


if __name__ == '__main__':
    unittest.main()
