import unittest

from sevagan.core.errors import NeedNotFound
from sevagan.models.need import BloodNeedCreate
from sevagan.services.account_store import AccountStore
from sevagan.services.broadcast import Broadcaster
from sevagan.services.need_registry import NeedRegistry
from sevagan.services.notification_channel import LogNotificationChannel
from sevagan.services.relay import ResponseRelay


class TestResponseRelay(unittest.TestCase):
    def setUp(self):
        self.accounts = AccountStore(clock=lambda: 1)
        self.needs = NeedRegistry(self.accounts, Broadcaster(), clock=lambda: 2)
        self.channel = LogNotificationChannel(clock=lambda: 3)
        self.relay = ResponseRelay(self.needs, self.accounts, self.channel, clock=lambda: 4)
        self.hospital = self.accounts.create("hospital", "CITY HOSPITAL", mobile="9444444444",
                                             email="ops@cityhospital.in", verified=True)

    def _need(self, requester=None):
        return self.needs.create(BloodNeedCreate(
            bloodGroup="AB-", city="Vellore", pincode="632001",
            neededAtISO="2030-05-01T10:00:00Z", requesterAccountId=requester,
        ))

    def test_respond_notifies_requester_and_donor(self):
        need = self._need(self.hospital.id)
        record, notify_to = self.relay.respond_to_need(need.id, "9123456789", donor_name="Meena")
        self.assertEqual(record.need_id, need.id)
        self.assertEqual(notify_to, ["9444444444", "ops@cityhospital.in", "9123456789"])
        self.assertEqual(len(self.relay.responses), 1)
        self.assertEqual(len(self.channel.sent_to("ops@cityhospital.in")), 1)

    def test_recipients_are_deduplicated(self):
        need = self._need(self.hospital.id)
        _, notify_to = self.relay.respond_to_need(need.id, "9444444444")
        self.assertEqual(notify_to, ["9444444444", "ops@cityhospital.in"])

    def test_need_without_requester(self):
        need = self._need()
        _, notify_to = self.relay.respond_to_need(need.id, "donor@mail.in", message="On my way")
        self.assertEqual(notify_to, ["donor@mail.in"])
        self.assertEqual(self.channel.sent_to("donor@mail.in")[0].message, "On my way")

    def test_unknown_need(self):
        with self.assertRaises(NeedNotFound):
            self.relay.respond_to_need("missing", "9123456789")
        self.assertEqual(self.relay.responses, [])

    def test_notify_donor(self):
        record = self.relay.notify_donor("9123456789", "donor-1", "Please call the blood bank")
        self.assertEqual(record.donor_id, "donor-1")
        self.assertEqual(self.relay.notifications, [record])
        self.assertEqual(self.channel.sent_to("9123456789")[0].channel, "sms")


if __name__ == '__main__':
    unittest.main()
