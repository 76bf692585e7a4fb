import os
import tempfile
import unittest

from sevagan.services.profile_sink import PROFILE_COLUMNS, CsvProfileSink


class TestCsvProfileSink(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.sink = CsvProfileSink(os.path.join(self.tmp.name, "exports", "signups.csv"))

    def tearDown(self):
        self.tmp.cleanup()

    def test_appends_rows_with_single_header(self):
        self.sink.append({"accountType": "individual", "recipientKey": "9876543210",
                          "name": "Priya", "pincode": "636001"})
        self.sink.append({"accountType": "hospital", "recipientKey": "ops@cityhospital.in",
                          "name": "City Hospital", "unexpected": "ignored"})

        frame = self.sink.read()
        self.assertEqual(list(frame.columns), PROFILE_COLUMNS)
        self.assertEqual(len(frame), 2)
        self.assertEqual(frame.iloc[0]["pincode"], "636001")
        self.assertEqual(frame.iloc[1]["name"], "City Hospital")

        with open(self.sink.path) as f:
            self.assertEqual(sum(1 for line in f if line.startswith("requestedAt")), 1)

    def test_read_missing_file(self):
        self.assertEqual(len(self.sink.read()), 0)


if __name__ == '__main__':
    unittest.main()
