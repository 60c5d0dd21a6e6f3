import json
import unittest
from datetime import datetime, timezone

from clubdraw.models import (
    ClubSummary,
    DrawRefused,
    DrawReport,
    NoPaymentsResult,
    PaymentRecord,
    UserRecord,
    Winner,
)
from clubdraw.models.utils import dt_iso


class SerializationTestCase(unittest.TestCase):
    def test_dt_iso_uses_milliseconds_and_z(self):
        self.assertEqual(
            dt_iso(datetime(2024, 2, 1, 9, 5, 7, 123999, tzinfo=timezone.utc)),
            "2024-02-01T09:05:07.123Z",
        )
        self.assertIsNone(dt_iso(None))

    def test_payment_from_document(self):
        doc = {
            "id": "p1",
            "clubName": "Alpha",
            "hhNumber": "HH1",
            "reference": "T1",
            "donorName": "Ann",
            "donorEmail": "ann@example.com",
            "dateSubmitted": datetime(2024, 1, 3, tzinfo=timezone.utc),
            "donationConfirmed": True,
        }
        payment = PaymentRecord.from_document(doc)
        self.assertEqual(payment.id, "p1")
        self.assertEqual(payment.club_name, "Alpha")
        self.assertEqual(payment.reference, "T1")
        self.assertTrue(payment.donation_confirmed)

        sparse = PaymentRecord.from_document({"id": "p2", "donationConfirmed": "yes"})
        self.assertIsNone(sparse.club_name)
        self.assertFalse(sparse.donation_confirmed)

    def test_user_to_json_flattens_profile(self):
        user = UserRecord.from_document(
            {
                "id": "u1",
                "regNumber": "HH1",
                "name": "Ann",
                "joined": datetime(2023, 5, 1, tzinfo=timezone.utc),
            }
        )
        self.assertEqual(user.reg_number, "HH1")
        self.assertEqual(
            user.to_json(),
            {
                "id": "u1",
                "regNumber": "HH1",
                "name": "Ann",
                "joined": "2023-05-01T00:00:00.000Z",
            },
        )

    def test_report_round_trips_through_json(self):
        winner = Winner(
            club_name="Alpha",
            reg_number=17,
            ticket_ref="T1",
            donor_name=None,
            donor_email=None,
            user=None,
            drawn_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
            payment_id="p1",
            position="1st",
        )
        report = DrawReport(
            month=1,
            year=2024,
            total_payments=3,
            clubs=(ClubSummary("Alpha", 3),),
            total_winners=1,
            winners=(winner,),
            dropped_payments=1,
        )
        data = report.to_json()
        self.assertNotIn("droppedPayments", data)
        self.assertNotIn("paymentId", data["winners"][0])
        self.assertIsNone(data["winners"][0]["user"])
        self.assertEqual(json.loads(report.to_json_str()), data)

    def test_messages(self):
        self.assertEqual(
            NoPaymentsResult(1, 2024).to_json_str(),
            json.dumps(
                {"message": "No confirmed payments found for the specified month and year."}
            ),
        )
        refused = DrawRefused(5, 2025, datetime(2025, 6, 1, tzinfo=timezone.utc))
        self.assertEqual(
            refused.message,
            "Draw not allowed: month 5/2025 is not complete. "
            "Draws allowed after 2025-06-01T00:00:00.000Z.",
        )


if __name__ == "__main__":
    unittest.main()
