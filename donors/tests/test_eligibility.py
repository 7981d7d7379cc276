from datetime import date, datetime, timedelta
from unittest import mock

from django.test import SimpleTestCase

from donors.records import DonorRecord
from donors.services import eligibility
from donors.services.eligibility import (
    add_months,
    evaluate_donor,
    has_graduated,
    is_available,
    next_eligible_date,
)


class AddMonthsTests(SimpleTestCase):
    def test_keeps_day_of_month(self):
        self.assertEqual(add_months(date(2023, 3, 15), 3), date(2023, 6, 15))

    def test_crosses_year_boundaries(self):
        self.assertEqual(add_months(date(2023, 11, 10), 3), date(2024, 2, 10))
        self.assertEqual(add_months(date(2024, 2, 10), -3), date(2023, 11, 10))

    def test_missing_day_rolls_into_next_month(self):
        self.assertEqual(add_months(date(2023, 1, 31), 1), date(2023, 3, 3))
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 3, 2))
        self.assertEqual(add_months(date(2023, 11, 30), 3), date(2024, 3, 1))
        self.assertEqual(add_months(date(2023, 5, 31), -3), date(2023, 3, 3))


class AvailabilityTests(SimpleTestCase):
    today = date(2023, 6, 15)

    def test_never_donated_is_available(self):
        self.assertTrue(is_available(None, today=self.today))
        self.assertTrue(is_available("", today=self.today))

    def test_boundary_is_inclusive(self):
        self.assertTrue(is_available(date(2023, 3, 15), today=self.today))

    def test_one_day_inside_cooldown_is_unavailable(self):
        self.assertFalse(is_available(date(2023, 3, 16), today=self.today))

    def test_recent_donation_is_unavailable(self):
        self.assertFalse(is_available(date(2023, 6, 1), today=self.today))

    def test_accepts_iso_strings(self):
        self.assertTrue(is_available("2023-01-01", today=self.today))
        self.assertFalse(is_available("2023-05-20T09:30:00Z", today=self.today))

    def test_unparseable_date_counts_as_never_donated(self):
        self.assertTrue(is_available("not-a-date", today=self.today))
        self.assertIsNone(next_eligible_date("31/12/2023"))

    def test_cutoff_before_first_representable_date(self):
        self.assertFalse(is_available(date(1, 1, 1), today=date(1, 2, 1)))
        self.assertTrue(is_available(date(1, 1, 1), today=date(1, 4, 1)))

    def test_today_accepts_datetime(self):
        self.assertTrue(is_available(date(2023, 3, 15), today=datetime(2023, 6, 15, 23, 59)))

    def test_defaults_to_local_date(self):
        with mock.patch.object(eligibility.timezone, "localdate", return_value=self.today):
            self.assertTrue(is_available(date(2023, 3, 15)))
            self.assertFalse(is_available(date(2023, 3, 16)))


class NextEligibleDateTests(SimpleTestCase):
    def test_none_without_donation(self):
        self.assertIsNone(next_eligible_date(None))

    def test_three_calendar_months_later(self):
        self.assertEqual(next_eligible_date(date(2023, 1, 1)), date(2023, 4, 1))
        self.assertEqual(next_eligible_date("2023-10-05"), date(2024, 1, 5))

    def test_unrepresentable_next_date_is_none(self):
        self.assertIsNone(next_eligible_date("9999-11-15"))
        self.assertEqual(next_eligible_date("9999-09-15"), date(9999, 12, 15))

    def test_far_future_donation_does_not_break_evaluation(self):
        donor = DonorRecord.from_dict({"id": "1", "bloodGroup": "O+", "lastDonationDate": "9999-11-15"})
        status = evaluate_donor(donor, today=date(2023, 6, 15))
        self.assertFalse(status.available)
        self.assertIsNone(status.next_eligible_date)

    def test_donor_is_available_on_next_eligible_date(self):
        day = date(2023, 1, 1)
        while day < date(2025, 1, 1):
            nxt = next_eligible_date(day)
            self.assertEqual(nxt, add_months(day, 3))
            self.assertTrue(is_available(day, today=nxt), day)
            day += timedelta(days=1)


class GraduationTests(SimpleTestCase):
    today = date(2023, 6, 15)

    def test_missing_end_date_is_not_graduated(self):
        self.assertFalse(has_graduated(None, today=self.today))
        self.assertFalse(has_graduated("garbage", today=self.today))

    def test_end_date_must_be_strictly_in_the_past(self):
        self.assertTrue(has_graduated(date(2023, 6, 14), today=self.today))
        self.assertFalse(has_graduated(date(2023, 6, 15), today=self.today))
        self.assertFalse(has_graduated("2023-12-31", today=self.today))


class EvaluateDonorTests(SimpleTestCase):
    def test_bundles_derived_values(self):
        donor = DonorRecord(
            id="1",
            blood_group="B+",
            last_donation_date=date(2023, 5, 1),
            semester_end_date=date(2023, 1, 31),
        )
        status = evaluate_donor(donor, today=date(2023, 6, 15))
        self.assertFalse(status.available)
        self.assertEqual(status.next_eligible_date, date(2023, 8, 1))
        self.assertTrue(status.graduated)
