from datetime import date

from django.test import SimpleTestCase

from donors.records import DonorRecord
from donors.services.stats import cities_from_donors, summarize_roster, universities_from_donors


class RosterSummaryTests(SimpleTestCase):
    today = date(2023, 6, 15)

    def setUp(self):
        self.donors = [
            DonorRecord(id="1", blood_group="O+", city="Karachi", university="NED University", is_hostel_resident=True),
            DonorRecord(id="2", blood_group="O+", city="Karachi", university="Sindh University",
                        last_donation_date=date(2023, 6, 1)),
            DonorRecord(id="3", blood_group="AB-", city="Hyderabad", university="NED University",
                        semester_end_date=date(2023, 1, 1)),
            DonorRecord(id="4", blood_group="B+", city="Lahore", last_donation_date=date(2023, 1, 1)),
        ]

    def test_summary_figures(self):
        summary = summarize_roster(self.donors, today=self.today)
        self.assertEqual(summary.total, 4)
        self.assertEqual(summary.available, 3)
        self.assertEqual(summary.available_percentage, 75.0)
        self.assertEqual(summary.hostel_residents, 1)
        self.assertEqual(summary.graduated, 1)
        self.assertEqual(summary.blood_group_count, 3)
        self.assertEqual(summary.university_count, 2)

    def test_group_breakdown_lists_every_group(self):
        summary = summarize_roster(self.donors, today=self.today)
        breakdown = dict(summary.by_blood_group)
        self.assertEqual([group for group, _ in summary.by_blood_group], ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"])
        self.assertEqual(breakdown["O+"], 2)
        self.assertEqual(breakdown["A+"], 0)

    def test_city_breakdown_busiest_first(self):
        summary = summarize_roster(self.donors, today=self.today)
        self.assertEqual(summary.by_city, (("Karachi", 2), ("Hyderabad", 1), ("Lahore", 1)))

    def test_empty_roster(self):
        summary = summarize_roster([], today=self.today)
        self.assertEqual(summary.total, 0)
        self.assertEqual(summary.available_percentage, 0.0)
        self.assertEqual(summary.by_city, ())

    def test_distinct_choices(self):
        self.assertEqual(universities_from_donors(self.donors), ["NED University", "Sindh University"])
        self.assertEqual(cities_from_donors(self.donors), ["Hyderabad", "Karachi", "Lahore"])
