from django.test import SimpleTestCase

from donors.services.compatibility import (
    BLOOD_GROUPS,
    CAN_DONATE_TO,
    InvalidBloodGroup,
    can_donate_to,
    classify_match,
    compatible_donors_for,
    is_compatible,
    normalize_blood_group,
)


class CompatibilityTableTests(SimpleTestCase):
    def test_recipient_table(self):
        expected = {
            "A+": {"A+", "A-", "O+", "O-"},
            "A-": {"A-", "O-"},
            "B+": {"B+", "B-", "O+", "O-"},
            "B-": {"B-", "O-"},
            "AB+": set(BLOOD_GROUPS),
            "AB-": {"A-", "B-", "AB-", "O-"},
            "O+": {"O+", "O-"},
            "O-": {"O-"},
        }
        for recipient, donors in expected.items():
            self.assertSetEqual(set(compatible_donors_for(recipient)), donors, recipient)

    def test_donor_view_is_inverse_of_recipient_view(self):
        for donor in BLOOD_GROUPS:
            for recipient in BLOOD_GROUPS:
                self.assertEqual(
                    donor in compatible_donors_for(recipient),
                    recipient in can_donate_to(donor),
                    f"{donor} -> {recipient}",
                )

    def test_donor_view(self):
        self.assertSetEqual(set(can_donate_to("A-")), {"A+", "A-", "AB+", "AB-"})
        self.assertSetEqual(set(can_donate_to("O+")), {"A+", "B+", "AB+", "O+"})
        self.assertSetEqual(set(can_donate_to("AB+")), {"AB+"})

    def test_universal_donor_and_recipient(self):
        self.assertSetEqual(set(compatible_donors_for("AB+")), set(BLOOD_GROUPS))
        self.assertSetEqual(set(can_donate_to("O-")), set(BLOOD_GROUPS))

    def test_every_group_has_a_non_empty_entry(self):
        self.assertEqual(set(CAN_DONATE_TO), set(BLOOD_GROUPS))
        for group in BLOOD_GROUPS:
            self.assertIn(group, compatible_donors_for(group))
            self.assertIn(group, can_donate_to(group))

    def test_is_compatible(self):
        self.assertTrue(is_compatible("O-", "A+"))
        self.assertFalse(is_compatible("A+", "O-"))


class BloodGroupValidationTests(SimpleTestCase):
    def test_normalizes_case_and_whitespace(self):
        self.assertEqual(normalize_blood_group(" ab+ "), "AB+")
        self.assertSetEqual(set(compatible_donors_for("o-")), {"O-"})

    def test_rejects_unknown_groups(self):
        for value in ("C+", "A", "0-", "", None, 7):
            with self.assertRaises(InvalidBloodGroup):
                compatible_donors_for(value)
            with self.assertRaises(InvalidBloodGroup):
                can_donate_to(value)

    def test_error_is_a_value_error(self):
        with self.assertRaises(ValueError) as ctx:
            normalize_blood_group("Z+")
        self.assertEqual(ctx.exception.value, "Z+")


class ClassifyMatchTests(SimpleTestCase):
    def test_direct_compatible_and_incompatible(self):
        self.assertEqual(classify_match("A-", "A-"), "direct")
        self.assertEqual(classify_match("O-", "A-"), "compatible")
        self.assertIsNone(classify_match("B+", "A-"))
