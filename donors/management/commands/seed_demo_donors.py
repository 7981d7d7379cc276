import json
import random
import uuid
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from faker import Faker

from donors.records import DonorRecord
from donors.services.compatibility import BLOOD_GROUPS

# Rough campus distribution; O+ and B+ are the most common groups.
BLOOD_GROUP_WEIGHTS = [22, 2, 28, 2, 7, 1, 33, 5]
DEPARTMENTS = ["Computer Science", "Medicine", "Business", "Civil Engineering", "Pharmacy", "Physics", "English"]
GENDERS = ["Male", "Female"]


class Command(BaseCommand):
    help = "Write a realistic demo donor roster (JSON, donor-store shape) for trying out search_donors and roster_stats"

    def add_arguments(self, parser):
        parser.add_argument("output", help="Path of the JSON file to write ('-' for stdout).")
        parser.add_argument("--count", type=int, help="Number of donors to generate (default random between 75-100)")
        parser.add_argument("--seed", type=int, help="Random seed for deterministic runs")
        parser.add_argument(
            "--ratio-never-donated",
            type=float,
            default=0.3,
            help="Fraction of donors without any recorded donation (0.0-1.0). Default: 0.3",
        )

    def handle(self, *args, **options):
        faker = Faker()
        if options.get("seed") is not None:
            Faker.seed(options["seed"])
            random.seed(options["seed"])

        count = options.get("count")
        if count is None:
            count = random.randint(75, 100)
        if count < 0:
            raise CommandError("--count must not be negative")
        ratio_never = float(options.get("ratio_never_donated") or 0.0)
        if not 0.0 <= ratio_never <= 1.0:
            raise CommandError("--ratio-never-donated must be between 0.0 and 1.0")

        donors = [self._fake_donor(faker, ratio_never).to_dict() for _ in range(count)]
        payload = json.dumps({"donors": donors}, indent=2)

        output = options["output"]
        if output == "-":
            self.stdout.write(payload)
            return
        with open(output, "w", encoding="utf-8") as handle:
            handle.write(payload)
        self.stdout.write(self.style.SUCCESS(f"Wrote {count} demo donors to {output}"))

    # ------------------------------------------------------------------
    def _random_past_date(self, max_days):
        return timezone.localdate() - timedelta(days=random.randint(0, max_days))

    def _fake_donor(self, faker, ratio_never):
        universities = getattr(settings, "DONOR_DEMO_UNIVERSITIES", []) or ["Demo University"]
        cities = getattr(settings, "DONOR_DEMO_CITIES", []) or [faker.city()]
        semester = random.randint(1, 8)
        last_donation = None if random.random() < ratio_never else self._random_past_date(365)
        # Students in their last semesters finish within the next year; some already left.
        semester_end = timezone.localdate() + timedelta(days=random.randint(-120, 180 * (9 - semester)))

        return DonorRecord(
            id=str(uuid.UUID(int=random.getrandbits(128))),
            blood_group=random.choices(BLOOD_GROUPS, weights=BLOOD_GROUP_WEIGHTS, k=1)[0],
            last_donation_date=last_donation,
            semester_end_date=semester_end,
            date_added=self._random_past_date(540),
            name=faker.name(),
            contact="03" + "".join(str(random.randint(0, 9)) for _ in range(9)),
            city=random.choice(cities),
            university=random.choice(universities),
            department=random.choice(DEPARTMENTS),
            semester=str(semester),
            gender=random.choice(GENDERS),
            is_hostel_resident=random.random() < 0.35,
        )
