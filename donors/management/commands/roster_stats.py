from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from donors.roster import RosterError, load_roster
from donors.services.compatibility import InvalidBloodGroup
from donors.services.stats import cities_from_donors, summarize_roster


class Command(BaseCommand):
    help = "Print dashboard figures (availability, residency, blood group and city spread) for a donor roster."

    def add_arguments(self, parser):
        parser.add_argument("roster", help="Path to the roster JSON file.")
        parser.add_argument("--today", help="Evaluate eligibility as of YYYY-MM-DD.")

    def handle(self, *args, **options):
        today = None
        if options.get("today"):
            try:
                today = date.fromisoformat(options["today"])
            except ValueError as exc:
                raise CommandError(f"--today must be YYYY-MM-DD, got {options['today']!r}") from exc

        try:
            donors = load_roster(options["roster"])
        except (RosterError, InvalidBloodGroup) as exc:
            raise CommandError(str(exc)) from exc

        summary = summarize_roster(donors, today=today)
        if not summary.total:
            self.stdout.write(self.style.WARNING("Roster is empty."))
            return

        self.stdout.write(f"Total donors:       {summary.total}")
        self.stdout.write(
            f"Available donors:   {summary.available} ({summary.available_percentage:.1f}% of total)"
        )
        self.stdout.write(f"Hostel residents:   {summary.hostel_residents}")
        self.stdout.write(f"Graduated:          {summary.graduated}")
        self.stdout.write(f"Blood groups:       {summary.blood_group_count} types present")
        self.stdout.write(f"Universities:       {summary.university_count}")
        cities = cities_from_donors(donors)
        self.stdout.write(f"Cities:             {len(cities)} ({', '.join(cities)})")

        self.stdout.write("\nBy blood group:")
        for group, count in summary.by_blood_group:
            share = count / summary.total * 100
            self.stdout.write(f"  {group:<4} {count:>4}  ({share:.1f}%)")

        if summary.by_city:
            self.stdout.write("\nBy city:")
            for city, count in summary.by_city:
                self.stdout.write(f"  {city:<20} {count:>4}")
