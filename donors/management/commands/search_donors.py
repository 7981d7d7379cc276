from __future__ import annotations

import os
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from donors.forms import DonorSearchForm
from donors.roster import RosterError, load_roster
from donors.services import export as export_service
from donors.services.compatibility import InvalidBloodGroup, classify_match
from donors.services.eligibility import evaluate_donor
from donors.services.search import search_donors


FILTER_OPTIONS = (
    "blood_group",
    "query",
    "name",
    "contact",
    "city",
    "university",
    "availability",
    "gender",
    "hostel_resident",
    "date_added_from",
    "date_added_to",
)


class Command(BaseCommand):
    help = (
        "Search a donor roster (JSON export of the donor store), ranked available-first. "
        "With --blood-group, compatible donors of other groups are listed as alternatives."
    )

    def add_arguments(self, parser):
        parser.add_argument("roster", help="Path to the roster JSON file.")
        parser.add_argument("--blood-group", dest="blood_group", help="Exact blood group, e.g. A- or AB+.")
        parser.add_argument("--query", help="Free text matched against name, contact, city, university and group.")
        parser.add_argument("--name", help="Substring of the donor name.")
        parser.add_argument("--contact", help="Substring of the contact number.")
        parser.add_argument("--city", help="Substring of the city.")
        parser.add_argument("--university", help="Substring of the university.")
        parser.add_argument(
            "--availability",
            choices=["all", "available", "unavailable"],
            default="all",
            help="Restrict by donation eligibility. Default: all",
        )
        parser.add_argument("--gender", choices=["Male", "Female"])
        parser.add_argument(
            "--hostel",
            dest="hostel_resident",
            choices=["all", "yes", "no"],
            default="all",
            help="Filter by hostel residency. Default: all",
        )
        parser.add_argument("--added-from", dest="date_added_from", help="Registered on/after YYYY-MM-DD.")
        parser.add_argument("--added-to", dest="date_added_to", help="Registered on/before YYYY-MM-DD.")
        parser.add_argument("--today", help="Evaluate eligibility as of YYYY-MM-DD instead of the current date.")
        parser.add_argument(
            "--csv",
            dest="csv_path",
            help=(
                "Write matches as CSV to this path ('-' for stdout) instead of printing a listing. "
                "Given a directory, the file is named like blood_donors_YYYY-MM-DD.csv."
            ),
        )

    def handle(self, *args, **options):
        today = self._parse_today(options.get("today"))

        form = DonorSearchForm(data={key: options.get(key) or "" for key in FILTER_OPTIONS})
        if not form.is_valid():
            problems = "; ".join(
                f"{field}: {' '.join(messages)}" for field, messages in form.errors.items()
            )
            raise CommandError(f"Invalid search options: {problems}")
        filters = form.to_filters()

        try:
            donors = load_roster(options["roster"])
        except (RosterError, InvalidBloodGroup) as exc:
            raise CommandError(str(exc)) from exc

        result = search_donors(donors, filters, today=today)

        csv_path = options.get("csv_path")
        if csv_path:
            self._write_csv(result.matches, csv_path, result.today)
            return

        self.stdout.write(
            f"{len(result.matches)} of {len(donors)} donors match (eligibility as of {result.today.isoformat()})."
        )
        if not result.matches:
            self.stdout.write(self.style.WARNING("No donors match these filters."))
        for donor in result.matches:
            self.stdout.write(self._format_donor(donor, result.today, filters.blood_group))

        if filters.blood_group:
            self.stdout.write(f"\nCompatible alternatives for {filters.blood_group}: {len(result.alternatives)}")
            for donor in result.alternatives:
                self.stdout.write(self._format_donor(donor, result.today, filters.blood_group))

    def _parse_today(self, raw):
        if not raw:
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError as exc:
            raise CommandError(f"--today must be YYYY-MM-DD, got {raw!r}") from exc

    def _format_donor(self, donor, today, requested_group):
        status = evaluate_donor(donor, today=today)
        badge = self.style.SUCCESS("available") if status.available else self.style.WARNING("unavailable")
        line = f"- [{donor.blood_group}] {donor.name or donor.id} ({donor.city or 'n/a'}) {badge}"
        if status.next_eligible_date and not status.available:
            line += f" until {status.next_eligible_date.isoformat()}"
        if requested_group:
            line += f" [{classify_match(donor.blood_group, requested_group)}]"
        if status.graduated:
            line += " graduated"
        return line

    def _write_csv(self, donors, csv_path, today):
        if csv_path == "-":
            self.stdout.write(export_service.donors_to_csv(donors, today=today), ending="")
            return
        if os.path.isdir(csv_path):
            csv_path = os.path.join(csv_path, export_service.export_filename(today))
        with open(csv_path, "w", encoding="utf-8", newline="") as handle:
            count = export_service.write_donors_csv(donors, handle, today=today)
        self.stderr.write(self.style.SUCCESS(f"Wrote {count} donors to {csv_path}"))
