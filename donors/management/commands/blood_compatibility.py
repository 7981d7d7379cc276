from django.core.management.base import BaseCommand, CommandError

from donors.services.compatibility import (
    BLOOD_GROUPS,
    InvalidBloodGroup,
    can_donate_to,
    compatible_donors_for,
    normalize_blood_group,
)


def _ordered(groups):
    return ", ".join(group for group in BLOOD_GROUPS if group in groups)


class Command(BaseCommand):
    help = "Print the ABO/Rh compatibility table, or both directions for one blood group."

    def add_arguments(self, parser):
        parser.add_argument("--group", help="Only show the given blood group (e.g. O-).")

    def handle(self, *args, **options):
        raw_group = options.get("group")
        if raw_group:
            try:
                group = normalize_blood_group(raw_group)
            except InvalidBloodGroup as exc:
                raise CommandError(str(exc)) from exc
            self.stdout.write(f"{group} can receive from: {_ordered(compatible_donors_for(group))}")
            self.stdout.write(f"{group} can donate to:    {_ordered(can_donate_to(group))}")
            return

        self.stdout.write(f"{'Recipient':<10} Accepts donations from")
        for group in BLOOD_GROUPS:
            self.stdout.write(f"{group:<10} {_ordered(compatible_donors_for(group))}")
