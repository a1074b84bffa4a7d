# mind_core/users/management/commands/seed_lookups.py

from django.core.management.base import BaseCommand

from mind_core.administrative.models import Status
from mind_core.users.lifecycle import default_user_type, status_row
from mind_core.users.models import AccountStatus, UserType


class Command(BaseCommand):
    help = "Ensure the account status rows and the default user type exist (idempotent)."

    def handle(self, *args, **options):
        statuses_before = Status.objects.filter(code__in=AccountStatus.values).count()
        types_before = UserType.objects.count()

        for state in AccountStatus:
            status_row(state)
        user_type = default_user_type()

        created = (
            Status.objects.filter(code__in=AccountStatus.values).count() - statuses_before
            + UserType.objects.count() - types_before
        )
        self.stdout.write(
            self.style.SUCCESS(f"Lookups ensured (default user type: {user_type.code}). Newly created: {created}")
        )
