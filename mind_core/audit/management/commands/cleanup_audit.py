# mind_core/audit/management/commands/cleanup_audit.py

from django.core.management.base import BaseCommand, CommandError

from mind_core.audit.models import CLEANUP_DEFAULT_DAYS, CLEANUP_MAX_DAYS, AuditDomain
from mind_core.audit.services import AuditRetentionService


class Command(BaseCommand):
    help = "Delete audit records older than N days for one domain (no archival)."

    def add_arguments(self, parser):
        parser.add_argument("--domain", required=True, choices=AuditDomain.values)
        parser.add_argument("--days", type=int, default=CLEANUP_DEFAULT_DAYS)

    def handle(self, *args, **options):
        domain = options["domain"]
        days = options["days"]
        max_days = CLEANUP_MAX_DAYS[domain]
        if days < 1 or days > max_days:
            raise CommandError(f"--days must be between 1 and {max_days} for domain '{domain}'.")

        deleted = AuditRetentionService.cleanup(domain=domain, days=days)
        self.stdout.write(self.style.SUCCESS(f"[{domain}] deleted {deleted} audit records older than {days} days"))
