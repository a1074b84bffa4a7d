# mind_core/audit/models.py
from django.db import models


class AuditAction(models.TextChoices):
    CREATE = "CREATE", "Create"
    UPDATE = "UPDATE", "Update"
    DELETE = "DELETE", "Delete"
    LOGIN = "LOGIN", "Login"
    LOGOUT = "LOGOUT", "Logout"


class AuditDomain(models.TextChoices):
    USERS = "users", "Users"
    AGENDA = "agenda", "Agenda"
    DIARY = "diary", "Emotional diary"
    ADMIN = "admin", "Administration"


class AuditRecord(models.Model):
    """
    Append-only change log entry. Never updated by business logic; only
    written by the audit sink and read/cleaned up by the audit API.
    """
    entity = models.CharField(max_length=64, db_index=True)  # e.g. "User", "Appointment"
    entity_id = models.CharField(max_length=64, db_index=True)
    action = models.CharField(max_length=16, choices=AuditAction.choices, db_index=True)

    # authenticated user id, or "system" when no actor is known
    actor_id = models.CharField(max_length=64, db_index=True)

    before = models.JSONField(null=True, blank=True)
    after = models.JSONField(null=True, blank=True)

    ip = models.CharField(max_length=64, blank=True, default="")
    user_agent = models.TextField(blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        abstract = True
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        return f"{self.action} {self.entity}:{self.entity_id} by {self.actor_id}"


class UserAudit(AuditRecord):
    class Meta(AuditRecord.Meta):
        db_table = "users_audit"
        indexes = [
            models.Index(fields=["entity", "entity_id"], name="users_audit_entity_idx"),
            models.Index(fields=["actor_id", "created_at"], name="users_audit_actor_idx"),
        ]


class AgendaAudit(AuditRecord):
    class Meta(AuditRecord.Meta):
        db_table = "agenda_audit"
        indexes = [
            models.Index(fields=["entity", "entity_id"], name="agenda_audit_entity_idx"),
            models.Index(fields=["actor_id", "created_at"], name="agenda_audit_actor_idx"),
        ]


class DiaryAudit(AuditRecord):
    class Meta(AuditRecord.Meta):
        db_table = "diary_audit"
        indexes = [
            models.Index(fields=["entity", "entity_id"], name="diary_audit_entity_idx"),
            models.Index(fields=["actor_id", "created_at"], name="diary_audit_actor_idx"),
        ]


class AdministrationAudit(AuditRecord):
    class Meta(AuditRecord.Meta):
        db_table = "administration_audit"
        indexes = [
            models.Index(fields=["entity", "entity_id"], name="admin_audit_entity_idx"),
            models.Index(fields=["actor_id", "created_at"], name="admin_audit_actor_idx"),
        ]


AUDIT_MODELS: dict[str, type[AuditRecord]] = {
    AuditDomain.USERS: UserAudit,
    AuditDomain.AGENDA: AgendaAudit,
    AuditDomain.DIARY: DiaryAudit,
    AuditDomain.ADMIN: AdministrationAudit,
}

# retention bounds for cleanup(days); the users trail may be kept for ten years
CLEANUP_MAX_DAYS: dict[str, int] = {
    AuditDomain.USERS: 3650,
    AuditDomain.AGENDA: 365,
    AuditDomain.DIARY: 365,
    AuditDomain.ADMIN: 365,
}
CLEANUP_DEFAULT_DAYS = 90


def audit_model_for(domain: str) -> type[AuditRecord]:
    return AUDIT_MODELS[AuditDomain(domain)]
