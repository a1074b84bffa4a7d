# mind_core/audit/admin.py
from django.contrib import admin

from mind_core.audit.models import AdministrationAudit, AgendaAudit, DiaryAudit, UserAudit


class AuditRecordAdmin(admin.ModelAdmin):
    list_display = ("action", "entity", "entity_id", "actor_id", "ip", "created_at")
    list_filter = ("action", "entity")
    search_fields = ("entity", "entity_id", "actor_id")
    readonly_fields = (
        "entity",
        "entity_id",
        "action",
        "actor_id",
        "before",
        "after",
        "ip",
        "user_agent",
        "metadata",
        "created_at",
    )
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


for model in (UserAudit, AgendaAudit, DiaryAudit, AdministrationAudit):
    admin.site.register(model, AuditRecordAdmin)
