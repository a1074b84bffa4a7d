# mind_core/api/urls.py
from __future__ import annotations

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from mind_core.administrative.api.views import (
    AccessViewSet,
    CityViewSet,
    CountryViewSet,
    DepartmentViewSet,
    MenuViewSet,
    NotificationTypeViewSet,
    NotificationViewSet,
    StatusViewSet,
    SubscriptionPlanViewSet,
    SubscriptionTypeViewSet,
    SystemImageViewSet,
    UserAccessViewSet,
    VariableTypeViewSet,
    VariableViewSet,
)
from mind_core.agenda.api.views import (
    AgendaDayViewSet,
    AgendaTypeViewSet,
    AgendaViewSet,
    AppointmentContentViewSet,
    AppointmentDiagnosisViewSet,
    AppointmentRecordViewSet,
    AppointmentViewSet,
    DiagnosisTypeViewSet,
    FollowUpViewSet,
)
from mind_core.audit.api.views import (
    AdministrationAuditViewSet,
    AgendaAuditViewSet,
    DiaryAuditViewSet,
    UserAuditViewSet,
)
from mind_core.emotional.api.views import (
    DiaryEmotionViewSet,
    DiaryEntryViewSet,
    DiaryFeelingViewSet,
    DiarySensationViewSet,
    DiarySymptomViewSet,
    EmotionTypeViewSet,
    EmotionViewSet,
    FeelingViewSet,
    SensationViewSet,
    SymptomViewSet,
)
from mind_core.users.api.auth import (
    ChangePasswordView,
    LoginView,
    LogoutView,
    MeView,
    ProfileView,
    RegisterView,
    SendVerificationView,
    VerifyCodeView,
)
from mind_core.users.api.views import (
    PaymentInfoViewSet,
    PersonViewSet,
    UserSubscriptionViewSet,
    UserTypeViewSet,
    UserViewSet,
)

# Users
users_router = DefaultRouter()
users_router.register(r"accounts", UserViewSet, basename="users-accounts")
users_router.register(r"persons", PersonViewSet, basename="users-persons")
users_router.register(r"user-types", UserTypeViewSet, basename="users-user-types")
users_router.register(r"payment-info", PaymentInfoViewSet, basename="users-payment-info")
users_router.register(r"subscriptions", UserSubscriptionViewSet, basename="users-subscriptions")
users_router.register(r"audit", UserAuditViewSet, basename="users-audit")

# Administration
admin_router = DefaultRouter()
admin_router.register(r"statuses", StatusViewSet, basename="admin-statuses")
admin_router.register(r"countries", CountryViewSet, basename="admin-countries")
admin_router.register(r"departments", DepartmentViewSet, basename="admin-departments")
admin_router.register(r"cities", CityViewSet, basename="admin-cities")
admin_router.register(r"accesses", AccessViewSet, basename="admin-accesses")
admin_router.register(r"user-accesses", UserAccessViewSet, basename="admin-user-accesses")
admin_router.register(r"variable-types", VariableTypeViewSet, basename="admin-variable-types")
admin_router.register(r"variables", VariableViewSet, basename="admin-variables")
admin_router.register(r"subscription-types", SubscriptionTypeViewSet, basename="admin-subscription-types")
admin_router.register(r"subscription-plans", SubscriptionPlanViewSet, basename="admin-subscription-plans")
admin_router.register(r"menus", MenuViewSet, basename="admin-menus")
admin_router.register(r"images", SystemImageViewSet, basename="admin-images")
admin_router.register(r"notification-types", NotificationTypeViewSet, basename="admin-notification-types")
admin_router.register(r"notifications", NotificationViewSet, basename="admin-notifications")
admin_router.register(r"audit", AdministrationAuditViewSet, basename="admin-audit")

# Schedule
schedule_router = DefaultRouter()
schedule_router.register(r"agenda-types", AgendaTypeViewSet, basename="schedule-agenda-types")
schedule_router.register(r"diagnosis-types", DiagnosisTypeViewSet, basename="schedule-diagnosis-types")
schedule_router.register(r"agendas", AgendaViewSet, basename="schedule-agendas")
schedule_router.register(r"agenda-days", AgendaDayViewSet, basename="schedule-agenda-days")
schedule_router.register(r"appointments", AppointmentViewSet, basename="schedule-appointments")
schedule_router.register(r"appointment-contents", AppointmentContentViewSet, basename="schedule-appointment-contents")
schedule_router.register(r"appointment-diagnoses", AppointmentDiagnosisViewSet, basename="schedule-appointment-diagnoses")
schedule_router.register(r"appointment-records", AppointmentRecordViewSet, basename="schedule-appointment-records")
schedule_router.register(r"follow-ups", FollowUpViewSet, basename="schedule-follow-ups")
schedule_router.register(r"audit", AgendaAuditViewSet, basename="schedule-audit")

# Emotional
emotional_router = DefaultRouter()
emotional_router.register(r"emotion-types", EmotionTypeViewSet, basename="emotional-emotion-types")
emotional_router.register(r"emotions", EmotionViewSet, basename="emotional-emotions")
emotional_router.register(r"sensations", SensationViewSet, basename="emotional-sensations")
emotional_router.register(r"feelings", FeelingViewSet, basename="emotional-feelings")
emotional_router.register(r"symptoms", SymptomViewSet, basename="emotional-symptoms")
emotional_router.register(r"diaries", DiaryEntryViewSet, basename="emotional-diaries")
emotional_router.register(r"diary-emotions", DiaryEmotionViewSet, basename="emotional-diary-emotions")
emotional_router.register(r"diary-sensations", DiarySensationViewSet, basename="emotional-diary-sensations")
emotional_router.register(r"diary-feelings", DiaryFeelingViewSet, basename="emotional-diary-feelings")
emotional_router.register(r"diary-symptoms", DiarySymptomViewSet, basename="emotional-diary-symptoms")
emotional_router.register(r"audit", DiaryAuditViewSet, basename="emotional-audit")

auth_patterns = [
    path("register/", RegisterView.as_view(), name="auth-register"),
    path("login/", LoginView.as_view(), name="auth-login"),
    path("logout/", LogoutView.as_view(), name="auth-logout"),
    path("profile/", ProfileView.as_view(), name="auth-profile"),
    path("me/", MeView.as_view(), name="auth-me"),
    path("change-password/", ChangePasswordView.as_view(), name="auth-change-password"),
    path("send-verification/", SendVerificationView.as_view(), name="auth-send-verification"),
    path("verify-code/", VerifyCodeView.as_view(), name="auth-verify-code"),
]

urlpatterns = [
    path("auth/", include(auth_patterns)),
    path("users/", include(users_router.urls)),
    path("admin/", include(admin_router.urls)),
    path("schedule/", include(schedule_router.urls)),
    path("emotional/", include(emotional_router.urls)),
]
