# mind_core/agenda/filters.py
import django_filters

from mind_core.agenda.models import Appointment, AppointmentStatus


class AppointmentFilter(django_filters.FilterSet):
    agenda = django_filters.UUIDFilter(field_name="agenda_id")
    specialist = django_filters.UUIDFilter(field_name="specialist_id")
    patient = django_filters.UUIDFilter(field_name="patient_id")
    status = django_filters.ChoiceFilter(choices=AppointmentStatus.choices)
    date_from = django_filters.IsoDateTimeFilter(field_name="starts_at", lookup_expr="gte")
    date_to = django_filters.IsoDateTimeFilter(field_name="starts_at", lookup_expr="lte")

    class Meta:
        model = Appointment
        fields = ["agenda", "specialist", "patient", "status", "date_from", "date_to"]
