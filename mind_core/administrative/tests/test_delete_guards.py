import pytest

from mind_core.administrative.models import Country, Department, NotificationType, Status

pytestmark = pytest.mark.django_db


def test_referenced_country_cannot_be_deleted(api_client):
    country = Country.objects.create(name="Colombia", iso_code="CO")
    Department.objects.create(country=country, name="Antioquia", dane_code="05")

    res = api_client.delete(f"/api/admin/countries/{country.id}/")

    assert res.status_code == 400
    assert res.data["error"] == "IN_USE"
    assert res.data["message"] == "The country has departments."
    assert Country.objects.filter(pk=country.pk).exists()


def test_unreferenced_country_can_be_deleted(api_client):
    country = Country.objects.create(name="Perú", iso_code="PE")

    res = api_client.delete(f"/api/admin/countries/{country.id}/")

    assert res.status_code == 200
    assert res.data["message"] == "Country deleted"
    assert not Country.objects.filter(pk=country.pk).exists()


def test_status_in_use_by_accounts_cannot_be_deleted(api_client, user):
    res = api_client.delete(f"/api/admin/statuses/{user.status_id}/")

    assert res.status_code == 400
    assert res.data["error"] == "IN_USE"


def test_unused_lookup_can_be_deleted(api_client):
    kind = NotificationType.objects.create(code="REMINDER", name="Reminder")
    spare = Status.objects.create(code="0100", name="Spare")

    assert api_client.delete(f"/api/admin/notification-types/{kind.id}/").status_code == 200
    assert api_client.delete(f"/api/admin/statuses/{spare.id}/").status_code == 200


def test_department_with_cities_cannot_be_deleted(api_client):
    country = Country.objects.create(name="Colombia", iso_code="CO")
    department = Department.objects.create(country=country, name="Antioquia", dane_code="05")
    department.cities.create(name="Medellín", dane_code="05001")

    res = api_client.delete(f"/api/admin/departments/{department.id}/")

    assert res.status_code == 400
    assert res.data["error"] == "IN_USE"
