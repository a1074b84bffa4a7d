# mind_core/conftest.py
from datetime import date

import pytest
from rest_framework.test import APIClient

from mind_core.users.lifecycle import default_user_type
from mind_core.users.models import Person, User
from mind_core.users.passwords import hash_password
from mind_core.users.tokens import issue_token

DEFAULT_PASSWORD = "s3cret-pass"


def bearer(client: APIClient, user) -> APIClient:
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
    return client


@pytest.fixture
def user_type(db):
    return default_user_type()


@pytest.fixture
def make_person(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "first_names": "Ana",
            "last_names": "Gómez",
            "document_type": "CC",
            "document_number": f"10{counter['n']:06d}",
            "birth_date": date(1990, 5, 17),
        }
        data.update(overrides)
        return Person.objects.create(**data)

    return _make


@pytest.fixture
def make_user(db, make_person, user_type):
    """
    Active, verified account unless flags say otherwise.
    """
    counter = {"n": 0}

    def _make(*, email=None, password=DEFAULT_PASSWORD, **flags):
        counter["n"] += 1
        data = {
            "is_active": True,
            "email_verified": True,
        }
        data.update(flags)
        return User.objects.create(
            person=make_person(),
            user_type=user_type,
            email=email or f"user{counter['n']}@mind.test",
            password_hash=hash_password(password),
            **data,
        )

    return _make


@pytest.fixture
def user(make_user):
    return make_user(email="owner@mind.test")


@pytest.fixture
def api_client(user):
    return bearer(APIClient(), user)


@pytest.fixture
def anon_client():
    return APIClient()
