import pytest

from mind_core.conftest import DEFAULT_PASSWORD
from mind_core.users.exceptions import AccountLocked, InvalidCredentials
from mind_core.users.services import AuthService, UserService

pytestmark = pytest.mark.django_db

LOGIN_URL = "/api/auth/login/"


def test_login_returns_token_and_resets_counter(anon_client, make_user):
    u = make_user(email="ana@mind.test", failed_attempts=2)

    res = anon_client.post(LOGIN_URL, {"email": "ANA@mind.test ", "password": DEFAULT_PASSWORD}, format="json")

    assert res.status_code == 200, res.data
    assert res.data["success"] is True
    assert res.data["message"] == "Login successful"
    assert res.data["data"]["token"]
    assert res.data["data"]["user"]["email"] == "ana@mind.test"
    assert "password_hash" not in res.data["data"]["user"]

    u.refresh_from_db()
    assert u.failed_attempts == 0
    assert u.last_access_at is not None


def test_unknown_email_and_wrong_password_are_indistinguishable(anon_client, make_user):
    make_user(email="ana@mind.test")

    unknown = anon_client.post(LOGIN_URL, {"email": "nobody@mind.test", "password": "whatever"}, format="json")
    wrong = anon_client.post(LOGIN_URL, {"email": "ana@mind.test", "password": "whatever"}, format="json")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.data["error"] == wrong.data["error"] == "INVALID_CREDENTIALS"
    assert unknown.data["message"] == wrong.data["message"]


def test_inactive_user_cannot_login_with_correct_password(anon_client, make_user):
    make_user(email="ana@mind.test", is_active=False)

    res = anon_client.post(LOGIN_URL, {"email": "ana@mind.test", "password": DEFAULT_PASSWORD}, format="json")

    assert res.status_code == 401
    assert res.data["error"] == "ACCOUNT_INACTIVE"


def test_locked_user_cannot_login_with_correct_password(anon_client, make_user):
    make_user(email="ana@mind.test", is_locked=True)

    res = anon_client.post(LOGIN_URL, {"email": "ana@mind.test", "password": DEFAULT_PASSWORD}, format="json")

    assert res.status_code == 401
    assert res.data["error"] == "ACCOUNT_LOCKED"


def test_five_failures_lock_the_account_until_unblocked(make_user):
    u = make_user(email="ana@mind.test")

    for _ in range(5):
        with pytest.raises(InvalidCredentials):
            AuthService.login(email="ana@mind.test", password="wrong-pass")

    u.refresh_from_db()
    assert u.is_locked is True
    assert u.failed_attempts == 5
    assert u.locked_at is not None
    assert u.status.code == "0005"

    with pytest.raises(AccountLocked):
        AuthService.login(email="ana@mind.test", password=DEFAULT_PASSWORD)

    UserService.unblock(user=u)
    result = AuthService.login(email="ana@mind.test", password=DEFAULT_PASSWORD)

    u.refresh_from_db()
    assert result.token
    assert u.is_locked is False
    assert u.failed_attempts == 0
    assert u.status.code == "0003"


def test_failed_attempts_persist_across_requests(anon_client, make_user):
    u = make_user(email="ana@mind.test")

    for _ in range(3):
        anon_client.post(LOGIN_URL, {"email": "ana@mind.test", "password": "wrong-pass"}, format="json")

    u.refresh_from_db()
    assert u.failed_attempts == 3
    assert u.is_locked is False


def test_login_writes_audit_record(anon_client, make_user):
    from mind_core.audit.models import UserAudit

    u = make_user(email="ana@mind.test")
    anon_client.post(LOGIN_URL, {"email": "ana@mind.test", "password": DEFAULT_PASSWORD}, format="json")

    rec = UserAudit.objects.get(action="LOGIN")
    assert rec.entity == "User"
    assert rec.entity_id == str(u.id)
    assert rec.actor_id == str(u.id)
