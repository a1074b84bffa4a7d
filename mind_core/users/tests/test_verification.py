from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone

from mind_core.users.exceptions import (
    VerificationCodeExpired,
    VerificationCodeMismatch,
    VerificationCodeMissing,
)
from mind_core.users.models import User
from mind_core.users.services import AuthService

pytestmark = pytest.mark.django_db


@pytest.fixture
def pending_user(make_user):
    return make_user(email="new@mind.test", email_verified=False)


def test_pending_user_has_pending_status(pending_user):
    assert pending_user.account_status == "0004"
    assert pending_user.status.code == "0004"
    assert pending_user.status.color == "#E8871E"


def test_code_is_accepted_once(pending_user):
    ticket = AuthService.issue_verification_code(user_id=pending_user.id)
    assert len(ticket.code) == 6 and ticket.code.isdigit()

    result = AuthService.verify_code(user_id=pending_user.id, code=ticket.code)
    assert result.token
    assert result.user.email_verified is True
    assert result.user.status.code == "0003"

    with pytest.raises(VerificationCodeMissing) as exc:
        AuthService.verify_code(user_id=pending_user.id, code=ticket.code)
    assert "No verification code pending" in str(exc.value.detail)


def test_code_past_its_lifetime_is_rejected(pending_user):
    ticket = AuthService.issue_verification_code(user_id=pending_user.id)
    User.objects.filter(pk=pending_user.pk).update(
        verification_code_expires_at=timezone.now() - timedelta(seconds=1)
    )

    with pytest.raises(VerificationCodeExpired):
        AuthService.verify_code(user_id=pending_user.id, code=ticket.code)


def test_code_expires_fifteen_minutes_after_issue(pending_user):
    before = timezone.now()
    ticket = AuthService.issue_verification_code(user_id=pending_user.id)

    assert timedelta(minutes=14, seconds=59) < ticket.expires_at - before <= timedelta(minutes=15, seconds=1)


def test_wrong_code_is_rejected(pending_user):
    ticket = AuthService.issue_verification_code(user_id=pending_user.id)
    wrong = "000000" if ticket.code != "000000" else "111111"

    with pytest.raises(VerificationCodeMismatch):
        AuthService.verify_code(user_id=pending_user.id, code=wrong)


def test_new_code_replaces_pending_one(pending_user):
    first = AuthService.issue_verification_code(user_id=pending_user.id)
    second = AuthService.issue_verification_code(user_id=pending_user.id)

    pending_user.refresh_from_db()
    assert pending_user.verification_code == second.code
    if first.code != second.code:
        with pytest.raises(VerificationCodeMismatch):
            AuthService.verify_code(user_id=pending_user.id, code=first.code)


def test_send_verification_endpoint_mails_and_echoes_code_outside_production(anon_client, pending_user):
    res = anon_client.post("/api/auth/send-verification/", {"user_id": str(pending_user.id)}, format="json")

    assert res.status_code == 200, res.data
    code = res.data["data"]["verification_code"]
    assert len(mail.outbox) == 1
    assert code in mail.outbox[0].body
    assert mail.outbox[0].to == ["new@mind.test"]

    res = anon_client.post(
        "/api/auth/verify-code/",
        {"user_id": str(pending_user.id), "code": code},
        format="json",
    )
    assert res.status_code == 200, res.data
    assert res.data["message"] == "Verification successful"
    assert res.data["data"]["user"]["email_verified"] is True


def test_send_verification_hides_code_in_production(anon_client, pending_user, settings):
    settings.MIND_ENV = "prod"

    res = anon_client.post("/api/auth/send-verification/", {"user_id": str(pending_user.id)}, format="json")

    assert res.status_code == 200
    assert "verification_code" not in res.data["data"]


def test_mail_failure_does_not_fail_the_request(anon_client, pending_user, monkeypatch):
    def broken(**kwargs):
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr("mind_core.users.services.send_verification_email", broken)

    res = anon_client.post("/api/auth/send-verification/", {"user_id": str(pending_user.id)}, format="json")

    assert res.status_code == 200
    pending_user.refresh_from_db()
    assert pending_user.verification_code


def test_unknown_user_is_not_found(anon_client):
    res = anon_client.post(
        "/api/auth/send-verification/",
        {"user_id": "7d1f8a9e-6c1b-4a57-9f43-2b6f0b7e1c11"},
        format="json",
    )

    assert res.status_code == 404
    assert res.data["error"] == "NOT_FOUND"
