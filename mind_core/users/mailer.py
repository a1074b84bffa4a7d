# mind_core/users/mailer.py
from __future__ import annotations

from datetime import timedelta

from django.core.mail import send_mail

from mind_core.common.config import MindConfig, get_config


def send_verification_email(*, email: str, code: str, ttl: timedelta, config: MindConfig | None = None) -> None:
    """
    Deliver a verification code through the configured Django email backend.
    Raises whatever the backend raises; callers decide whether that matters.
    """
    cfg = config or get_config()
    minutes = int(ttl.total_seconds() // 60)
    subject = f"{cfg.service_name}: verification code"
    text_body = (
        f"Your verification code is {code}.\n"
        f"It expires in {minutes} minutes. If you did not request it, ignore this message."
    )
    html_body = (
        f"<p>Your verification code is <strong>{code}</strong>.</p>"
        f"<p>It expires in {minutes} minutes. If you did not request it, ignore this message.</p>"
    )
    send_mail(
        subject,
        text_body,
        cfg.default_from_email,
        [email],
        html_message=html_body,
        fail_silently=False,
    )
