# 📄 File: app/modules/authentication/infrastructure/email/templates.py
# 🧭 Purpose (Layman Explanation):
# The wording of every email the service sends: the verification code, the welcome
# message and the security alerts.
# 🧪 Purpose (Technical Summary):
# Builders returning provider-neutral EmailMessage objects shared by all email backends.
# 🔗 Dependencies:
# pydantic, domain models
# 🔄 Connected Modules / Calls From:
# logging_email_service.py, sendgrid_email_service.py

from datetime import datetime
from html import escape

from pydantic import BaseModel, ConfigDict, computed_field

from app.modules.authentication.domain.models import Email, VerificationCode


class EmailMessage(BaseModel):
    """Rendered email ready for a backend to deliver."""

    model_config = ConfigDict(frozen=True)

    kind: str
    to: str
    subject: str
    text: str

    @computed_field
    @property
    def html(self) -> str:
        paragraphs = (escape(line) for line in self.text.splitlines() if line)
        return "".join(f"<p>{p}</p>" for p in paragraphs)


def verification_code_message(email: Email, verification_code: VerificationCode) -> EmailMessage:
    minutes = max(int((verification_code.expires_at - verification_code.created_at).total_seconds() // 60), 1)
    return EmailMessage(
        kind="verification_code",
        to=email.value,
        subject="Your verification code",
        text=(
            f"Your verification code is {verification_code.code}.\n"
            f"It expires in {minutes} minutes. If you did not create an account, ignore this email."
        ),
    )


def welcome_message(email: Email, user_name: str) -> EmailMessage:
    return EmailMessage(
        kind="welcome",
        to=email.value,
        subject="Welcome!",
        text=f"Hi {user_name}, your account is verified and ready to use.",
    )


def new_session_message(email: Email, device_info: str, ip_address: str) -> EmailMessage:
    return EmailMessage(
        kind="new_session",
        to=email.value,
        subject="New sign-in to your account",
        text=(
            f"A new sign-in was detected from {device_info} (IP {ip_address}).\n"
            "If this wasn't you, log out of all devices and change your password."
        ),
    )


def account_locked_message(email: Email, unlocks_at: datetime) -> EmailMessage:
    return EmailMessage(
        kind="account_locked",
        to=email.value,
        subject="Your account has been temporarily locked",
        text=(
            "Your account was locked after too many failed sign-in attempts.\n"
            f"It will unlock at {unlocks_at.strftime('%Y-%m-%d %H:%M UTC')}."
        ),
    )


def password_changed_message(email: Email) -> EmailMessage:
    return EmailMessage(
        kind="password_changed",
        to=email.value,
        subject="Your password was changed",
        text="Your password was just changed. If this wasn't you, contact support immediately.",
    )
