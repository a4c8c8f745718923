# 📄 File: app/modules/authentication/infrastructure/email/__init__.py
# 🧭 Purpose (Layman Explanation):
# Email senders: one that only logs (development, tests) and one that uses SendGrid.
# 🧪 Purpose (Technical Summary):
# Exports EmailService backends and the shared message templates.
# 🔗 Dependencies:
# httpx
# 🔄 Connected Modules / Calls From:
# container.py, tests

from . import templates
from .logging_email_service import LoggingEmailService
from .sendgrid_email_service import SendGridEmailService
from .templates import EmailMessage

__all__ = ["templates", "EmailMessage", "LoggingEmailService", "SendGridEmailService"]
