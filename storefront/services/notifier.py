import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from storefront.core.config import settings
from storefront.core.errors import ValidationError

logger = logging.getLogger(__name__)


def send_email(to: str, subject: str, body: str, reply_to: Optional[str] = None):
    msg = MIMEText(body)
    msg["Subject"] = subject
    msg["From"] = settings.FROM_EMAIL
    msg["To"] = to
    if reply_to:
        msg["Reply-To"] = reply_to
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as s:
        s.sendmail(settings.FROM_EMAIL, [to], msg.as_string())


def relay_contact_message(name: str, email: str, subject: Optional[str], message: str) -> None:
    """Log the message and, when SMTP is configured, mail it to support.

    Delivery problems are logged only; the sender is told the message went out.
    """
    subject = subject or "Contact form message"
    logger.info("Contact message from %s <%s>: %s", name, email, subject)
    if not settings.SMTP_HOST:
        return
    try:
        send_email(settings.CONTACT_EMAIL_TO, f"[Contact] {subject}", f"From: {name} <{email}>\n\n{message}", reply_to=email)
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to relay contact message from %s", email)


def send_contact_message(name: Optional[str], email: Optional[str], subject: Optional[str], message: Optional[str]) -> None:
    if not name or not email or not message:
        raise ValidationError("Name, email, and message are required")
    relay_contact_message(name, email, subject, message)
