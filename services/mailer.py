"""
Verification mail over SMTP.

Credentials come from Settings (EMAIL_USER / EMAIL_PASS). Delivery is
fire-and-forget: callers schedule `send_verification_email` as a background
task and never see its outcome, failures only reach the log.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import logging
import smtplib
import ssl
from urllib.parse import urlencode

from config import settings

_LOG = logging.getLogger(__name__)

SUBJECT = "Verification Email From Reppup"


def verification_link(email: str, token: str) -> str:
    query = urlencode({"email": email, "token": token})
    return f"{settings.frontend_url.rstrip('/')}/verify-email?{query}"


def _build_message(to_email: str, link: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = SUBJECT
    msg["From"] = settings.email_user or ""
    msg["To"] = to_email
    text = f"Please verify your email by clicking the link below:\n\n{link}"
    html = (
        "<p>Please verify your email by clicking the link below:</p>"
        f'<p><a href="{link}">Verify Email</a></p>'
    )
    msg.attach(MIMEText(text, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


def _deliver(to_email: str, msg: MIMEMultipart) -> None:
    port = settings.smtp_port or 465
    if port == 465:
        context = ssl.create_default_context()
        with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
            server.login(settings.email_user, settings.email_pass)
            server.sendmail(settings.email_user, [to_email], msg.as_string())
    else:
        with smtplib.SMTP(settings.smtp_host, port) as server:
            server.ehlo()
            server.starttls(context=ssl.create_default_context())
            server.login(settings.email_user, settings.email_pass)
            server.sendmail(settings.email_user, [to_email], msg.as_string())


def send_verification_email(email: str, token: str) -> bool:
    """
    Send the verification link for `email` / `token`.

    Returns True when the relay accepted the message. Never raises: a missing
    SMTP configuration or a transport error is logged and reported as False.
    """
    if not (settings.email_user and settings.email_pass and settings.smtp_host):
        _LOG.warning("SMTP not configured; skipping verification email to %s", email)
        return False
    link = verification_link(email, token)
    try:
        _deliver(email, _build_message(email, link))
    except (smtplib.SMTPException, OSError):
        _LOG.exception("Error sending verification email to %s", email)
        return False
    _LOG.info("Verification email sent to %s", email)
    return True
