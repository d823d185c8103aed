"""
Mail transports for ticket confirmations.

SES is the default in AWS; SMTP is kept for providers outside AWS
(Mailtrap, Mailgun, ...). Both report failures as
DependencyUnavailableError so the worker treats them alike.
"""

from __future__ import annotations

from email.message import EmailMessage
import json
import smtplib
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from models.queue import DeliveryReceipt
from utils.error_handling import DependencyUnavailableError
from utils.logging_config import get_logger
from utils.settings import AppSettings

logger = get_logger(__name__)


class MailTransport(Protocol):
    """Anything that can hand a plain-text email to a mail system."""

    def send(self, sender: str, recipient: str, subject: str, body: str) -> DeliveryReceipt:
        ...


class SesMailTransport:
    """Send through Amazon SES."""

    def __init__(self, client=None):
        self.client = client or boto3.client("ses")

    def send(self, sender: str, recipient: str, subject: str, body: str) -> DeliveryReceipt:
        try:
            resp = self.client.send_email(
                Source=sender,
                Destination={"ToAddresses": [recipient]},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {"Text": {"Data": body, "Charset": "UTF-8"}},
                },
            )
        except (BotoCoreError, ClientError) as exc:
            raise DependencyUnavailableError("ses", str(exc), cause=exc) from exc
        return DeliveryReceipt(transport="ses", message_id=resp.get("MessageId"))


class SmtpMailTransport:
    """
    Send through an SMTP relay.

    Port 465 speaks implicit TLS; any other port except 25 is upgraded with
    STARTTLS before logging in.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    def send(self, sender: str, recipient: str, subject: str, body: str) -> DeliveryReceipt:
        message = EmailMessage()
        message["From"] = sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)

        try:
            if self.port == 465:
                connection = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
            else:
                connection = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with connection as smtp:
                if self.port not in (25, 465):
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DependencyUnavailableError("smtp", str(exc), cause=exc) from exc
        return DeliveryReceipt(transport="smtp", message_id=message.get("Message-ID"))


def load_smtp_password(secret_id: str, client=None) -> str:
    """
    Read the SMTP password from Secrets Manager.

    The secret is either the bare password or a JSON object with a
    `password` key.
    """
    sm = client or boto3.client("secretsmanager")
    try:
        secret_value = sm.get_secret_value(SecretId=secret_id)["SecretString"]
    except (BotoCoreError, ClientError) as exc:
        raise DependencyUnavailableError("secretsmanager", str(exc), cause=exc) from exc

    try:
        secret = json.loads(secret_value)
    except ValueError:
        return secret_value
    if isinstance(secret, dict):
        password = secret.get("password")
        if not isinstance(password, str) or not password:
            raise ValueError(f"SMTP secret {secret_id!r} has no password key")
        return password
    return secret_value


def build_mail_transport(settings: AppSettings, secrets_client=None) -> MailTransport:
    """Pick the transport configured by MAIL_BACKEND."""
    if settings.mail_backend == "smtp":
        password = settings.smtp_password
        if not password and settings.smtp_password_secret_id:
            password = load_smtp_password(settings.smtp_password_secret_id, secrets_client)
            logger.info("Loaded SMTP password", extra={"secret_id": settings.smtp_password_secret_id})
        return SmtpMailTransport(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=password,
        )
    if settings.mail_backend == "ses":
        return SesMailTransport()
    raise ValueError(f"Unknown MAIL_BACKEND {settings.mail_backend!r}")
