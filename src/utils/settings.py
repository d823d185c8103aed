"""
Runtime configuration for the API and worker Lambdas.

Values come from the Lambda environment that the CDK stack sets.
"""

from dataclasses import dataclass
import os
from typing import Optional


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw in (None, ""):
        return default
    return int(raw)


@dataclass(frozen=True)
class AppSettings:
    """Application settings shared by every handler."""

    environment: str = "dev"

    # Catalog
    gig_table_name: str = "gig"

    # Event pipeline
    topic_arn: str = ""
    queue_url: str = ""
    queue_wait_seconds: int = 0
    queue_visibility_timeout: Optional[int] = None

    # Mail
    mail_backend: str = "ses"
    sender_address: str = ""
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_password_secret_id: Optional[str] = None

    # Card expiry year bounds, inclusive
    card_expiry_year_min: int = 2018
    card_expiry_year_max: int = 2024

    @classmethod
    def from_environment(cls) -> "AppSettings":
        """Load settings from environment variables."""
        env = os.environ
        return cls(
            environment=env.get("ENVIRONMENT", "dev"),
            gig_table_name=env.get("GIG_TABLE", "gig"),
            topic_arn=env.get("SNS_TOPIC_ARN", ""),
            queue_url=env.get("SQS_QUEUE_URL", ""),
            queue_wait_seconds=_int_env("QUEUE_WAIT_SECONDS", 0),
            queue_visibility_timeout=_int_env("QUEUE_VISIBILITY_TIMEOUT", None),
            mail_backend=env.get("MAIL_BACKEND", "ses").lower(),
            sender_address=env.get("MAIL_SENDER_ADDRESS")
            or env.get("SMTP_SENDER_ADDRESS", ""),
            smtp_host=env.get("SMTP_HOST", "localhost"),
            smtp_port=_int_env("SMTP_PORT", 587),
            smtp_username=env.get("SMTP_USERNAME") or None,
            smtp_password=env.get("SMTP_PASSWORD") or None,
            smtp_password_secret_id=env.get("SMTP_PASSWORD_SECRET_ID") or None,
            card_expiry_year_min=_int_env("CARD_EXPIRY_YEAR_MIN", 2018),
            card_expiry_year_max=_int_env("CARD_EXPIRY_YEAR_MAX", 2024),
        )
