"""
Environment-specific deployment settings.

Cost-optimized defaults for development/testing.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Stack settings with cost-optimized defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "eu-west-2"  # Default AWS region

    # Catalog
    gig_table_name: str = "gig"

    # Mail
    mail_backend: str = "ses"
    sender_address: str = "tickets@ticketless.example"

    # SMTP relay, used only when mail_backend is "smtp". The password lives
    # in Secrets Manager under smtp_password_secret_name.
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password_secret_name: str = "ticketless/smtp-password"

    # Card expiry year bounds accepted by the purchase validator
    card_expiry_year_min: int = 2018
    card_expiry_year_max: int = 2024

    # Lambda Configuration
    lambda_memory_mb: int = 256
    lambda_timeout_seconds: int = 30

    # Worker / queue
    worker_schedule_minutes: int = 1
    queue_visibility_timeout_seconds: int = 60  # must exceed the worker timeout
    queue_max_receive_count: int = 5  # then the message goes to the DLQ

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        common = dict(
            aws_region=os.environ.get("AWS_REGION", cls.aws_region),
            mail_backend=os.environ.get("MAIL_BACKEND", cls.mail_backend),
            sender_address=os.environ.get("MAIL_SENDER_ADDRESS", cls.sender_address),
            smtp_host=os.environ.get("SMTP_HOST", cls.smtp_host),
            smtp_port=int(os.environ.get("SMTP_PORT", cls.smtp_port)),
            smtp_username=os.environ.get("SMTP_USERNAME", cls.smtp_username),
            smtp_password_secret_name=os.environ.get(
                "SMTP_PASSWORD_SECRET_NAME", cls.smtp_password_secret_name
            ),
            card_expiry_year_min=int(
                os.environ.get("CARD_EXPIRY_YEAR_MIN", cls.card_expiry_year_min)
            ),
            card_expiry_year_max=int(
                os.environ.get("CARD_EXPIRY_YEAR_MAX", cls.card_expiry_year_max)
            ),
        )

        # Production overrides
        if env == "prod":
            return cls(
                environment="prod",
                lambda_memory_mb=512,
                queue_max_receive_count=10,
                **common,
            )

        return cls(environment=env, **common)
