"""
CDK app for Ticketless.

Deployment knobs come from the shell environment (see
infrastructure/config/settings.py), e.g.

    ENVIRONMENT=prod MAIL_BACKEND=smtp SMTP_HOST=smtp.mailtrap.io cdk deploy
"""

import aws_cdk as cdk

from infrastructure.config.settings import Settings
from infrastructure.main_stack import TicketlessStack


def main() -> None:
    settings = Settings.from_environment()
    app = cdk.App()

    stack = TicketlessStack(
        app,
        f"TicketlessStack-{settings.environment}",
        settings=settings,
        env=cdk.Environment(
            account=app.node.try_get_context("account"),
            region=settings.aws_region,
        ),
    )
    cdk.Tags.of(stack).add("project", "ticketless")
    cdk.Tags.of(stack).add("environment", settings.environment)

    app.synth()


if __name__ == "__main__":
    main()
