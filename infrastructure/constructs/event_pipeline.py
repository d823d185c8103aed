"""
Event pipeline: SNS topic -> SQS queue -> scheduled worker Lambda -> email.
"""

from aws_cdk import (
    Duration,
    aws_events as events,
    aws_events_targets as targets,
    aws_iam as iam,
    aws_lambda as _lambda,
    aws_logs as logs,
    aws_secretsmanager as secretsmanager,
    aws_sns as sns,
    aws_sns_subscriptions as subscriptions,
    aws_sqs as sqs,
)
from constructs import Construct

from infrastructure.constructs.lambda_code import bundled_src


class EventPipelineConstruct(Construct):
    """Fan purchase events out to a work queue drained by the mail worker."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        mail_backend: str,
        sender_address: str,
        smtp_host: str = "",
        smtp_port: int = 587,
        smtp_username: str = "",
        smtp_password_secret_name: str = "",
        schedule_minutes: int,
        visibility_timeout_seconds: int,
        max_receive_count: int,
        lambda_timeout_seconds: int = 30,
    ) -> None:
        super().__init__(scope, construct_id)

        self.topic = sns.Topic(
            self,
            "PurchaseTopic",
            topic_name=f"ticketless-purchases-{environment}",
        )

        self.dead_letter_queue = sqs.Queue(
            self,
            "NotificationDlq",
            retention_period=Duration.days(14),
        )

        # Visibility timeout longer than the worker timeout, so a message is
        # never redelivered while an invocation is still handling it.
        self.queue = sqs.Queue(
            self,
            "NotificationQueue",
            visibility_timeout=Duration.seconds(visibility_timeout_seconds),
            dead_letter_queue=sqs.DeadLetterQueue(
                max_receive_count=max_receive_count,
                queue=self.dead_letter_queue,
            ),
        )

        # Raw delivery stays off: the worker unwraps the SNS envelope.
        self.topic.add_subscription(subscriptions.SqsSubscription(self.queue))

        self.worker_lambda = _lambda.Function(
            self,
            "SendMailWorker",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="handlers.send_mail_worker.lambda_handler",
            code=bundled_src(),
            timeout=Duration.seconds(lambda_timeout_seconds),
            memory_size=256,
            architecture=_lambda.Architecture.X86_64,
            environment={
                "ENVIRONMENT": environment,
                "SQS_QUEUE_URL": self.queue.queue_url,
                "MAIL_BACKEND": mail_backend,
                "MAIL_SENDER_ADDRESS": sender_address,
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        self.queue.grant_consume_messages(self.worker_lambda)
        if mail_backend == "ses":
            self.worker_lambda.add_to_role_policy(
                iam.PolicyStatement(actions=["ses:SendEmail"], resources=["*"])
            )
        elif mail_backend == "smtp":
            self.worker_lambda.add_environment("SMTP_HOST", smtp_host)
            self.worker_lambda.add_environment("SMTP_PORT", str(smtp_port))
            if smtp_username:
                self.worker_lambda.add_environment("SMTP_USERNAME", smtp_username)
            # Created out of band; holds the bare password or {"password": ...}.
            self.smtp_secret = secretsmanager.Secret.from_secret_name_v2(
                self, "SmtpPassword", smtp_password_secret_name
            )
            self.smtp_secret.grant_read(self.worker_lambda)
            self.worker_lambda.add_environment(
                "SMTP_PASSWORD_SECRET_ID", self.smtp_secret.secret_name
            )

        events.Rule(
            self,
            "SendMailSchedule",
            schedule=events.Schedule.rate(Duration.minutes(schedule_minutes)),
            targets=[targets.LambdaFunction(self.worker_lambda)],
        )
