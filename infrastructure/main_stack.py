"""
Main CDK Stack for the Ticketless gig ticketing service.
"""

from aws_cdk import (
    Stack,
    Tags,
    CfnOutput,
)
from constructs import Construct

from infrastructure.constructs.data_layer import DataLayerConstruct
from infrastructure.constructs.api_layer import ApiLayerConstruct
from infrastructure.constructs.event_pipeline import EventPipelineConstruct
from infrastructure.config.settings import Settings


class TicketlessStack(Stack):
    """Main stack wiring all constructs together."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Global tags for cost/accounting.
        Tags.of(self).add("Project", "ticketless")
        Tags.of(self).add("Environment", settings.environment)
        Tags.of(self).add("ManagedBy", "cdk")

        # 1) Gig catalog.
        data_construct = DataLayerConstruct(
            self,
            "DataLayer",
            environment=settings.environment,
            gig_table_name=settings.gig_table_name,
        )

        # 2) Purchase topic, notification queue and mail worker.
        event_construct = EventPipelineConstruct(
            self,
            "EventPipeline",
            environment=settings.environment,
            mail_backend=settings.mail_backend,
            sender_address=settings.sender_address,
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_username=settings.smtp_username,
            smtp_password_secret_name=settings.smtp_password_secret_name,
            schedule_minutes=settings.worker_schedule_minutes,
            visibility_timeout_seconds=settings.queue_visibility_timeout_seconds,
            max_receive_count=settings.queue_max_receive_count,
            lambda_timeout_seconds=settings.lambda_timeout_seconds,
        )

        # 3) API layer (single Lambda).
        api_construct = ApiLayerConstruct(
            self,
            "ApiLayer",
            environment=settings.environment,
            gig_table_name=data_construct.gig_table.table_name,
            topic_arn=event_construct.topic.topic_arn,
            card_expiry_year_min=settings.card_expiry_year_min,
            card_expiry_year_max=settings.card_expiry_year_max,
            lambda_memory_mb=settings.lambda_memory_mb,
            lambda_timeout_seconds=settings.lambda_timeout_seconds,
        )

        # Permissions for the API Lambda: read the catalog, publish purchases.
        data_construct.gig_table.grant_read_data(api_construct.main_lambda)
        event_construct.topic.grant_publish(api_construct.main_lambda)

        # Outputs to quickly find resources.
        CfnOutput(self, "ApiEndpoint", value=api_construct.api.api_endpoint)
        CfnOutput(self, "GigTable", value=data_construct.gig_table.table_name)
        CfnOutput(self, "PurchaseTopicArn", value=event_construct.topic.topic_arn)
        CfnOutput(self, "NotificationQueueUrl", value=event_construct.queue.queue_url)
        CfnOutput(
            self,
            "NotificationDlqUrl",
            value=event_construct.dead_letter_queue.queue_url,
        )
