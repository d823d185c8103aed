"""
Data layer construct: DynamoDB gig catalog table.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_dynamodb as dynamodb,
)
from constructs import Construct


class DataLayerConstruct(Construct):
    """Provision the gig catalog."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        gig_table_name: str,
    ) -> None:
        super().__init__(scope, construct_id)

        self.gig_table = dynamodb.Table(
            self,
            "GigCatalog",
            table_name=f"{gig_table_name}-{environment}",
            partition_key=dynamodb.Attribute(name="slug", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=environment == "prod",
            removal_policy=RemovalPolicy.RETAIN if environment == "prod" else RemovalPolicy.DESTROY,
        )
