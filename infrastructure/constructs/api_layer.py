"""
API layer construct: shared Lambda + HTTP API routes.

A single Lambda serves the catalog and purchase routes and keeps warm
clients between requests.
"""

from aws_cdk import (
    Duration,
    aws_lambda as _lambda,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as integrations,
    aws_logs as logs,
)
from constructs import Construct

from infrastructure.constructs.lambda_code import bundled_src


class ApiLayerConstruct(Construct):
    """Expose gig and purchase endpoints via HTTP API."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        gig_table_name: str,
        topic_arn: str,
        card_expiry_year_min: int,
        card_expiry_year_max: int,
        lambda_memory_mb: int = 256,
        lambda_timeout_seconds: int = 30,
    ) -> None:
        super().__init__(scope, construct_id)

        self.main_lambda = _lambda.Function(
            self,
            "ApiHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="handlers.main.lambda_handler",
            code=bundled_src(),
            memory_size=lambda_memory_mb,
            timeout=Duration.seconds(lambda_timeout_seconds),
            architecture=_lambda.Architecture.X86_64,
            environment={
                "ENVIRONMENT": environment,
                "GIG_TABLE": gig_table_name,
                "SNS_TOPIC_ARN": topic_arn,
                "CARD_EXPIRY_YEAR_MIN": str(card_expiry_year_min),
                "CARD_EXPIRY_YEAR_MAX": str(card_expiry_year_max),
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        # HTTP API with minimal latency and low cost.
        self.api = apigw.HttpApi(
            self,
            "HttpApi",
            api_name=f"ticketless-api-{environment}",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_origins=["*"],
                allow_methods=[apigw.CorsHttpMethod.ANY],
                allow_headers=["Content-Type", "Authorization", "X-Api-Key"],
            ),
        )

        integration = integrations.HttpLambdaIntegration(
            "LambdaIntegration", self.main_lambda
        )

        route_defs = [
            (apigw.HttpMethod.GET, "/gigs"),
            (apigw.HttpMethod.GET, "/gigs/{slug}"),
            (apigw.HttpMethod.POST, "/purchase"),
        ]

        for method, path in route_defs:
            self.api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
            )
