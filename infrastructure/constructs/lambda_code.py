"""Shared Lambda asset for the API and worker functions."""

from aws_cdk import BundlingOptions, aws_lambda as _lambda


def bundled_src() -> _lambda.Code:
    """
    Bundle src/ with its dependencies using Docker (works in CI/CD).

    Installs pydantic, email-validator and python-json-logger; boto3 comes
    with the runtime.
    """
    return _lambda.Code.from_asset(
        "src",
        bundling=BundlingOptions(
            image=_lambda.Runtime.PYTHON_3_12.bundling_image,
            command=[
                "bash", "-c",
                "pip install -r requirements-lambda.txt -t /asset-output && "
                "cp -r . /asset-output"
            ],
        ),
    )
