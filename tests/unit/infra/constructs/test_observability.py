import aws_cdk as core
import aws_cdk.assertions as assertions
import pytest
from aws_cdk import aws_lambda as _lambda

from infra.constructs.observability import Observability


def _function(stack: core.Stack, id: str) -> _lambda.Function:
    return _lambda.Function(
        stack,
        id,
        runtime=_lambda.Runtime.PYTHON_3_12,
        handler="index.lambda_handler",
        code=_lambda.Code.from_inline("def lambda_handler(event, context):\n    return event\n"),
    )


@pytest.fixture(scope="module")
def template() -> assertions.Template:
    app = core.App()
    stack = core.Stack(
        app,
        "ObservabilityTest",
        env=core.Environment(account="123456789012", region="ap-southeast-1"),
    )
    Observability(
        stack,
        "Observability",
        services={
            "flight-service": [_function(stack, "FlightFn")],
            "booking-service": [_function(stack, "BookingFn"), _function(stack, "ExpireFn")],
        },
        env="test",
    )
    return assertions.Template.from_stack(stack)


def test_forwarder_is_deployed_as_nested_stack(template):
    template.resource_count_is("AWS::CloudFormation::Stack", 1)
    template.has_resource_properties(
        "AWS::CloudFormation::Stack",
        {
            "Parameters": assertions.Match.object_like(
                {"FunctionName": "serverless-airline-ticketing-datadog-forwarder"}
            )
        },
    )


def test_api_key_secret_is_created(template):
    template.resource_count_is("AWS::SecretsManager::Secret", 1)


@pytest.mark.parametrize(
    "service_name, expected_functions",
    [("flight-service", 1), ("booking-service", 2)],
)
def test_each_service_keeps_its_own_datadog_service_name(
    template, service_name, expected_functions
):
    functions = template.find_resources(
        "AWS::Lambda::Function",
        {
            "Properties": {
                "Environment": {
                    "Variables": assertions.Match.object_like(
                        {"DD_SERVICE": service_name, "DD_ENV": "test"}
                    )
                }
            }
        },
    )

    assert len(functions) == expected_functions
