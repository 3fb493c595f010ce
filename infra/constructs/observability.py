from aws_cdk import (
    CfnStack,
    RemovalPolicy,
    SecretValue,
)
from aws_cdk import (
    aws_lambda as _lambda,
)
from aws_cdk import (
    aws_secretsmanager as secretsmanager,
)
from constructs import Construct
from datadog_cdk_constructs_v2 import DatadogLambda

DATADOG_SITE = "datadoghq.com"
FORWARDER_TEMPLATE_URL = (
    "https://datadog-cloudformation-template.s3.amazonaws.com/aws/forwarder/latest.yaml"
)


class Observability(Construct):
    """Datadog tracing and log shipping for the Lambdas.

    The API key is read from an SSM SecureString and copied into a secret that
    both the forwarder and the Datadog extension use. Each service gets its
    own instrumentation so traces carry the same service name as the
    powertools logs of that Lambda.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        services: dict[str, list[_lambda.Function]],
        project_name: str = "serverless-airline-ticketing",
        env: str = "dev",
    ) -> None:
        super().__init__(scope, id)

        self.api_key_secret = secretsmanager.Secret(
            self,
            "DatadogApiKeySecret",
            secret_string_value=SecretValue.ssm_secure(
                f"/{project_name}/datadog-api-key"
            ),
            removal_policy=RemovalPolicy.DESTROY,
        )

        self.forwarder = CfnStack(
            self,
            "DatadogForwarder",
            template_url=FORWARDER_TEMPLATE_URL,
            parameters={
                "DdApiKeySecretArn": self.api_key_secret.secret_arn,
                "DdSite": DATADOG_SITE,
                "FunctionName": f"{project_name}-datadog-forwarder",
            },
        )

        for service_name, functions in services.items():
            self._instrument(service_name, functions, env)

    def _instrument(
        self, service_name: str, functions: list[_lambda.Function], env: str
    ) -> None:
        construct_id = "".join(part.title() for part in service_name.split("-"))
        datadog_lambda = DatadogLambda(
            self,
            f"Datadog{construct_id}",
            python_layer_version=122,
            extension_layer_version=92,
            api_key_secret_arn=self.api_key_secret.secret_arn,
            enable_datadog_tracing=True,
            enable_datadog_logs=True,
            # request bodies carry passenger PII and card metadata
            capture_lambda_payload=False,
            site=DATADOG_SITE,
            service=service_name,
            env=env,
        )
        datadog_lambda.add_lambda_functions(functions)
