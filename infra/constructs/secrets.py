import json

from aws_cdk import RemovalPolicy
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

# Filled in by operators after the first deploy; JWT_SECRET is generated.
CREDENTIAL_KEYS = (
    "STRIPE_SECRET_KEY",
    "STRIPE_WEBHOOK_SECRET",
    "XENDIT_SANDBOX_SECRET_KEY",
    "XENDIT_CALLBACK_TOKEN",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
)


class Secrets(Construct):
    """Application credentials bundled in one JSON secret"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.app_secret = secretsmanager.Secret(
            self,
            "AppSecret",
            description="Signing key and payment / OAuth provider credentials",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                secret_string_template=json.dumps(
                    {key: "" for key in CREDENTIAL_KEYS}
                ),
                generate_string_key="JWT_SECRET",
                exclude_punctuation=True,
                password_length=64,
            ),
            removal_policy=RemovalPolicy.DESTROY,
        )
