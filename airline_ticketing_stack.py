from aws_cdk import CfnOutput, Stack
from constructs import Construct

from infra.constructs import (
    Api,
    Database,
    Functions,
    Layers,
    Observability,
    Scheduler,
    Secrets,
)


class AirlineTicketingStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        enable_observability: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        app_env = self.node.try_get_context("app_env") or "development"
        client_urls = self.node.try_get_context("client_urls") or ""
        allowed_origins = [url.strip() for url in client_urls.split(",") if url.strip()]

        database = Database(self, "Database")
        layers = Layers(self, "Layers")
        secrets = Secrets(self, "Secrets")

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            app_secret=secrets.app_secret,
            common_layer=layers.common_layer,
            environment={
                "APP_ENV": app_env,
                "CLIENT_URLS": client_urls,
                # API URL is not known until deploy; the Google callback needs it
                "SERVER_URL": self.node.try_get_context("server_url") or "",
                "DEFAULT_CURRENCY": self.node.try_get_context("default_currency")
                or "PHP",
                "BOOKING_HOLD_MINUTES": str(
                    self.node.try_get_context("booking_hold_minutes") or 15
                ),
            },
        )

        api = Api(
            self,
            "Api",
            integrations={
                "flight": fns.flight_api,
                "booking": fns.booking_api,
                "payment": fns.payment_api,
                "user": fns.user_api,
            },
            authorizer_fn=fns.authorizer,
            allowed_origins=allowed_origins,
        )

        Scheduler(self, "Scheduler", expire_holds=fns.expire_holds)

        if enable_observability:
            Observability(
                self,
                "Observability",
                services=fns.functions_by_service,
                env=app_env,
            )

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
        CfnOutput(self, "TableName", value=database.table.table_name)
