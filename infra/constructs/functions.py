import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

RUNTIME = _lambda.Runtime.PYTHON_3_14


class Functions(Construct):
    """Lambda functions of the ticketing services"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        app_secret: secretsmanager.ISecret,
        common_layer: _lambda.LayerVersion,
        environment: dict[str, str] | None = None,
    ) -> None:
        super().__init__(scope, id)

        self._table = table
        self._app_secret = app_secret
        self._common_layer = common_layer
        self._environment = environment or {}

        self.flight_api = self._create_function(
            "FlightApiLambda",
            "services.flight.handlers.api.lambda_handler",
            "flight-service",
        )
        self.booking_api = self._create_function(
            "BookingApiLambda",
            "services.booking.handlers.api.lambda_handler",
            "booking-service",
        )
        self.payment_api = self._create_function(
            "PaymentApiLambda",
            "services.payment.handlers.api.lambda_handler",
            "payment-service",
            timeout=Duration.seconds(30),
        )
        self.user_api = self._create_function(
            "UserApiLambda",
            "services.user.handlers.api.lambda_handler",
            "user-service",
            timeout=Duration.seconds(15),
        )
        self.expire_holds = self._create_function(
            "ExpireHoldsLambda",
            "services.booking.handlers.expire_holds.lambda_handler",
            "booking-service",
            timeout=Duration.seconds(60),
        )
        self.authorizer = self._create_function(
            "AuthorizerLambda",
            "authorizer.handler.lambda_handler",
            "authorizer",
        )

        for fn in [
            self.flight_api,
            self.booking_api,
            self.payment_api,
            self.user_api,
            self.expire_holds,
        ]:
            table.grant_read_write_data(fn)

        # sessions only
        table.grant_read_data(self.authorizer)

        for fn in self.all_functions:
            app_secret.grant_read(fn)

    @property
    def functions_by_service(self) -> dict[str, list[_lambda.Function]]:
        """Lambdas grouped by their POWERTOOLS_SERVICE_NAME"""
        return {
            "flight-service": [self.flight_api],
            "booking-service": [self.booking_api, self.expire_holds],
            "payment-service": [self.payment_api],
            "user-service": [self.user_api],
            "authorizer": [self.authorizer],
        }

    @property
    def all_functions(self) -> list[_lambda.Function]:
        return [
            self.flight_api,
            self.booking_api,
            self.payment_api,
            self.user_api,
            self.expire_holds,
            self.authorizer,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
        timeout: Duration = Duration.seconds(10),
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=RUNTIME,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._common_layer],
            timeout=timeout,
            memory_size=256,
            environment={
                **self._environment,
                "TABLE_NAME": self._table.table_name,
                "APP_SECRET_ARN": self._app_secret.secret_arn,
                "POWERTOOLS_SERVICE_NAME": service_name,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            },
        )
