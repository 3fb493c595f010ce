from typing import NamedTuple

from aws_cdk import Duration
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Route(NamedTuple):
    method: str
    path: str
    service: str
    public: bool = False


# ``service`` is a key of the integrations mapping passed to Api.
ROUTES: tuple[Route, ...] = (
    # flights
    Route("GET", "/flights", "flight", public=True),
    Route("POST", "/flights", "flight"),
    Route("GET", "/flights/upcoming", "flight", public=True),
    Route("GET", "/flights/range", "flight", public=True),
    Route("POST", "/flights/search", "flight", public=True),
    Route("POST", "/flights/import", "flight"),
    Route("POST", "/flights/filter", "flight"),
    Route("GET", "/flights/{flight_id}", "flight", public=True),
    Route("PUT", "/flights/{flight_id}", "flight"),
    Route("DELETE", "/flights/{flight_id}", "flight"),
    Route("PATCH", "/flights/{flight_id}/status", "flight"),
    Route("POST", "/flights/{flight_id}/recount", "flight"),
    Route("GET", "/flights/{flight_id}/seats", "flight", public=True),
    Route("GET", "/flights/{flight_id}/seats/available", "flight", public=True),
    Route("PATCH", "/flights/{flight_id}/seats/{seat_number}", "flight"),
    # bookings and passengers
    Route("POST", "/bookings", "booking"),
    Route("GET", "/bookings", "booking"),
    Route("GET", "/bookings/all", "booking"),
    Route("GET", "/bookings/{booking_id}", "booking"),
    Route("PATCH", "/bookings/{booking_id}/cancel", "booking"),
    Route("PATCH", "/bookings/{booking_id}/status", "booking"),
    Route("POST", "/bookings/{booking_id}/passengers", "booking"),
    Route("GET", "/bookings/{booking_id}/passengers", "booking"),
    Route("GET", "/passengers/{passenger_id}", "booking"),
    Route("PUT", "/passengers/{passenger_id}", "booking"),
    Route("DELETE", "/passengers/{passenger_id}", "booking"),
    # payments
    Route("POST", "/payments/create-payment-intent", "payment"),
    Route("POST", "/payments/record", "payment"),
    Route("GET", "/payments", "payment"),
    Route("GET", "/payments/all", "payment"),
    Route("POST", "/payments/sandbox/gcash", "payment"),
    Route("GET", "/payments/verify-gcash", "payment"),
    Route("POST", "/payments/webhooks/stripe", "payment", public=True),
    Route("POST", "/payments/webhooks/xendit", "payment", public=True),
    # users
    Route("POST", "/users/register", "user", public=True),
    Route("POST", "/users/login", "user", public=True),
    Route("POST", "/users/logout", "user", public=True),
    Route("GET", "/users/google", "user", public=True),
    Route("GET", "/users/google/callback", "user", public=True),
    Route("GET", "/users/details", "user"),
    Route("GET", "/users/session", "user"),
    Route("GET", "/users/all", "user"),
    Route("PATCH", "/users/{user_id}/set-as-admin", "user"),
)


class Api(Construct):
    """API Gateway Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        integrations: dict[str, _lambda.Function],
        authorizer_fn: _lambda.Function,
        allowed_origins: list[str],
    ) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "AirlineRestApi",
            rest_api_name="Airline Ticketing API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=50,
                throttling_rate_limit=25,
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=allowed_origins or apigw.Cors.ALL_ORIGINS,
                allow_methods=apigw.Cors.ALL_METHODS,
                allow_headers=["Content-Type", "Authorization"],
                allow_credentials=bool(allowed_origins),
            ),
        )

        # Neither the bearer token nor the session cookie is mandatory:
        # no identity source, no result caching.
        self.authorizer = apigw.RequestAuthorizer(
            self,
            "SessionAuthorizer",
            handler=authorizer_fn,
            identity_sources=[],
            results_cache_ttl=Duration.seconds(0),
        )

        lambda_integrations = {
            service: apigw.LambdaIntegration(fn)
            for service, fn in integrations.items()
        }
        for route in ROUTES:
            resource = self.rest_api.root.resource_for_path(route.path)
            resource.add_method(
                route.method,
                lambda_integrations[route.service],
                authorizer=None if route.public else self.authorizer,
            )
