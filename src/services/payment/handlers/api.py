from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.query_bookings import BookingQueryService
from services.booking.applications.update_booking_status import BookingStatusService
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.payment.applications.create_payment_intent import PaymentIntentService
from services.payment.applications.gcash_charge import GcashChargeService
from services.payment.applications.process_webhooks import (
    PaymentWebhookService,
    verify_callback_token,
)
from services.payment.applications.query_payments import PaymentQueryService
from services.payment.applications.record_payment import RecordPaymentService
from services.payment.domain.factory import PaymentFactory
from services.payment.handlers.request_models import (
    GcashChargeRequest,
    PaymentIntentRequest,
    RecordPaymentRequest,
)
from services.payment.handlers.response_models import to_response
from services.payment.infrastructure.dynamodb_payment_repository import (
    DynamoDBPaymentRepository,
)
from services.payment.infrastructure.stripe_gateway import StripeGateway
from services.payment.infrastructure.xendit_gateway import XenditGateway
from services.shared.config import get_secret, get_settings
from services.shared.utils import (
    build_cors_config,
    current_principal,
    json_response,
    register_exception_handlers,
    request_body,
    require_admin,
)

logger = Logger()
settings = get_settings()
app = APIGatewayRestResolver(cors=build_cors_config(settings))
register_exception_handlers(app)

repository = DynamoDBPaymentRepository()
factory = PaymentFactory()
stripe_gateway = StripeGateway()
booking_repository = DynamoDBBookingRepository()
booking_status_service = BookingStatusService(repository=booking_repository)

intent_service = PaymentIntentService(
    gateway=stripe_gateway, currency=settings.default_currency
)
record_service = RecordPaymentService(
    repository=repository,
    factory=factory,
    booking_query_service=BookingQueryService(repository=booking_repository),
    booking_status_service=booking_status_service,
)
query_service = PaymentQueryService(repository=repository)
gcash_service = GcashChargeService(
    gateway=XenditGateway(api_url=settings.xendit_api_url),
    client_url=settings.client_url,
)
webhook_service = PaymentWebhookService(
    repository=repository,
    factory=factory,
    booking_status_service=booking_status_service,
)


@app.post("/payments/create-payment-intent")
def create_payment_intent():
    principal = current_principal(app)
    request = PaymentIntentRequest.model_validate(request_body(app))
    intent = intent_service.create(
        amount=request.amount,
        user_id=principal.user_id,
        booking_id=request.booking_id,
    )
    logger.info(
        "Payment intent created",
        extra={"payment_intent_id": intent.id, "booking_id": request.booking_id},
    )
    return {"client_secret": intent.client_secret}


@app.post("/payments/record")
def record_payment():
    principal = current_principal(app)
    request = RecordPaymentRequest.model_validate(request_body(app))
    payment = record_service.record(principal, request.to_details())
    logger.info(
        "Payment recorded",
        extra={
            "payment_id": str(payment.id),
            "booking_id": payment.booking_id,
            "status": payment.status.value,
        },
    )
    return json_response(201, to_response(payment))


@app.get("/payments/all")
def list_all_payments():
    require_admin(app)
    return [to_response(p) for p in query_service.list_all()]


@app.get("/payments")
def list_my_payments():
    principal = current_principal(app)
    payments = query_service.list_for_user(principal.user_id)
    return {"payments": [to_response(p) for p in payments]}


@app.post("/payments/sandbox/gcash")
def create_gcash_sandbox_charge():
    current_principal(app)
    request = GcashChargeRequest.model_validate(request_body(app))
    return gcash_service.create_sandbox_charge(
        amount=request.amount,
        email=request.email,
        phone=request.phone,
    )


@app.get("/payments/verify-gcash")
def verify_gcash_payment():
    current_principal(app)
    ref_id = app.current_event.get_query_string_value(name="ref_id", default_value=None)
    if not ref_id:
        return json_response(400, {"valid": False})
    payment = query_service.find_succeeded_gcash(ref_id)
    if payment is None:
        return json_response(404, {"valid": False})
    return {"valid": True, "booking_id": payment.booking_id, "payment": to_response(payment)}


@app.post("/payments/webhooks/stripe")
def stripe_webhook():
    signature = app.current_event.get_header_value(
        name="Stripe-Signature", default_value="", case_sensitive=False
    )
    event = stripe_gateway.construct_event(app.current_event.decoded_body, signature)
    outcome = webhook_service.handle_stripe_event(event)
    logger.info(
        "Stripe webhook processed",
        extra={"event_id": event.get("id"), "type": event.get("type"), "outcome": outcome},
    )
    return {"received": True, "outcome": outcome}


@app.post("/payments/webhooks/xendit")
def xendit_callback():
    token = app.current_event.get_header_value(
        name="x-callback-token", default_value="", case_sensitive=False
    )
    verify_callback_token(token, get_secret("XENDIT_CALLBACK_TOKEN"))
    outcome = webhook_service.handle_xendit_callback(request_body(app))
    logger.info("Xendit callback processed", extra={"outcome": outcome})
    return {"received": True, "outcome": outcome}


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Payment service Lambda handler"""
    return app.resolve(event, context)
