from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests
import stripe

from services.payment.applications.create_payment_intent import PaymentIntentService
from services.payment.applications.gcash_charge import GcashChargeService
from services.payment.infrastructure.stripe_gateway import PaymentIntent, StripeGateway
from services.payment.infrastructure.xendit_gateway import XenditGateway, format_to_e164
from services.shared.domain import Money
from services.shared.domain.exception import (
    AuthenticationException,
    PaymentGatewayException,
)


class TestFormatToE164:
    @pytest.mark.parametrize(
        ("phone", "expected"),
        [
            ("09171234567", "+639171234567"),
            ("+639171234567", "+639171234567"),
            ("639171234567", "639171234567"),
            (None, ""),
            ("", ""),
        ],
    )
    def test_formats(self, phone, expected):
        assert format_to_e164(phone) == expected


class TestStripeGateway:
    def test_amount_is_sent_in_minor_units(self):
        with patch("stripe.PaymentIntent.create") as create:
            create.return_value = MagicMock(id="pi_123", client_secret="pi_123_secret")

            intent = StripeGateway().create_payment_intent(
                Money.php("2499.50"), {"user_id": "USR-OWNER"}
            )

        assert intent == PaymentIntent(id="pi_123", client_secret="pi_123_secret")
        kwargs = create.call_args.kwargs
        assert kwargs["amount"] == 249950
        assert kwargs["currency"] == "php"
        assert kwargs["api_key"] == "sk_test_dummy"
        assert kwargs["metadata"] == {"user_id": "USR-OWNER"}

    def test_stripe_error_becomes_gateway_error(self):
        with patch("stripe.PaymentIntent.create") as create:
            create.side_effect = stripe.APIConnectionError("network down")

            with pytest.raises(PaymentGatewayException):
                StripeGateway().create_payment_intent(Money.php(100), {})

    def test_bad_signature_is_rejected(self):
        with patch("stripe.Webhook.construct_event") as construct:
            construct.side_effect = stripe.SignatureVerificationError(
                "bad signature", "t=1,v1=x"
            )

            with pytest.raises(AuthenticationException):
                StripeGateway().construct_event("{}", "t=1,v1=x")

    def test_verified_event_is_returned_as_dict(self):
        with patch("stripe.Webhook.construct_event") as construct:
            construct.return_value.to_dict.return_value = {"type": "ping"}

            event = StripeGateway().construct_event('{"type": "ping"}', "t=1,v1=x")

        assert event == {"type": "ping"}
        assert construct.call_args.kwargs["secret"] == "whsec_dummy"


class TestXenditGateway:
    def _charge(self, gateway: XenditGateway) -> dict:
        return gateway.create_ewallet_charge(
            reference_id="demo-gcash-1",
            amount=Money.php("2500"),
            channel_code="PH_GCASH",
            success_redirect_url="http://localhost:5173/ok",
            failure_redirect_url="http://localhost:5173/failed",
            email="juan@example.com",
            phone="09171234567",
        )

    def test_posts_charge_with_basic_auth(self):
        with patch("requests.post") as post:
            post.return_value.json.return_value = {"id": "ewc_1", "status": "PENDING"}

            charge = self._charge(XenditGateway(api_url="https://api.xendit.co/"))

        assert charge["id"] == "ewc_1"
        args, kwargs = post.call_args
        assert args[0] == "https://api.xendit.co/ewallets/charges"
        assert kwargs["auth"] == ("xnd_development_dummy", "")
        assert kwargs["json"]["amount"] == 2500.0
        assert kwargs["json"]["customer"]["mobile_number"] == "+639171234567"
        assert kwargs["json"]["channel_properties"]["success_redirect_url"].endswith("/ok")

    def test_rejected_charge(self):
        response = MagicMock(status_code=400)
        response.json.return_value = {"message": "Invalid amount", "errors": []}
        with patch("requests.post") as post:
            post.return_value.raise_for_status.side_effect = requests.HTTPError(
                response=response
            )

            with pytest.raises(PaymentGatewayException, match="rejected"):
                self._charge(XenditGateway(api_url="https://api.xendit.co"))

    def test_unreachable(self):
        with patch("requests.post", side_effect=requests.ConnectionError("timeout")):
            with pytest.raises(PaymentGatewayException, match="failed"):
                self._charge(XenditGateway(api_url="https://api.xendit.co"))


class TestPaymentIntentService:
    def test_booking_id_goes_into_metadata(self):
        gateway = MagicMock()

        PaymentIntentService(gateway, currency="PHP").create(
            Decimal("5000"), "USR-OWNER", booking_id="BK-1"
        )

        amount, metadata = gateway.create_payment_intent.call_args[0]
        assert amount == Money.php("5000")
        assert metadata == {"user_id": "USR-OWNER", "booking_id": "BK-1"}

    def test_without_booking(self):
        gateway = MagicMock()

        PaymentIntentService(gateway).create(Decimal("10"), "USR-OWNER")

        assert gateway.create_payment_intent.call_args[0][1] == {"user_id": "USR-OWNER"}


class TestGcashChargeService:
    def test_redirects_back_to_the_client(self):
        gateway = MagicMock()
        service = GcashChargeService(gateway, client_url="http://localhost:5173/")

        service.create_sandbox_charge(Decimal("2500"), "juan@example.com", "09171234567")

        kwargs = gateway.create_ewallet_charge.call_args.kwargs
        reference_id = kwargs["reference_id"]
        assert reference_id.startswith("demo-gcash-")
        assert kwargs["channel_code"] == "PH_GCASH"
        assert kwargs["success_redirect_url"] == (
            f"http://localhost:5173/gcash/payment-success?ref_id={reference_id}"
        )
        assert kwargs["failure_redirect_url"] == "http://localhost:5173/payment-failed"
