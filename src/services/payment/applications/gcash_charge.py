import time
from decimal import Decimal

from services.payment.infrastructure.xendit_gateway import XenditGateway
from services.shared.domain import Money

GCASH_CHANNEL_CODE = "PH_GCASH"


class GcashChargeService:
    """Create a GCash e-wallet charge in the Xendit sandbox"""

    def __init__(self, gateway: XenditGateway, client_url: str) -> None:
        self._gateway = gateway
        self._client_url = client_url.rstrip("/")

    def create_sandbox_charge(
        self, amount: Decimal, email: str | None, phone: str | None
    ) -> dict:
        reference_id = f"demo-gcash-{int(time.time() * 1000)}"
        return self._gateway.create_ewallet_charge(
            reference_id=reference_id,
            amount=Money.php(amount),
            channel_code=GCASH_CHANNEL_CODE,
            success_redirect_url=(
                f"{self._client_url}/gcash/payment-success?ref_id={reference_id}"
            ),
            failure_redirect_url=f"{self._client_url}/payment-failed",
            email=email,
            phone=phone,
        )
