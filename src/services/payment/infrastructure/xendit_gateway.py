import requests
from aws_lambda_powertools import Logger

from services.shared.config import get_secret
from services.shared.domain import Money
from services.shared.domain.exception import PaymentGatewayException

logger = Logger(child=True)

DEFAULT_TIMEOUT_SECONDS = 10


def format_to_e164(phone: str | None) -> str:
    """Normalise a Philippine mobile number (09171234567 -> +639171234567)"""
    if not phone:
        return ""
    if phone.startswith("+"):
        return phone
    if phone.startswith("0"):
        return "+63" + phone[1:]
    return phone


class XenditGateway:
    """Xendit e-wallet charges over the REST API (basic auth, secret key)"""

    def __init__(self, api_url: str, timeout: int = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def create_ewallet_charge(
        self,
        reference_id: str,
        amount: Money,
        channel_code: str,
        success_redirect_url: str,
        failure_redirect_url: str,
        email: str | None,
        phone: str | None,
    ) -> dict:
        body = {
            "reference_id": reference_id,
            "currency": str(amount.currency),
            "amount": float(amount.amount),
            "checkout_method": "ONE_TIME_PAYMENT",
            "channel_code": channel_code,
            "channel_properties": {
                "success_redirect_url": success_redirect_url,
                "failure_redirect_url": failure_redirect_url,
            },
            "customer": {
                "email": email,
                "mobile_number": format_to_e164(phone),
            },
        }
        try:
            response = requests.post(
                f"{self._api_url}/ewallets/charges",
                json=body,
                auth=(get_secret("XENDIT_SANDBOX_SECRET_KEY"), ""),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            self._log_failure(e.response)
            raise PaymentGatewayException("GCash charge was rejected") from e
        except requests.RequestException as e:
            logger.error("Xendit is unreachable", extra={"error": str(e)})
            raise PaymentGatewayException("GCash charge failed") from e
        return response.json()

    @staticmethod
    def _log_failure(response: requests.Response | None) -> None:
        details: dict = {}
        if response is not None:
            try:
                details = response.json()
            except ValueError:
                details = {}
        logger.error(
            "GCash sandbox error",
            extra={
                "status": response.status_code if response is not None else None,
                "xendit_message": details.get("message"),
                "errors": details.get("errors"),
            },
        )
