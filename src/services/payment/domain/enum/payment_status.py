from enum import Enum


class PaymentStatus(str, Enum):
    """Payment status"""

    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
