from enum import Enum


class PaymentMethod(str, Enum):
    CARD = "card"
    GCASH = "gcash"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"
