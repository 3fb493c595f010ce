from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class PaymentId:
    """Payment ID

    e.g. "PAY-5E0B9A41C3D8"
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("PaymentId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> PaymentId:
        return cls(value=f"PAY-{uuid4().hex[:12].upper()}")
