from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class FlightId:
    """Flight ID

    e.g. "FL-3F9A1C07B2"
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("FlightId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> FlightId:
        return cls(value=f"FL-{uuid4().hex[:10].upper()}")
