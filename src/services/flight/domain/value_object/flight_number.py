import re
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class FlightNumber:
    """Flight number

    Two-character IATA airline designator + 1-4 digit service number.
    The designator may contain one digit, e.g. PR102, 5J560, Z2123.
    """

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?:[A-Z]{2}|[A-Z]\d|\d[A-Z])\d{1,4}$"
    )

    def __post_init__(self) -> None:
        normalized = self.value.strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValueError(
                f"Invalid flight number format: {self.value}. "
                "Expected format: PR102 (2-character airline code + 1-4 digits)"
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @property
    def airline_code(self) -> str:
        """Airline designator (first two characters)"""
        return self.value[:2]

    @property
    def flight_num(self) -> str:
        """Service number"""
        return self.value[2:]
