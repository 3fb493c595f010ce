from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class IsoDateTime:
    """Timezone-aware UTC date-time (ISO 8601)

    Naive input is treated as UTC. The string form is canonical so stored
    values sort lexicographically in time order.
    """

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            normalized = self.value.replace(tzinfo=timezone.utc)
        else:
            normalized = self.value.astimezone(timezone.utc)
        object.__setattr__(self, "value", normalized.replace(microsecond=0))

    @classmethod
    def from_string(cls, s: str) -> IsoDateTime:
        """Parse an ISO 8601 string"""
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except (AttributeError, ValueError) as e:
            raise ValueError(f"Invalid ISO 8601 datetime: {s}") from e
        return cls(value=dt)

    @classmethod
    def now(cls) -> IsoDateTime:
        return cls(value=datetime.now(timezone.utc))

    def __str__(self) -> str:
        return self.value.isoformat()

    def is_before(self, other: IsoDateTime) -> bool:
        """Whether this instant is earlier than the other one"""
        return self.value < other.value

    def is_after(self, other: IsoDateTime) -> bool:
        """Whether this instant is later than the other one"""
        return self.value > other.value

    def plus(self, delta: timedelta) -> IsoDateTime:
        return IsoDateTime(value=self.value + delta)

    def minutes_until(self, other: IsoDateTime) -> int:
        """Whole minutes from this instant to the other one"""
        return int((other.value - self.value).total_seconds() // 60)

    def start_of_day(self) -> IsoDateTime:
        return IsoDateTime(
            value=self.value.replace(hour=0, minute=0, second=0, microsecond=0)
        )

    def to_epoch_seconds(self) -> int:
        return int(self.value.timestamp())
