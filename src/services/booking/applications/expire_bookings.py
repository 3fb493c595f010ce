from dataclasses import dataclass, field

from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    OptimisticLockException,
)


@dataclass
class ExpiryResult:
    expired: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def summary(self) -> dict:
        return {"expired": len(self.expired), "skipped": len(self.skipped)}


class ExpireBookingsService:
    """Fail PENDING bookings whose seat hold has run out"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def expire_stale(self, now: IsoDateTime | None = None) -> ExpiryResult:
        """Bookings paid or cancelled in the meantime are skipped"""
        now = now or IsoDateTime.now()
        result = ExpiryResult()
        for booking in self._repository.find_expired_holds(now):
            booking_id = str(booking.id)
            if not booking.is_hold_expired(now):
                result.skipped.append(booking_id)
                continue
            try:
                booking.fail()
                self._repository.release(booking, expected_status=BookingStatus.PENDING)
            except (OptimisticLockException, BusinessRuleViolationException):
                result.skipped.append(booking_id)
                continue
            result.expired.append(booking_id)
        return result
