from services.booking.applications.query_bookings import BookingQueryService
from services.booking.applications.update_booking_status import BookingStatusService
from services.booking.domain.value_object import BookingId
from services.payment.applications.booking_confirmation import confirm_paid_booking
from services.payment.domain.entity import Payment
from services.payment.domain.factory import PaymentDetails, PaymentFactory
from services.payment.domain.repository import PaymentRepository
from services.shared.utils.principal import Principal


class RecordPaymentService:
    """Store a payment reported by the client and confirm its booking"""

    def __init__(
        self,
        repository: PaymentRepository,
        factory: PaymentFactory,
        booking_query_service: BookingQueryService,
        booking_status_service: BookingStatusService,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._booking_query_service = booking_query_service
        self._booking_status_service = booking_status_service

    def record(self, requester: Principal, details: PaymentDetails) -> Payment:
        # owner or admin; raises 404/403 before anything is stored
        self._booking_query_service.get(BookingId(value=details["booking_id"]), requester)

        payment = self._factory.create(requester.user_id, details)
        self._repository.save(payment)
        if payment.is_succeeded:
            confirm_paid_booking(self._booking_status_service, payment)
        return payment
