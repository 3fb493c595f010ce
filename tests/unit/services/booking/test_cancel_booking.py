from unittest.mock import MagicMock

import pytest

from services.booking.applications.cancel_booking import CancelBookingService
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.shared.domain.exception import (
    AuthorizationException,
    ResourceNotFoundException,
)

BOOKING_ID = BookingId(value="BK-TEST00000001")


@pytest.fixture
def repository():
    return MagicMock()


@pytest.fixture
def service(repository):
    return CancelBookingService(repository=repository)


class TestCancel:
    def test_owner_cancels_and_releases_seats(
        self, service, repository, create_booking, owner
    ):
        repository.find_by_id.return_value = create_booking()

        booking = service.cancel(BOOKING_ID, owner, reason="Change of plans")

        assert booking.status == BookingStatus.CANCELLED
        repository.release.assert_called_once_with(
            booking, expected_status=BookingStatus.PENDING
        )

    def test_admin_cancels_confirmed_booking(
        self, service, repository, create_booking, admin
    ):
        repository.find_by_id.return_value = create_booking(
            status=BookingStatus.CONFIRMED
        )

        service.cancel(BOOKING_ID, admin)

        assert (
            repository.release.call_args.kwargs["expected_status"]
            == BookingStatus.CONFIRMED
        )

    def test_stranger_is_forbidden(self, service, repository, create_booking, stranger):
        repository.find_by_id.return_value = create_booking()

        with pytest.raises(AuthorizationException):
            service.cancel(BOOKING_ID, stranger)
        repository.release.assert_not_called()

    def test_already_cancelled_is_not_released_twice(
        self, service, repository, create_booking, owner
    ):
        repository.find_by_id.return_value = create_booking(
            status=BookingStatus.CANCELLED
        )

        booking = service.cancel(BOOKING_ID, owner)

        assert booking.status == BookingStatus.CANCELLED
        repository.release.assert_not_called()

    def test_unknown_booking(self, service, repository, owner):
        repository.find_by_id.return_value = None

        with pytest.raises(ResourceNotFoundException):
            service.cancel(BOOKING_ID, owner)
