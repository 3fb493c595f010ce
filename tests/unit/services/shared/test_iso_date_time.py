from datetime import datetime, timedelta, timezone

import pytest

from services.shared.domain import IsoDateTime


class TestIsoDateTime:
    def test_z_suffix_is_parsed_as_utc(self):
        value = IsoDateTime.from_string("2026-12-01T08:00:00Z")

        assert str(value) == "2026-12-01T08:00:00+00:00"

    def test_offsets_are_normalised_to_utc(self):
        value = IsoDateTime.from_string("2026-12-01T16:00:00+08:00")

        assert value.value == datetime(2026, 12, 1, 8, 0, tzinfo=timezone.utc)

    def test_naive_input_is_treated_as_utc(self):
        value = IsoDateTime(value=datetime(2026, 1, 1, 12, 30))

        assert value.value.tzinfo == timezone.utc

    def test_invalid_string_is_rejected(self):
        with pytest.raises(ValueError, match="Invalid ISO 8601"):
            IsoDateTime.from_string("next tuesday")

    def test_string_form_sorts_in_time_order(self):
        earlier = IsoDateTime.from_string("2026-12-01T08:00:00Z")
        later = earlier.plus(timedelta(hours=3))

        assert str(earlier) < str(later)
        assert earlier.is_before(later)
        assert later.is_after(earlier)

    def test_minutes_until(self):
        departure = IsoDateTime.from_string("2026-12-01T08:00:00Z")
        arrival = IsoDateTime.from_string("2026-12-01T09:20:00Z")

        assert departure.minutes_until(arrival) == 80

    def test_to_epoch_seconds(self):
        assert IsoDateTime.from_string("1970-01-01T00:01:00Z").to_epoch_seconds() == 60
