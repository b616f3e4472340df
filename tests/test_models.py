import pytest

from boatsetter_connector.exceptions import InvalidInputError
from boatsetter_connector.models import Boat, BoatAvailability, Credentials, TimeRange


class TestTimeRange:
    def test_valid(self):
        time_range = TimeRange("08:00", "10:30")

        assert (time_range.start, time_range.end) == ("08:00", "10:30")

    @pytest.mark.parametrize("start,end", [("8:00", "10:00"), ("08:00", "24:00"), ("", "10:00")])
    def test_bad_format(self, start, end):
        with pytest.raises(InvalidInputError):
            TimeRange(start, end)

    def test_end_must_follow_start(self):
        with pytest.raises(InvalidInputError) as excinfo:
            TimeRange("14:00", "10:00")
        assert excinfo.value.param == "end"


class TestBoatAvailability:
    def test_price_adjustment_bounds(self):
        BoatAvailability(is_available=True, price_adjustment=-100)
        BoatAvailability(is_available=True, price_adjustment=100)
        with pytest.raises(InvalidInputError):
            BoatAvailability(is_available=True, price_adjustment=101)

    def test_extras_only_apply_to_available_days(self):
        availability = BoatAvailability(
            is_available=False,
            unavailable_time_ranges=[TimeRange("08:00", "10:00")],
            price_adjustment=10,
        )

        assert availability.has_time_ranges is False
        assert availability.has_price_adjustment is False


def test_credentials_repr_hides_password():
    assert "hunter2" not in repr(Credentials("me@example.com", "hunter2"))


def test_boat_urls():
    boat = Boat(id="77", title="Skiff", url="/boats/77")

    assert boat.edit_url == "/boats/77/edit/overview"
    assert boat.calendar_url == "/boats/77/edit/calendar"
