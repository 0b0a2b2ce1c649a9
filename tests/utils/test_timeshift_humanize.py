"""Tests for time-of-day labels and relative wording."""

from datetime import datetime, timedelta, timezone

import pytest

from util.timeshift.humanize import relative_to_human, time_of_day

NOW = datetime(2021, 12, 9, 16, 33, 40, tzinfo=timezone.utc)


class TestTimeOfDay:
    """Hour labels."""

    @pytest.mark.parametrize(
        "hour, label",
        [
            (0, "night"),
            (4, "night"),
            (5, "early morning"),
            (6, "morning"),
            (8, "morning"),
            (9, "late morning"),
            (11, "late morning"),
            (12, "noon"),
            (13, "afternoon"),
            (16, "afternoon"),
            (17, "early evening"),
            (19, "evening"),
            (21, "late evening"),
            (22, "late evening"),
            (23, "night"),
        ],
    )
    def test_labels(self, hour, label):
        """Test every boundary of the labels."""
        assert time_of_day(datetime(2021, 12, 9, hour, 30)) == label


class TestRelativeToHuman:
    """Distance from now."""

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=0), "now"),
            (timedelta(seconds=59), "now"),
            (timedelta(seconds=-59), "now"),
            (timedelta(minutes=1), "in 1 minute"),
            (timedelta(hours=2, minutes=5), "in 2 hours 5 minutes"),
            (timedelta(hours=-3), "3 hours ago"),
            (timedelta(days=1, hours=3, minutes=20), "in 1 day 3 hours"),
            (-timedelta(days=2, minutes=7), "2 days 7 minutes ago"),
        ],
    )
    def test_wording(self, delta, expected):
        """Test the two largest units with direction."""
        assert relative_to_human(NOW + delta, NOW) == expected

    def test_across_zones(self):
        """Test that zones do not affect the distance."""
        later = (NOW + timedelta(hours=1)).astimezone(timezone(timedelta(hours=9)))
        assert relative_to_human(later, NOW) == "in 1 hour"
