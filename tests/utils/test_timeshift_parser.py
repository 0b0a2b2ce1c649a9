"""Tests for the time expression parser."""

import pytest

from util.timeshift.errors import ParseError
from util.timeshift.models import (
    Absolute,
    ExplicitDate,
    InDays,
    Now,
    RelativeOffset,
    TimeOfDay,
    TokenKind,
    Tomorrow,
    UnixEpoch,
    Yesterday,
)
from util.timeshift.parser import parse


def texts(parsed):
    return [token.text for token in parsed.locations]


class TestTimesOfDay:
    """Clock times, 12 and 24 hour."""

    @pytest.mark.parametrize(
        "text, hour24, minute, second",
        [
            ("5pm", 17, 0, 0),
            ("5 pm", 17, 0, 0),
            ("5PM", 17, 0, 0),
            ("5 p.m.", 17, 0, 0),
            ("9:30am", 9, 30, 0),
            ("9:30:15 pm", 21, 30, 15),
            ("12am", 0, 0, 0),
            ("12pm", 12, 0, 0),
            ("17:30", 17, 30, 0),
            ("00:05:09", 0, 5, 9),
            ("midnight", 0, 0, 0),
            ("noon", 12, 0, 0),
        ],
    )
    def test_time_of_day(self, text, hour24, minute, second):
        """Test that clock times parse into the expected wall time."""
        parsed = parse(text)

        assert isinstance(parsed.time_spec, Absolute)
        assert parsed.time_spec.date is None
        time_of_day = parsed.time_spec.time_of_day
        assert (time_of_day.hour24, time_of_day.minute, time_of_day.second) == (
            hour24,
            minute,
            second,
        )
        assert parsed.locations == ()

    def test_meridiem_kept_as_written(self):
        """Test that 12 hour input keeps its hour and meridiem."""
        parsed = parse("5pm")
        assert parsed.time_spec.time_of_day == TimeOfDay(hour=5, meridiem="pm")

    @pytest.mark.parametrize("text", ["17", "25:00", "13pm", "5:60pm", "12:3"])
    def test_invalid_times(self, text):
        """Test that bare 24h hours and out of range values are rejected."""
        with pytest.raises(ParseError):
            parse(text)


class TestDates:
    """Relative and explicit dates, with and without a time."""

    def test_relative_day_words(self):
        """Test today, tomorrow and yesterday with their abbreviations."""
        assert parse("tomorrow").time_spec.date == Tomorrow()
        assert parse("tmrw").time_spec.date == Tomorrow()
        assert parse("yd").time_spec.date == Yesterday()
        assert parse("today").time_spec.time_of_day is None

    def test_in_days(self):
        """Test that 'in N days' is a date and 'in 1 day' means tomorrow."""
        assert parse("in 3 days").time_spec == Absolute(date=InDays(days=3))
        assert parse("in 1 day").time_spec == Absolute(date=Tomorrow())

    @pytest.mark.parametrize(
        "text",
        [
            "dec 25 2021",
            "december 25th, 2021",
            "Dec. 25, 2021",
            "25th of december 2021",
            "25 of dec, 2021",
            "25.12.2021",
            "25-12-2021",
        ],
    )
    def test_explicit_date_forms(self, text):
        """Test the English and numeric date spellings."""
        parsed = parse(text)
        assert parsed.time_spec.date == ExplicitDate(day=25, month=12, year=2021)

    def test_date_without_year(self):
        """Test that the year stays empty when not written."""
        assert parse("25.12.").time_spec.date == ExplicitDate(day=25, month=12)
        assert parse("march 3rd").time_spec.date == ExplicitDate(day=3, month=3)

    @pytest.mark.parametrize("text", ["5-3-", "25-12-"])
    def test_dash_date_cannot_end_on_separator(self, text):
        """Test that only the dotted form may end on a bare separator."""
        with pytest.raises(ParseError):
            parse(text)

    def test_impossible_date_still_parses(self):
        """Test that calendar validation is left to the evaluator."""
        assert parse("30.02.2021").time_spec.date == ExplicitDate(day=30, month=2, year=2021)

    @pytest.mark.parametrize("text", ["1th of january", "2st of may", "jan 3th", "11st of june"])
    def test_ordinal_must_match_day(self, text):
        """Test that the ordinal suffix has to agree with the day number."""
        with pytest.raises(ParseError):
            parse(text)

    @pytest.mark.parametrize(
        "text",
        [
            "5pm tomorrow",
            "5pm on tomorrow",
            "tomorrow 5pm",
            "tomorrow at 5pm",
        ],
    )
    def test_time_and_date_in_either_order(self, text):
        """Test that time and date combine in both orders with optional fillers."""
        spec = parse(text).time_spec
        assert spec == Absolute(time_of_day=TimeOfDay(hour=5, meridiem="pm"), date=Tomorrow())

    def test_now_with_date_keeps_reference_time(self):
        """Test that 'now' next to a date leaves the time of day unset."""
        assert parse("tomorrow at now").time_spec == Absolute(date=Tomorrow())


class TestRelativeAndUnix:
    """Offsets from now and unix timestamps."""

    def test_now(self):
        """Test that 'now' parses to Now and is relative."""
        parsed = parse("now")
        assert parsed.time_spec == Now()
        assert parsed.is_relative

    @pytest.mark.parametrize(
        "text, seconds",
        [
            ("in 2 hours", 7200),
            ("in 1 hour and 30 minutes", 5400),
            ("in 1h, 30m", 5400),
            ("in 1h 30m 10s", 5410),
            ("in 90 mins", 5400),
            ("2 hours ago", -7200),
            ("10 minutes and 5 seconds ago", -605),
        ],
    )
    def test_offsets(self, text, seconds):
        """Test the sum of relative units, negated for 'ago'."""
        parsed = parse(text)
        assert parsed.time_spec == RelativeOffset(seconds=seconds)
        assert parsed.is_relative

    def test_unix_gets_utc_anchor(self):
        """Test that a bare unix timestamp is anchored in UTC."""
        parsed = parse("unix 1639067620")

        assert parsed.time_spec == UnixEpoch(seconds=1639067620)
        assert len(parsed.locations) == 1
        assert parsed.anchor.kind == TokenKind.UTC
        assert not parsed.is_relative

    def test_unix_with_colon(self):
        """Test the 'unix:<seconds>' spelling."""
        assert parse("unix:42").time_spec == UnixEpoch(seconds=42)


class TestLocations:
    """Location segments after 'in' and '->'."""

    def test_single_location(self):
        """Test a time with one location."""
        parsed = parse("5pm in vienna")
        assert texts(parsed) == ["vienna"]
        assert parsed.anchor.kind == TokenKind.TEXT

    def test_chain_with_offsets(self):
        """Test that segments keep their text and character offsets."""
        parsed = parse("5pm in vienna -> tokyo")

        assert texts(parsed) == ["vienna", "tokyo"]
        assert [token.offset for token in parsed.locations] == [7, 17]
        assert [token.text for token in parsed.targets] == ["tokyo"]

    def test_multi_word_locations(self):
        """Test that locations may contain spaces and commas."""
        parsed = parse("now in vienna, va -> new york city")
        assert texts(parsed) == ["vienna, va", "new york city"]

    def test_arrow_without_in_is_anchored_locally(self):
        """Test that a leading arrow adds the local marker as the anchor."""
        parsed = parse("5pm -> sfo")

        assert parsed.anchor.kind == TokenKind.LOCAL
        assert texts(parsed) == ["local", "sfo"]

    def test_unix_arrow_is_anchored_in_utc(self):
        """Test that a unix timestamp followed by an arrow starts in UTC."""
        parsed = parse("unix 1639067620 -> tokyo")
        assert [token.kind for token in parsed.locations] == [TokenKind.UTC, TokenKind.TEXT]

    def test_relative_then_location(self):
        """Test that 'in' after an offset starts the location part."""
        parsed = parse("in 2 hours in tokyo")

        assert parsed.time_spec == RelativeOffset(seconds=7200)
        assert texts(parsed) == ["tokyo"]

    def test_surrounding_whitespace(self):
        """Test that leading and trailing whitespace is ignored."""
        assert texts(parse("   5pm   in   vienna   ")) == ["vienna"]

    @pytest.mark.parametrize("text", ["5pm in vienna ->", "5pm in vienna -> -> tokyo", "5pm in "])
    def test_empty_segments_rejected(self, text):
        """Test that every arrow needs a location on both sides."""
        with pytest.raises(ParseError):
            parse(text)


class TestParseErrors:
    """Error offsets and messages."""

    def test_empty_input(self):
        """Test that empty input asks for a time expression."""
        with pytest.raises(ParseError) as exc_info:
            parse("   ")

        assert exc_info.value.offset == 0
        assert exc_info.value.expected == ["time expression"]

    def test_trailing_garbage(self):
        """Test that the furthest failure position is reported."""
        with pytest.raises(ParseError) as exc_info:
            parse("5pm foo")

        error = exc_info.value
        assert error.offset == 4
        assert '"in"' in error.expected
        assert '"->"' in error.expected
        assert "unsure how to interpret 'foo'" in str(error)
        assert error.render() == "5pm foo\n    ^"

    def test_nonsense(self):
        """Test that unparseable input raises at the start."""
        with pytest.raises(ParseError) as exc_info:
            parse("blah")
        assert exc_info.value.offset == 0
        assert exc_info.value.error_type == "parse_error"

    def test_offsets_count_characters(self):
        """Test that offsets after non-ASCII text are character positions."""
        with pytest.raises(ParseError) as exc_info:
            parse("5pm in zürich -> ")
        assert exc_info.value.offset == 17
        assert exc_info.value.expected == ["location"]

        parsed = parse("5pm in zürich -> tokyo")
        assert [token.offset for token in parsed.locations] == [7, 17]
