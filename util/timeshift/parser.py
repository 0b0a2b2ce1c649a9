"""
Recursive descent parser for time and location expressions.

The grammar is a parsing expression grammar: alternatives are tried in order
and the first one that matches wins. Rule methods return a value on success
and None on failure; `_attempt` restores the position when a rule fails so
that the next alternative starts from the same place.

The parser remembers the furthest position at which any token failed to match
and what was expected there. That position is what `ParseError` reports.
"""

import logging
import re
from typing import Callable, Optional, TypeVar

from util.timeshift import grammar
from util.timeshift.errors import ParseError
from util.timeshift.models import (
    Absolute,
    ExplicitDate,
    InDays,
    LocationToken,
    Now,
    ParsedExpression,
    RelativeOffset,
    TimeOfDay,
    Today,
    TokenKind,
    Tomorrow,
    UnixEpoch,
    Yesterday,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOW = object()


class ExpressionParser:
    """Parses a single input string into a ParsedExpression."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self._is_unix = False
        self._fail_pos = -1
        self._expected: list[str] = []

    # ----- primitives -------------------------------------------------------

    def _fail(self, label: str) -> None:
        if self.pos > self._fail_pos:
            self._fail_pos = self.pos
            self._expected = [label]
        elif self.pos == self._fail_pos and label not in self._expected:
            self._expected.append(label)

    def _token(self, pattern: re.Pattern, label: str) -> Optional[re.Match]:
        match = pattern.match(self.text, self.pos)
        if match is None:
            self._fail(label)
            return None
        self.pos = match.end()
        return match

    def _ws(self) -> bool:
        return self._token(grammar.WHITESPACE, "whitespace") is not None

    def _skip_ws(self) -> None:
        match = grammar.WHITESPACE.match(self.text, self.pos)
        if match:
            self.pos = match.end()

    def _attempt(self, rule: Callable[[], Optional[T]]) -> Optional[T]:
        start = self.pos
        result = rule()
        if result is None:
            self.pos = start
        return result

    def _error(self) -> ParseError:
        if self._fail_pos >= self.pos:
            return ParseError(self._fail_pos, self._expected, self.text)
        return ParseError(self.pos, ["end of input"], self.text)

    # ----- entry point ------------------------------------------------------

    def parse(self) -> ParsedExpression:
        if not self.text.strip():
            raise ParseError(0, ["time expression"], self.text)

        self._skip_ws()
        time_spec = self._time_expr()
        if time_spec is None:
            raise self._error()

        self._is_unix = isinstance(time_spec, UnixEpoch)
        locations = self._locations()
        if locations is None:
            raise self._error()

        self._skip_ws()
        if self.pos != len(self.text):
            raise self._error()

        if self._is_unix and not locations:
            locations = [LocationToken(text="utc", kind=TokenKind.UTC)]

        parsed = ParsedExpression(time_spec=time_spec, locations=tuple(locations))
        logger.debug("Parsed %r into %r", self.text, parsed)
        return parsed

    # ----- time expressions -------------------------------------------------

    def _time_expr(self):
        for rule in (self._neg_rel_time, self._abs_time, self._rel_time, self._unix_time):
            result = self._attempt(rule)
            if result is not None:
                return result
        return None

    def _neg_rel_time(self) -> Optional[RelativeOffset]:
        seconds = self._rel_units()
        if seconds is None or not self._ws():
            return None
        if self._token(grammar.AGO, '"ago"') is None:
            return None
        return RelativeOffset(seconds=-seconds)

    def _rel_time(self) -> Optional[RelativeOffset]:
        if self._token(grammar.IN, '"in"') is None or not self._ws():
            return None
        seconds = self._rel_units()
        if seconds is None:
            return None
        return RelativeOffset(seconds=seconds)

    def _rel_units(self) -> Optional[int]:
        total = self._rel_unit()
        if total is None:
            return None
        while True:
            more = self._attempt(self._next_rel_unit)
            if more is None:
                return total
            total += more

    def _next_rel_unit(self) -> Optional[int]:
        joined = self._attempt(self._rel_joiner)
        if joined is None and not self._ws():
            return None
        return self._rel_unit()

    def _rel_joiner(self) -> Optional[bool]:
        self._skip_ws()
        if self._token(grammar.AND, '"and"') is None and self._token(grammar.COMMA, '","') is None:
            return None
        self._skip_ws()
        return True

    def _rel_unit(self) -> Optional[int]:
        amount = self._token(grammar.DIGITS, "number")
        if amount is None:
            return None
        self._skip_ws()
        unit = self._token(grammar.UNIT, "time unit")
        if unit is None:
            return None
        return int(amount.group()) * grammar.UNIT_SECONDS[unit.group("unit").lower()]

    def _unix_time(self) -> Optional[UnixEpoch]:
        match = self._token(grammar.UNIX, "unix timestamp")
        if match is None:
            return None
        return UnixEpoch(seconds=int(match.group("seconds")))

    def _abs_time(self):
        time_of_day = self._attempt(self._time)
        if time_of_day is not None:
            date = self._attempt(lambda: self._filler_then(grammar.ON, '"on"', self._date))
            return self._absolute(time_of_day, date)

        date = self._attempt(self._date)
        if date is None:
            return None
        time_of_day = self._attempt(lambda: self._filler_then(grammar.AT, '"at"', self._time))
        return self._absolute(time_of_day, date)

    def _filler_then(self, filler: re.Pattern, label: str, rule: Callable[[], Optional[T]]) -> Optional[T]:
        """Parse `ws [filler ws] rule` where the filler keyword is optional."""
        if not self._ws():
            return None
        self._attempt(lambda: self._token(filler, label) and self._ws() or None)
        return rule()

    @staticmethod
    def _absolute(time_of_day, date):
        if time_of_day is _NOW:
            if date is None:
                return Now()
            time_of_day = None
        return Absolute(time_of_day=time_of_day, date=date)

    # ----- times of day -----------------------------------------------------

    def _time(self):
        for rule in (self._time_special, self._time12, self._time24):
            result = self._attempt(rule)
            if result is not None:
                return result
        return None

    def _time_special(self):
        match = self._token(grammar.SPECIAL_TIME, '"midnight", "noon" or "now"')
        if match is None:
            return None
        word = match.group().lower()
        if word == "now":
            return _NOW
        return TimeOfDay(hour=0 if word == "midnight" else 12)

    def _minutes_seconds(self) -> Optional[tuple[int, int]]:
        if self._token(grammar.COLON, '":"') is None:
            return None
        minute = self._token(grammar.MINUTE, "minutes (00-59)")
        if minute is None:
            return None
        second = self._attempt(self._seconds)
        return int(minute.group()), second or 0

    def _seconds(self) -> Optional[int]:
        if self._token(grammar.COLON, '":"') is None:
            return None
        second = self._token(grammar.SECOND, "seconds (00-59)")
        return None if second is None else int(second.group())

    def _time12(self) -> Optional[TimeOfDay]:
        hour = self._token(grammar.HH12, "hour (1-12)")
        if hour is None:
            return None
        minute, second = self._attempt(self._minutes_seconds) or (0, 0)
        self._skip_ws()
        meridiem = self._token(grammar.MERIDIEM, '"am" or "pm"')
        if meridiem is None:
            return None
        return TimeOfDay(
            hour=int(hour.group()),
            minute=minute,
            second=second,
            meridiem="am" if meridiem.group("letter").lower() == "a" else "pm",
        )

    def _time24(self) -> Optional[TimeOfDay]:
        hour = self._token(grammar.HH24, "hour (0-23)")
        if hour is None:
            return None
        parts = self._minutes_seconds()
        if parts is None:
            return None
        return TimeOfDay(hour=int(hour.group()), minute=parts[0], second=parts[1])

    # ----- dates ------------------------------------------------------------

    def _date(self):
        for rule in (self._date_relative, self._english_date, self._numeric_date):
            result = self._attempt(rule)
            if result is not None:
                return result
        return None

    def _date_relative(self):
        if self._token(grammar.TODAY, '"today"') is not None:
            return Today()
        if self._token(grammar.TOMORROW, '"tomorrow"') is not None:
            return Tomorrow()
        if self._token(grammar.YESTERDAY, '"yesterday"') is not None:
            return Yesterday()
        return self._attempt(self._in_days)

    def _in_days(self):
        if self._token(grammar.IN, '"in"') is None or not self._ws():
            return None
        days = self._token(grammar.DIGITS, "number")
        if days is None:
            return None
        self._skip_ws()
        if self._token(grammar.DAYS, '"days"') is None:
            return None
        count = int(days.group())
        return Tomorrow() if count == 1 else InDays(days=count)

    def _english_date(self) -> Optional[ExplicitDate]:
        for rule in (self._month_first_date, self._day_first_date):
            result = self._attempt(rule)
            if result is not None:
                return result
        return None

    def _month_first_date(self) -> Optional[ExplicitDate]:
        month = self._month_name()
        if month is None or not self._ws():
            return None
        day = self._day_with_ordinal()
        if day is None:
            return None
        year = self._attempt(self._english_year)
        return ExplicitDate(day=day, month=month, year=year)

    def _day_first_date(self) -> Optional[ExplicitDate]:
        day = self._day_with_ordinal()
        if day is None or not self._ws():
            return None
        if self._token(grammar.OF, '"of"') is None or not self._ws():
            return None
        month = self._month_name()
        if month is None:
            return None
        year = self._attempt(self._english_year)
        return ExplicitDate(day=day, month=month, year=year)

    def _month_name(self) -> Optional[int]:
        match = self._token(grammar.MONTH_NAME, "month name")
        if match is None:
            return None
        return grammar.MONTHS[match.group("name").lower()]

    def _day_with_ordinal(self) -> Optional[int]:
        match = self._token(grammar.DAY, "day (1-31)")
        if match is None:
            return None
        day = int(match.group())
        suffix_start = self.pos
        suffix = grammar.ORDINAL.match(self.text, self.pos)
        if suffix is None:
            return day
        expected = grammar.ordinal_suffix(day)
        if suffix.group().lower() != expected:
            self.pos = suffix_start
            self._fail(f'"{expected}"')
            return None
        self.pos = suffix.end()
        return day

    def _english_year(self) -> Optional[int]:
        self._attempt(lambda: self._token(grammar.COMMA, '","'))
        if not self._ws():
            return None
        year = self._token(grammar.YEAR, "year")
        return None if year is None else int(year.group())

    def _numeric_date(self) -> Optional[ExplicitDate]:
        day = self._token(grammar.DAY, "day (1-31)")
        if day is None:
            return None
        separator = self._token(grammar.DATE_SEPARATOR, '"." or "-"')
        if separator is None:
            return None
        month = self._token(grammar.MONTH_NUMBER, "month (1-12)")
        if month is None:
            return None
        year = None
        if self.text.startswith(separator.group(), self.pos):
            start = self.pos
            self.pos += 1
            match = grammar.YEAR.match(self.text, self.pos)
            if match is not None:
                year = int(match.group())
                self.pos = match.end()
            else:
                self._fail("year")
                # only "25.12." may end on its separator
                if separator.group() != ".":
                    self.pos = start
        return ExplicitDate(day=int(day.group()), month=int(month.group()), year=year)

    # ----- locations --------------------------------------------------------

    def _locations(self) -> Optional[list[LocationToken]]:
        """Parse the optional location part; returns [] when there is none."""
        start = self.pos
        if self._ws() and self._token(grammar.IN, '"in"') is not None and self._ws():
            segments = self._segments()
            return None if segments is None else segments

        self.pos = start
        self._skip_ws()
        if grammar.ARROW.match(self.text, self.pos):
            segments = self._segments(self.pos)
            if segments is None:
                return None
            return [self._implicit_anchor()] + segments

        self._fail('"in"')
        self._fail('"->"')
        self.pos = start
        return []

    def _implicit_anchor(self) -> LocationToken:
        if self._is_unix:
            return LocationToken(text="utc", kind=TokenKind.UTC)
        return LocationToken(text="local", kind=TokenKind.LOCAL)

    def _segments(self, arrow_at: int | None = None) -> Optional[list[LocationToken]]:
        """
        Split the rest of the input on '->' into location tokens.

        When `arrow_at` is given the rest starts with an arrow, so there is no
        leading segment.
        """
        tokens = []
        cursor = self.pos
        if arrow_at is not None:
            cursor = arrow_at + 2
        while True:
            arrow = self.text.find("->", cursor)
            end = len(self.text) if arrow == -1 else arrow
            raw = self.text[cursor:end]
            value = raw.strip()
            if not value:
                self.pos = cursor + len(raw) - len(raw.lstrip())
                self._fail("location")
                return None
            offset = cursor + len(raw) - len(raw.lstrip())
            tokens.append(LocationToken(text=value, offset=offset))
            if arrow == -1:
                self.pos = len(self.text)
                return tokens
            cursor = arrow + 2


def parse(text: str) -> ParsedExpression:
    """
    Parse a time and location expression.

    Args:
        text: Input such as "5pm in vienna -> tokyo" or "in 2 hours".

    Returns:
        The parsed time specification and ordered location tokens.

    Raises:
        ParseError: If the input does not match the grammar.
    """
    return ExpressionParser(text).parse()
