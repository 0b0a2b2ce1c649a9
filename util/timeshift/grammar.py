"""
Token tables and patterns for the time expression grammar.

Every pattern is anchored by `re.match` at the parser position and matched
case-insensitively. Word-like tokens end in a boundary lookahead so that a
keyword never matches a prefix of a longer word, and numeric tokens refuse
to be followed by another digit.
"""

import re

_FLAGS = re.IGNORECASE
_WORD_END = r"(?![a-z0-9])"
_NUM_END = r"(?!\d)"

MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

UNIT_SECONDS = {
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
}

TOMORROW_WORDS = ("tomorrow", "tmrw", "tmw")
YESTERDAY_WORDS = ("yesterday", "yd")
SPECIAL_TIMES = ("midnight", "noon", "now")


def _alternation(words) -> str:
    # longest first so that alternation never settles on a prefix
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


def keyword(*words: str) -> re.Pattern:
    """Compile a whole-word, case-insensitive pattern for the given words."""
    return re.compile(rf"(?:{_alternation(words)}){_WORD_END}", _FLAGS)


WHITESPACE = re.compile(r"\s+")
ARROW = re.compile(r"->")
COMMA = re.compile(r",")
COLON = re.compile(r":")

DIGITS = re.compile(rf"\d+{_NUM_END}")
HH12 = re.compile(rf"(?:1[0-2]|0?[1-9]){_NUM_END}")
HH24 = re.compile(rf"(?:2[0-3]|[01]?\d){_NUM_END}")
MINUTE = re.compile(rf"[0-5]\d{_NUM_END}")
SECOND = MINUTE
MERIDIEM = re.compile(rf"(?P<letter>[ap])\.?m\.?{_WORD_END}", _FLAGS)

DAY = re.compile(rf"(?:3[01]|[12]\d|0?[1-9]){_NUM_END}")
MONTH_NUMBER = re.compile(rf"(?:1[0-2]|0?[1-9]){_NUM_END}")
YEAR = re.compile(rf"\d{{4}}{_NUM_END}")
ORDINAL = re.compile(rf"(?:st|nd|rd|th){_WORD_END}", _FLAGS)
MONTH_NAME = re.compile(
    rf"(?P<name>{_alternation(MONTHS)})\.?{_WORD_END}", _FLAGS
)
DATE_SEPARATOR = re.compile(r"[.-]")

UNIT = re.compile(rf"(?P<unit>{_alternation(UNIT_SECONDS)}){_WORD_END}", _FLAGS)
UNIX = re.compile(r"unix\s*:?\s*(?P<seconds>\d+)(?!\d)", _FLAGS)

IN = keyword("in")
ON = keyword("on")
AT = keyword("at")
OF = keyword("of")
AND = keyword("and")
AGO = keyword("ago")
TODAY = keyword("today")
TOMORROW = keyword(*TOMORROW_WORDS)
YESTERDAY = keyword(*YESTERDAY_WORDS)
DAYS = keyword("day", "days")
SPECIAL_TIME = keyword(*SPECIAL_TIMES)


def ordinal_suffix(day: int) -> str:
    """Return the English ordinal suffix for a day of the month."""
    if 10 <= day % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
