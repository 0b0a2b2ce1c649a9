"""Error taxonomy for expression parsing, evaluation and location resolution."""


class PipelineError(Exception):
    """Base class for every failure of a conversion."""

    error_type = "pipeline_error"


class ParseError(PipelineError):
    """
    Raised when the input does not match the expression grammar.

    `offset` counts characters (not bytes) from the start of `text`.
    """

    error_type = "parse_error"

    def __init__(self, offset: int, expected: list[str], text: str = ""):
        self.offset = offset
        self.expected = list(expected)
        self.text = text
        super().__init__(self._describe())

    def _describe(self) -> str:
        leftover = self.text[self.offset :].strip()
        message = f"invalid syntax at offset {self.offset}"
        if self.expected:
            message += f" (expected {', '.join(self.expected)})"
        if leftover:
            message += f"; unsure how to interpret {leftover!r}"
        return message

    def render(self) -> str:
        """Return the input with a caret pointing at the error offset."""
        return f"{self.text}\n{' ' * self.offset}^"


class EvaluationError(PipelineError):
    """Raised when a parsed time specification cannot be turned into an instant."""

    error_type = "evaluation_error"


class InvalidDateError(EvaluationError):
    """Raised for a syntactically valid but calendrically impossible date."""

    error_type = "invalid_date"

    def __init__(self, day: int, month: int, year: int):
        self.day = day
        self.month = month
        self.year = year
        super().__init__(f"invalid date: day {day} of month {month} in {year}")


class ResolveError(PipelineError):
    """Raised when a location token cannot be resolved."""

    error_type = "resolve_error"


class UnknownLocationError(ResolveError):
    """Raised when a token matches no timezone, airport or place."""

    error_type = "unknown_location"

    def __init__(self, token: str, suggestions: list[str] | None = None):
        self.token = token
        self.suggestions = list(suggestions or [])
        self.unresolved = [token]
        message = f"unknown location '{token}'"
        if self.suggestions:
            message += f" (did you mean {', '.join(self.suggestions)}?)"
        super().__init__(message)


class GazetteerError(Exception):
    """Raised when the gazetteer data files are missing or malformed."""
