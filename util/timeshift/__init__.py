"""Time expression parsing, evaluation and timezone resolution."""

from util.timeshift.errors import (
    EvaluationError,
    GazetteerError,
    InvalidDateError,
    ParseError,
    PipelineError,
    ResolveError,
    UnknownLocationError,
)
from util.timeshift.evaluator import evaluate
from util.timeshift.gazetteer import Gazetteer, get_gazetteer
from util.timeshift.parser import parse
from util.timeshift.pipeline import convert
from util.timeshift.resolver import find_location, rank_candidates, resolve

__all__ = [
    "EvaluationError",
    "Gazetteer",
    "GazetteerError",
    "InvalidDateError",
    "ParseError",
    "PipelineError",
    "ResolveError",
    "UnknownLocationError",
    "convert",
    "evaluate",
    "find_location",
    "get_gazetteer",
    "parse",
    "rank_candidates",
    "resolve",
]
