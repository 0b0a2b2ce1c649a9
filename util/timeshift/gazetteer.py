"""Place and country tables used to resolve city names to timezones."""

import csv
import logging
import os
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError
from rapidfuzz import fuzz, process

from util.timeshift import zones
from util.timeshift.errors import GazetteerError
from util.timeshift.models import Country, Place

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
CITIES_FILE = "cities.tsv"
COUNTRIES_FILE = "countries.tsv"

SUGGESTION_CUTOFF = 75


def normalize_name(name: str) -> str:
    """Casefold a name and collapse runs of whitespace."""
    return " ".join(name.split()).casefold()


class Gazetteer:
    """
    Read-only index over places and countries.

    Places are kept in table order; lookups never reorder them.
    """

    def __init__(self, places: Iterable[Place], countries: Iterable[Country]):
        self._places = tuple(places)
        self._countries = {country.code.upper(): country for country in countries}
        self._countries_by_name = {
            normalize_name(country.name): country for country in self._countries.values()
        }
        self._by_name: dict[str, list[Place]] = {}
        for place in self._places:
            self._by_name.setdefault(normalize_name(place.name), []).append(place)

    def __len__(self) -> int:
        return len(self._places)

    @property
    def places(self) -> tuple[Place, ...]:
        return self._places

    def lookup_by_name(self, name: str) -> list[Place]:
        """Return all places with the given name, case-insensitively."""
        return list(self._by_name.get(normalize_name(name), ()))

    def lookup_country(self, code: str) -> Country | None:
        return self._countries.get(code.strip().upper())

    def lookup_country_by_name(self, name: str) -> Country | None:
        return self._countries_by_name.get(normalize_name(name))

    def suggest(self, name: str, limit: int = 3) -> list[str]:
        """
        Return place names that are close to the given name.

        Args:
            name: The name that failed to resolve.
            limit: Maximum number of suggestions.

        Returns:
            Distinct place names, best match first.
        """
        query = normalize_name(name)
        if not query or not self._by_name:
            return []
        matches = process.extract(
            query,
            list(self._by_name),
            scorer=fuzz.ratio,
            limit=limit,
            score_cutoff=SUGGESTION_CUTOFF,
        )
        return [self._by_name[key][0].name for key, _score, _index in matches]

    @classmethod
    def from_directory(cls, path: str | os.PathLike) -> "Gazetteer":
        """
        Load the gazetteer from a directory holding cities.tsv and countries.tsv.

        Raises:
            GazetteerError: If a file is missing or a row is malformed.
        """
        directory = Path(path)
        places = [_parse_place(row, line) for line, row in _read_rows(directory / CITIES_FILE)]
        countries = [
            _parse_country(row, line) for line, row in _read_rows(directory / COUNTRIES_FILE)
        ]
        gazetteer = cls(places, countries)
        _check_references(gazetteer)
        logger.info(
            "Loaded gazetteer from %s: %d places, %d countries",
            directory,
            len(gazetteer),
            len(countries),
        )
        return gazetteer


def _read_rows(path: Path):
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            for line, row in enumerate(csv.reader(handle, delimiter="\t"), start=1):
                if not row or row[0].startswith("#"):
                    continue
                yield f"{path.name}:{line}", row
    except (OSError, UnicodeDecodeError) as e:
        raise GazetteerError(f"Could not read gazetteer file {path}: {e}") from e


def _check_references(gazetteer: Gazetteer):
    known_zones = set(zones.available_zones())
    for place in gazetteer.places:
        if gazetteer.lookup_country(place.country_code) is None:
            raise GazetteerError(f"{place.name}: unknown country code {place.country_code!r}")
        if place.timezone_id not in known_zones:
            raise GazetteerError(f"{place.name}: unknown timezone {place.timezone_id!r}")


def _parse_place(row: list[str], line: str) -> Place:
    if len(row) != 5:
        raise GazetteerError(f"{line}: expected 5 columns, got {len(row)}")
    name, admin_code, country_code, timezone_id, population = row
    try:
        return Place(
            name=name,
            admin_code=admin_code or None,
            country_code=country_code,
            timezone_id=timezone_id,
            population=int(population or 0),
        )
    except (ValueError, ValidationError) as e:
        raise GazetteerError(f"{line}: invalid place row: {e}") from e


def _parse_country(row: list[str], line: str) -> Country:
    if len(row) != 2:
        raise GazetteerError(f"{line}: expected 2 columns, got {len(row)}")
    return Country(code=row[0], name=row[1])


def gazetteer_dir() -> Path:
    """Directory configured through GAZETTEER_DIR, or the bundled data."""
    configured = os.getenv("GAZETTEER_DIR")
    return Path(configured) if configured else DATA_DIR


_gazetteer = None


def get_gazetteer() -> Gazetteer:
    """
    Get the process-wide gazetteer (lazy initialization).

    Returns:
        The Gazetteer loaded from gazetteer_dir().
    """
    global _gazetteer
    if _gazetteer is None:
        _gazetteer = Gazetteer.from_directory(gazetteer_dir())
    return _gazetteer


def _clear_gazetteer():
    """Drop the cached gazetteer (used by tests)."""
    global _gazetteer
    _gazetteer = None


__all__ = [
    "Gazetteer",
    "gazetteer_dir",
    "get_gazetteer",
    "normalize_name",
]
