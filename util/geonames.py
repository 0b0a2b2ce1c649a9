"""Builds the gazetteer files from the GeoNames cities and country dumps.

Usage:
    python -m util.geonames [output_dir]
"""

import csv
import io
import logging
import os
import sys
import zipfile
from pathlib import Path
from typing import Iterable, NamedTuple

import requests

logger = logging.getLogger(__name__)

GEONAMES_URL = os.environ.get("GEONAMES_URL", "https://download.geonames.org/export/dump")
CITIES_ARCHIVE = "cities15000.zip"
CITIES_MEMBER = "cities15000.txt"
COUNTRY_INFO = "countryInfo.txt"

# column positions in the GeoNames "geoname" table
ASCII_NAME = 2
FEATURE_CODE = 7
COUNTRY_CODE = 8
ADMIN1_CODE = 10
POPULATION = 14
TIMEZONE = 17

CAPITAL_FEATURE = "PPLC"


class GeonamesError(Exception):
    """Raised when the GeoNames dumps cannot be downloaded or read."""


class CityRecord(NamedTuple):
    name: str
    admin_code: str
    country_code: str
    timezone_id: str
    population: int
    is_capital: bool


def _download(filename: str) -> bytes:
    url = f"{GEONAMES_URL}/{filename}"
    try:
        response = requests.get(url, timeout=120)
        response.raise_for_status()
        return response.content
    except requests.RequestException as e:
        raise GeonamesError(f"Failed to download {url}: {e}") from e


def fetch_cities() -> str:
    """Download the cities15000 dump and return the text of the table."""
    content = _download(CITIES_ARCHIVE)
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            return archive.read(CITIES_MEMBER).decode("utf-8")
    except (zipfile.BadZipFile, KeyError) as e:
        raise GeonamesError(f"Invalid {CITIES_ARCHIVE} archive: {e}") from e


def fetch_countries() -> str:
    return _download(COUNTRY_INFO).decode("utf-8")


def parse_cities(text: str) -> list[CityRecord]:
    """
    Parse the cities table, keeping only what the resolver needs.

    Names containing "(" are dropped, as are admin codes with digits in
    them since those are meaningless to people typing a location.
    """
    records = []
    for line in text.splitlines():
        if not line or line.startswith("#"):
            continue
        pieces = line.split("\t")
        if len(pieces) <= TIMEZONE:
            logger.debug("Skipping short row: %r", line[:80])
            continue
        name = pieces[ASCII_NAME]
        if "(" in name:
            continue
        admin_code = pieces[ADMIN1_CODE]
        if any(char.isdigit() for char in admin_code):
            admin_code = ""
        try:
            population = int(pieces[POPULATION] or 0)
        except ValueError as e:
            raise GeonamesError(f"Invalid population for {name}: {pieces[POPULATION]!r}") from e
        records.append(
            CityRecord(
                name=name,
                admin_code=admin_code,
                country_code=pieces[COUNTRY_CODE],
                timezone_id=pieces[TIMEZONE],
                population=population,
                is_capital=pieces[FEATURE_CODE] == CAPITAL_FEATURE,
            )
        )

    # capitals first, then the US, then the most populous
    records.sort(
        key=lambda r: (
            r.name.lower(),
            not r.is_capital,
            r.country_code != "US",
            -r.population,
        )
    )
    return records


def parse_countries(text: str) -> list[tuple[str, str]]:
    """Parse countryInfo.txt into sorted (code, name) pairs."""
    countries = {}
    for line in text.splitlines():
        if not line or line.startswith("#"):
            continue
        pieces = line.split("\t")
        if len(pieces) < 5:
            continue
        countries[pieces[0]] = pieces[4]
    return sorted(countries.items())


def _write_tsv(path: Path, header: list[str], rows: Iterable[Iterable]):
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write("# " + "\t".join(header) + "\n")
        writer = csv.writer(handle, delimiter="\t", lineterminator="\n")
        writer.writerows(rows)


def write_gazetteer(output_dir: str | os.PathLike, cities: list[CityRecord], countries: list[tuple[str, str]]):
    """Write cities.tsv and countries.tsv in the format the gazetteer loads."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    _write_tsv(
        output_dir / "cities.tsv",
        ["name", "admin_code", "country_code", "timezone_id", "population"],
        (
            (r.name, r.admin_code, r.country_code, r.timezone_id, r.population)
            for r in cities
        ),
    )
    _write_tsv(output_dir / "countries.tsv", ["code", "name"], countries)
    logger.info(
        "Wrote %d places and %d countries to %s", len(cities), len(countries), output_dir
    )


def build_gazetteer(output_dir: str | os.PathLike):
    """Download the GeoNames dumps and write the gazetteer files."""
    cities = parse_cities(fetch_cities())
    countries = parse_countries(fetch_countries())
    write_gazetteer(output_dir, cities, countries)


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    output_dir = argv[0] if argv else Path(__file__).parent / "timeshift" / "data"
    build_gazetteer(output_dir)


if __name__ == "__main__":
    main()
