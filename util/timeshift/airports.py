"""IATA airport codes for the cities people most often ask about."""

from typing import NamedTuple


class Airport(NamedTuple):
    city: str
    country_code: str
    timezone_id: str


AIRPORTS = {
    "AMS": Airport("Amsterdam", "NL", "Europe/Amsterdam"),
    "ARN": Airport("Stockholm", "SE", "Europe/Stockholm"),
    "ATH": Airport("Athens", "GR", "Europe/Athens"),
    "ATL": Airport("Atlanta", "US", "America/New_York"),
    "AUS": Airport("Austin", "US", "America/Chicago"),
    "BCN": Airport("Barcelona", "ES", "Europe/Madrid"),
    "BER": Airport("Berlin", "DE", "Europe/Berlin"),
    "BKK": Airport("Bangkok", "TH", "Asia/Bangkok"),
    "BNE": Airport("Brisbane", "AU", "Australia/Brisbane"),
    "BOG": Airport("Bogota", "CO", "America/Bogota"),
    "BOM": Airport("Mumbai", "IN", "Asia/Kolkata"),
    "BOS": Airport("Boston", "US", "America/New_York"),
    "BRU": Airport("Brussels", "BE", "Europe/Brussels"),
    "BUD": Airport("Budapest", "HU", "Europe/Budapest"),
    "CAI": Airport("Cairo", "EG", "Africa/Cairo"),
    "CDG": Airport("Paris", "FR", "Europe/Paris"),
    "CPH": Airport("Copenhagen", "DK", "Europe/Copenhagen"),
    "CPT": Airport("Cape Town", "ZA", "Africa/Johannesburg"),
    "DEL": Airport("New Delhi", "IN", "Asia/Kolkata"),
    "DEN": Airport("Denver", "US", "America/Denver"),
    "DFW": Airport("Dallas", "US", "America/Chicago"),
    "DOH": Airport("Doha", "QA", "Asia/Qatar"),
    "DTW": Airport("Detroit", "US", "America/Detroit"),
    "DUB": Airport("Dublin", "IE", "Europe/Dublin"),
    "DXB": Airport("Dubai", "AE", "Asia/Dubai"),
    "EDI": Airport("Edinburgh", "GB", "Europe/London"),
    "EWR": Airport("Newark", "US", "America/New_York"),
    "EZE": Airport("Buenos Aires", "AR", "America/Argentina/Buenos_Aires"),
    "FCO": Airport("Rome", "IT", "Europe/Rome"),
    "FRA": Airport("Frankfurt am Main", "DE", "Europe/Berlin"),
    "GIG": Airport("Rio de Janeiro", "BR", "America/Sao_Paulo"),
    "GRU": Airport("Sao Paulo", "BR", "America/Sao_Paulo"),
    "GVA": Airport("Geneva", "CH", "Europe/Zurich"),
    "HAM": Airport("Hamburg", "DE", "Europe/Berlin"),
    "HEL": Airport("Helsinki", "FI", "Europe/Helsinki"),
    "HKG": Airport("Hong Kong", "HK", "Asia/Hong_Kong"),
    "HND": Airport("Tokyo", "JP", "Asia/Tokyo"),
    "HNL": Airport("Honolulu", "US", "Pacific/Honolulu"),
    "IAD": Airport("Washington", "US", "America/New_York"),
    "IAH": Airport("Houston", "US", "America/Chicago"),
    "ICN": Airport("Seoul", "KR", "Asia/Seoul"),
    "INN": Airport("Innsbruck", "AT", "Europe/Vienna"),
    "IST": Airport("Istanbul", "TR", "Europe/Istanbul"),
    "JFK": Airport("New York City", "US", "America/New_York"),
    "JNB": Airport("Johannesburg", "ZA", "Africa/Johannesburg"),
    "KIX": Airport("Osaka", "JP", "Asia/Tokyo"),
    "KUL": Airport("Kuala Lumpur", "MY", "Asia/Kuala_Lumpur"),
    "LAS": Airport("Las Vegas", "US", "America/Los_Angeles"),
    "LAX": Airport("Los Angeles", "US", "America/Los_Angeles"),
    "LGA": Airport("New York City", "US", "America/New_York"),
    "LGW": Airport("London", "GB", "Europe/London"),
    "LHR": Airport("London", "GB", "Europe/London"),
    "LIM": Airport("Lima", "PE", "America/Lima"),
    "LIS": Airport("Lisbon", "PT", "Europe/Lisbon"),
    "MAD": Airport("Madrid", "ES", "Europe/Madrid"),
    "MAN": Airport("Manchester", "GB", "Europe/London"),
    "MEL": Airport("Melbourne", "AU", "Australia/Melbourne"),
    "MEX": Airport("Mexico City", "MX", "America/Mexico_City"),
    "MIA": Airport("Miami", "US", "America/New_York"),
    "MNL": Airport("Manila", "PH", "Asia/Manila"),
    "MSP": Airport("Minneapolis", "US", "America/Chicago"),
    "MUC": Airport("Munich", "DE", "Europe/Berlin"),
    "MXP": Airport("Milan", "IT", "Europe/Rome"),
    "NBO": Airport("Nairobi", "KE", "Africa/Nairobi"),
    "NRT": Airport("Tokyo", "JP", "Asia/Tokyo"),
    "ORD": Airport("Chicago", "US", "America/Chicago"),
    "ORY": Airport("Paris", "FR", "Europe/Paris"),
    "OSL": Airport("Oslo", "NO", "Europe/Oslo"),
    "PEK": Airport("Beijing", "CN", "Asia/Shanghai"),
    "PER": Airport("Perth", "AU", "Australia/Perth"),
    "PHL": Airport("Philadelphia", "US", "America/New_York"),
    "PHX": Airport("Phoenix", "US", "America/Phoenix"),
    "PRG": Airport("Prague", "CZ", "Europe/Prague"),
    "PVG": Airport("Shanghai", "CN", "Asia/Shanghai"),
    "SAN": Airport("San Diego", "US", "America/Los_Angeles"),
    "SCL": Airport("Santiago", "CL", "America/Santiago"),
    "SEA": Airport("Seattle", "US", "America/Los_Angeles"),
    "SFO": Airport("San Francisco", "US", "America/Los_Angeles"),
    "SIN": Airport("Singapore", "SG", "Asia/Singapore"),
    "SJC": Airport("San Jose", "US", "America/Los_Angeles"),
    "SLC": Airport("Salt Lake City", "US", "America/Denver"),
    "SVO": Airport("Moscow", "RU", "Europe/Moscow"),
    "SYD": Airport("Sydney", "AU", "Australia/Sydney"),
    "TLV": Airport("Tel Aviv", "IL", "Asia/Jerusalem"),
    "TPE": Airport("Taipei", "TW", "Asia/Taipei"),
    "VIE": Airport("Vienna", "AT", "Europe/Vienna"),
    "WAW": Airport("Warsaw", "PL", "Europe/Warsaw"),
    "YUL": Airport("Montreal", "CA", "America/Toronto"),
    "YVR": Airport("Vancouver", "CA", "America/Vancouver"),
    "YYC": Airport("Calgary", "CA", "America/Edmonton"),
    "YYZ": Airport("Toronto", "CA", "America/Toronto"),
    "ZRH": Airport("Zurich", "CH", "Europe/Zurich"),
}


def find_airport(code: str) -> Airport | None:
    """Look up a three letter airport code, case-insensitively."""
    code = code.strip()
    if len(code) != 3 or not code.isalpha():
        return None
    return AIRPORTS.get(code.upper())
