"""
Location reference parsing.

Pure functions that pull literal coordinates out of map links, or derive
an ordered list of human-readable search strings for the geocoder when no
coordinates are embedded. Nothing here performs I/O or raises on bad input.
"""

import re
from typing import Callable, List, NamedTuple, Optional, Tuple
from urllib.parse import SplitResult, parse_qs, unquote, urlsplit

from .geo_types import Coordinates


_NUMBER = r"(-?\d{1,3}(?:\.\d+)?)"

AT_COORDINATES_RE = re.compile(r"@" + _NUMBER + r"," + _NUMBER, re.ASCII)
EMBED_COORDINATES_RE = re.compile(r"!3d" + _NUMBER + r"!4d" + _NUMBER, re.ASCII)
LAT_LNG_PAIR_RE = re.compile(_NUMBER + r"\s*,\s*" + _NUMBER, re.ASCII)
SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# Query parameters that may carry a "lat,lng" pair, in lookup order
COORDINATE_PARAMS = ["q", "query", "ll", "sll", "destination", "origin", "daddr", "saddr"]

# Query parameters that may carry free text worth geocoding, in lookup order
SEARCH_PARAMS = ["q", "query", "destination", "origin", "daddr", "saddr"]


class CoordinateMatch(NamedTuple):
    """Coordinates together with the matcher that found them."""
    source: str
    coordinates: Coordinates


def parse_url(text: str) -> Optional[SplitResult]:
    """
    Split text as a URL, or return None when it is not one.

    http(s) URLs need a host; other schemes (geo:, loc:) need a path
    without whitespace so that prose like "Note: see map" is not a URL.
    """
    try:
        parts = urlsplit(text)
    except ValueError:
        return None

    if not parts.scheme or not SCHEME_RE.match(parts.scheme):
        return None

    if parts.scheme.lower() in ("http", "https"):
        return parts if parts.netloc else None

    if not parts.path or re.search(r"\s", text):
        return None
    return parts


def _first_param(parts: SplitResult, name: str) -> Optional[str]:
    values = parse_qs(parts.query).get(name)
    if not values:
        return None
    return values[0]


def parse_lat_lng_pair(text: str) -> Optional[Coordinates]:
    """Parse the first "lat,lng" pair in text, if it is in range."""
    match = LAT_LNG_PAIR_RE.search(text)
    if not match:
        return None
    return Coordinates.parse(match.group(1), match.group(2))


def _match_at_marker(text: str) -> Optional[Coordinates]:
    match = AT_COORDINATES_RE.search(text)
    if not match:
        return None
    return Coordinates.parse(match.group(1), match.group(2))


def _match_place_pin(text: str) -> Optional[Coordinates]:
    match = EMBED_COORDINATES_RE.search(text)
    if not match:
        return None
    return Coordinates.parse(match.group(1), match.group(2))


def _match_query_params(text: str) -> Optional[Coordinates]:
    parts = parse_url(text)
    if parts is None:
        return None

    for name in COORDINATE_PARAMS:
        value = _first_param(parts, name)
        if not value:
            continue
        coords = parse_lat_lng_pair(value)
        if coords:
            return coords
    return None


def _match_url_path(text: str) -> Optional[Coordinates]:
    parts = parse_url(text)
    if parts is None:
        return None
    return parse_lat_lng_pair(unquote(parts.path))


# Ordered matchers; the first one producing valid coordinates wins
COORDINATE_MATCHERS: List[Tuple[str, Callable[[str], Optional[Coordinates]]]] = [
    ("at_marker", _match_at_marker),
    ("place_pin", _match_place_pin),
    ("query_param", _match_query_params),
    ("url_path", _match_url_path),
]


def find_embedded_coordinates(text: str) -> Optional[CoordinateMatch]:
    """
    Run each coordinate matcher in order and return the first hit.

    Args:
        text: Map link or free text

    Returns:
        CoordinateMatch naming the matcher, or None
    """
    trimmed = text.strip()
    if not trimmed:
        return None

    for source, matcher in COORDINATE_MATCHERS:
        coords = matcher(trimmed)
        if coords is not None:
            return CoordinateMatch(source, coords)
    return None


def extract_embedded_coordinates(text: str) -> Optional[Coordinates]:
    """Return literal coordinates embedded in a reference, if any."""
    match = find_embedded_coordinates(text)
    return match.coordinates if match else None


def clean_candidate(value: str) -> str:
    """Strip a leading loc: marker, turn '+' into spaces and collapse whitespace."""
    cleaned = re.sub(r"^loc:", "", value, flags=re.IGNORECASE)
    cleaned = cleaned.replace("+", " ")
    return re.sub(r"\s+", " ", cleaned).strip()


def _path_text(decoded_path: str) -> str:
    text = re.sub(r"/@.*", "", decoded_path, flags=re.DOTALL)
    text = re.sub(r"[/_\-]+", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def extract_search_candidates(text: str) -> List[str]:
    """
    Build ordered, de-duplicated geocoder queries for a reference.

    Plain text is returned as-is (trimmed). For URLs the candidates are, in
    order: text query parameters, the /place/ segment, the /search/ segment,
    the whole path as words, then the raw input. Candidates that are just a
    "lat,lng" pair are dropped.

    Args:
        text: Map link or free text

    Returns:
        List of search strings, possibly empty
    """
    trimmed = text.strip()
    if not trimmed:
        return []

    parts = parse_url(trimmed)
    if parts is None:
        return [trimmed]

    raw_candidates = []

    for name in SEARCH_PARAMS:
        value = _first_param(parts, name)
        if value:
            raw_candidates.append(value)

    decoded_path = unquote(parts.path)

    place_match = re.search(r"/place/([^/]+)", decoded_path, flags=re.IGNORECASE)
    if place_match:
        raw_candidates.append(place_match.group(1))

    search_match = re.search(r"/search/([^/]+)", decoded_path, flags=re.IGNORECASE)
    if search_match:
        raw_candidates.append(search_match.group(1))

    path_text = _path_text(decoded_path)
    if path_text:
        raw_candidates.append(path_text)

    raw_candidates.append(trimmed)

    candidates: List[str] = []
    for raw in raw_candidates:
        cleaned = clean_candidate(raw)
        if not cleaned or cleaned in candidates:
            continue
        if parse_lat_lng_pair(cleaned):
            continue
        candidates.append(cleaned)

    return candidates
