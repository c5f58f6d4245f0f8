"""
Normalization of raw metadata fields.

Raw values come straight from the extraction backend and follow its
conventions ("2023:01:01 10:00:00.123", "48 deg 51' 29.50\" N"). The helpers
here turn them into the catalog's canonical forms. Every function returns a
new value; the raw mapping is never modified.

Unparseable input is an expected case (phones, scanners and editing software
all write slightly different things), so converters return None instead of
raising.
"""
import logging
import re
from typing import Optional, Dict, Any, Mapping

from .. import config

# Any run of non-digits between year, month and day
_DATE_SEPARATOR_RE = re.compile(r'\D')
# Sub-second fraction, e.g. ".123" in "10:00:00.123+02:00"
_FRACTION_RE = re.compile(r'\.\d+')

_GPS_RE = re.compile(
    r"""
    (?P<degrees>\d+) \s* deg \s*            # degrees
    (?P<minutes>\d+) \s* ' \s*              # minutes
    (?P<seconds>\d+(?:\.\d+)?) \s* " \s*    # seconds
    (?P<direction>[NESW])                   # direction
    """,
    re.VERBOSE,
)

_AXIS_DIRECTIONS = {
    'lat': ('N', 'S'),
    'lon': ('E', 'W'),
}


# --- Timestamps ---

def normalize_timestamp(value: Any) -> Any:
    """
    Brings a raw timestamp into "YYYY-MM-DD HH:MM:SS" form.

    The date separator (exiftool uses ':') becomes '-', sub-second fractions
    are dropped. An offset suffix on the time part is kept as-is.
    Non-strings and empty values are returned unchanged. Idempotent.
    """
    if not isinstance(value, str) or not value:
        return value

    date_part, sep, time_part = value.partition(' ')
    date_part = _DATE_SEPARATOR_RE.sub('-', date_part)
    if not sep:
        return date_part

    time_part = _FRACTION_RE.sub('', time_part)
    return f"{date_part} {time_part}"


def normalize_timestamps(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Returns a copy of `raw` with every known timestamp field normalized."""
    normalized = dict(raw)
    for tag in config.TIMESTAMP_TAGS:
        if normalized.get(tag):
            normalized[tag] = normalize_timestamp(normalized[tag])
    return normalized


# --- GPS ---

def _match_to_decimal(m: "re.Match") -> float:
    value = (
        int(m.group('degrees'))
        + int(m.group('minutes')) / 60
        + float(m.group('seconds')) / 3600
    )
    if m.group('direction') in ('S', 'W'):
        value = -value
    return value


def gps_to_decimal(value: Any) -> Optional[float]:
    """
    Converts a single sexagesimal coordinate to signed decimal degrees.

        >>> round(gps_to_decimal('48 deg 51\\' 29.50" N'), 4)
        48.8582

    South and West are negative. Returns None when `value` does not match.
    """
    if not isinstance(value, str):
        return None
    m = _GPS_RE.fullmatch(value.strip())
    if not m:
        return None
    return _match_to_decimal(m)


def position_to_decimal(value: Any) -> Optional[str]:
    """
    Converts a combined position ("<lat>, <lon>") to "<lat_dec>, <lon_dec>".
    Returns None unless every comma-separated part is a valid coordinate.
    """
    if not isinstance(value, str):
        return None

    parts = [p.strip() for p in value.split(',')]
    decimals = []
    for part in parts:
        dec = gps_to_decimal(part)
        if dec is None:
            return None
        decimals.append(repr(dec))
    return ', '.join(decimals)


def decimal_to_sexagesimal(value: float, axis: str = 'lat') -> str:
    """
    Renders decimal degrees the way exiftool prints GPS coordinates,
    e.g. 48.858194 -> '48 deg 51\\' 29.50" N'.
    """
    positive, negative = _AXIS_DIRECTIONS[axis]
    direction = negative if value < 0 else positive

    # Work in hundredths of a second so rounding can carry into minutes/degrees
    total = round(abs(value) * 360000)
    degrees, rest = divmod(total, 360000)
    minutes, centi = divmod(rest, 6000)
    return f"{degrees} deg {minutes}' {centi / 100:.2f}\" {direction}"


def convert_gps(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Returns the decimal counterparts (LatitudeDec, LongitudeDec, PositionDec)
    of the raw GPS fields present in `raw`. A missing raw field or one that
    does not parse gives None for its decimal.
    """
    converted: Dict[str, Any] = {}
    for tag, dec_key in config.GPS_TAGS.items():
        value = raw.get(tag)
        if value is None:
            converted[dec_key] = None
            continue

        if tag == 'GPSPosition':
            dec = position_to_decimal(value)
        else:
            dec = gps_to_decimal(value)

        if dec is None:
            logging.debug(f"Unparseable {tag} value: {value!r}")
        converted[dec_key] = dec
    return converted


# --- Creation Date ---

def _present(value: Any) -> bool:
    return value is not None and value != ''


def _has_offset(stamp: str) -> bool:
    """True if the time part of a normalized timestamp carries a +/- offset or Z."""
    _, _, time_part = stamp.partition(' ')
    return '+' in time_part or '-' in time_part or time_part.rstrip().upper().endswith('Z')


def resolve_creation_date(raw: Mapping[str, Any]) -> Optional[str]:
    """
    Picks the best "original creation" timestamp from a normalized mapping.

    CreateDate wins when present and gets OffsetTimeOriginal appended unless
    it already has an offset. Otherwise the first present entry of
    config.CREATION_DATE_FALLBACKS is used.
    """
    create_date = raw.get(config.CREATE_DATE_TAG)
    if _present(create_date):
        create_date = str(create_date)
        offset = raw.get(config.OFFSET_TAG)
        if _present(offset) and not _has_offset(create_date):
            create_date += str(offset)
        return create_date

    for tag in config.CREATION_DATE_FALLBACKS:
        value = raw.get(tag)
        if _present(value):
            return str(value)
    return None
