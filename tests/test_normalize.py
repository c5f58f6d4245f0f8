import pytest
from image_catalog.metadata.normalize import (
    normalize_timestamp,
    normalize_timestamps,
    gps_to_decimal,
    position_to_decimal,
    decimal_to_sexagesimal,
    convert_gps,
    resolve_creation_date,
)

# --- Date Normalizer ---

@pytest.mark.parametrize("raw, expected", [
    ("2023:01:01 10:00:00", "2023-01-01 10:00:00"),
    ("2023:01:01 10:00:00.123456", "2023-01-01 10:00:00"),
    ("2019:12:31 23:59:59.5+01:00", "2019-12-31 23:59:59+01:00"),
    ("2020/02/29 08:15:00", "2020-02-29 08:15:00"),
    ("2023-01-01 10:00:00", "2023-01-01 10:00:00"),
    ("2023:01:01", "2023-01-01"),
])
def test_normalize_timestamp(raw, expected):
    assert normalize_timestamp(raw) == expected

def test_normalize_timestamp_is_idempotent():
    once = normalize_timestamp("2021:07:04 18:30:12.04-05:00")
    assert normalize_timestamp(once) == once

def test_normalize_timestamp_leaves_non_strings_alone():
    assert normalize_timestamp(None) is None
    assert normalize_timestamp("") == ""
    assert normalize_timestamp(1234) == 1234

def test_normalize_timestamps_returns_copy():
    raw = {
        "CreateDate": "2023:01:01 10:00:00",
        "FileModifyDate": "2023:02:02 11:11:11+01:00",
        "Model": "X100V",
        "OffsetTimeOriginal": "+02:00",
    }
    out = normalize_timestamps(raw)

    assert out["CreateDate"] == "2023-01-01 10:00:00"
    assert out["FileModifyDate"] == "2023-02-02 11:11:11+01:00"
    assert out["Model"] == "X100V"
    # Offsets are not timestamps
    assert out["OffsetTimeOriginal"] == "+02:00"
    # Absent stays absent, input untouched
    assert "DateTimeOriginal" not in out
    assert raw["CreateDate"] == "2023:01:01 10:00:00"

# --- GPS ---

def test_gps_to_decimal_north():
    assert gps_to_decimal('48 deg 51\' 29.5" N') == pytest.approx(48.858194, abs=1e-6)

@pytest.mark.parametrize("raw", [
    '33 deg 52\' 4.02" S',
    '151 deg 12\' 36.00" W',
])
def test_gps_to_decimal_south_and_west_are_negative(raw):
    assert gps_to_decimal(raw) < 0

def test_gps_to_decimal_whitespace_and_integer_seconds():
    assert gps_to_decimal('  10deg 30\'0"E ') == pytest.approx(10.5)

@pytest.mark.parametrize("raw", [None, "", "48.8582", "48 deg 51' N", '48 deg 51\' 29.5" X', 48.85])
def test_gps_to_decimal_malformed(raw):
    assert gps_to_decimal(raw) is None

@pytest.mark.parametrize("raw, axis", [
    ('48 deg 51\' 29.50" N', 'lat'),
    ('33 deg 52\' 4.02" S', 'lat'),
    ('2 deg 17\' 40.20" E', 'lon'),
    ('122 deg 25\' 9.99" W', 'lon'),
])
def test_sexagesimal_round_trip(raw, axis):
    dec = gps_to_decimal(raw)
    assert decimal_to_sexagesimal(dec, axis) == raw
    assert gps_to_decimal(decimal_to_sexagesimal(dec, axis)) == pytest.approx(dec, abs=1e-6)

def test_decimal_to_sexagesimal_carries_rounding():
    assert decimal_to_sexagesimal(10.999999999, 'lon') == '11 deg 0\' 0.00" E'

def test_position_to_decimal():
    out = position_to_decimal('48 deg 51\' 29.50" N, 2 deg 17\' 40.20" E')
    lat, lon = (float(v) for v in out.split(', '))
    assert lat == pytest.approx(48.858194, abs=1e-6)
    assert lon == pytest.approx(2.2945, abs=1e-6)

def test_position_to_decimal_rejects_partial_match():
    assert position_to_decimal('48 deg 51\' 29.50" N, somewhere') is None

def test_convert_gps_absent_and_malformed():
    out = convert_gps({"GPSLatitude": "garbage"})
    assert out == {"LatitudeDec": None, "LongitudeDec": None, "PositionDec": None}

def test_convert_gps_all_fields():
    out = convert_gps({
        "GPSLatitude": '48 deg 51\' 29.50" N',
        "GPSLongitude": '2 deg 17\' 40.20" E',
        "GPSPosition": '48 deg 51\' 29.50" N, 2 deg 17\' 40.20" E',
    })
    assert out["LatitudeDec"] == pytest.approx(48.858194, abs=1e-6)
    assert out["LongitudeDec"] == pytest.approx(2.2945, abs=1e-6)
    assert out["PositionDec"].startswith("48.858")

# --- Creation Date ---

def test_resolve_creation_date_precedence():
    raw = {
        "SubSecDateTimeOriginal": "2020-01-01 01:01:01",
        "TimeStamp": "2021-01-01 01:01:01",
        "TrackCreateDate": "2022-01-01 01:01:01",
    }
    assert resolve_creation_date(raw) == "2020-01-01 01:01:01"

def test_resolve_creation_date_none_present():
    assert resolve_creation_date({"Model": "X"}) is None
    assert resolve_creation_date({"CreateDate": "", "FileModifyDate": None}) is None

def test_resolve_creation_date_falls_back_to_file_date():
    raw = {"FileModifyDate": "2023-03-03 03:03:03+01:00"}
    assert resolve_creation_date(raw) == "2023-03-03 03:03:03+01:00"

def test_create_date_gets_offset_appended():
    raw = {
        "CreateDate": "2023-01-01 10:00:00",
        "OffsetTimeOriginal": "+02:00",
        "SubSecDateTimeOriginal": "2020-01-01 00:00:00",
    }
    assert resolve_creation_date(raw) == "2023-01-01 10:00:00+02:00"

@pytest.mark.parametrize("create_date", ["2023-01-01 10:00:00+01:00", "2023-01-01 10:00:00-03:00"])
def test_create_date_with_offset_ignores_offset_field(create_date):
    raw = {"CreateDate": create_date, "OffsetTimeOriginal": "+02:00"}
    assert resolve_creation_date(raw) == create_date

def test_create_date_without_offset_field():
    assert resolve_creation_date({"CreateDate": "2023-01-01 10:00:00"}) == "2023-01-01 10:00:00"

def test_create_date_with_utc_designator_ignores_offset_field():
    raw = {"CreateDate": "2023-01-01 10:00:00Z", "OffsetTimeOriginal": "+02:00"}
    assert resolve_creation_date(raw) == "2023-01-01 10:00:00Z"
