import os
from pathlib import Path
from typing import Mapping, Any, Union

from ..models import ImageRecord
from .normalize import normalize_timestamps, convert_gps, resolve_creation_date


def _text(value: Any):
    """Device strings may come back as numbers (e.g. a bare model number)."""
    if value is None:
        return None
    return str(value).strip()


def build_record(path: Union[str, Path], raw: Mapping[str, Any], sha256: str) -> ImageRecord:
    """
    Composes the canonical record of one file from its raw metadata.

    Order matters: timestamps are normalized first so that the creation date
    is resolved from canonical values. `raw` itself is left untouched.
    """
    path_str = str(path)
    info = normalize_timestamps(raw)
    decimals = convert_gps(info)

    return ImageRecord(
        filename=os.path.basename(path_str),
        path=path_str,
        sha256=sha256,
        model=_text(info.get('Model')),
        vendor=_text(info.get('Make')),
        create_inode=info.get('FileInodeChangeDate'),
        create_orig=resolve_creation_date(info),
        gps_position=info.get('GPSPosition'),
        gps_latitude=info.get('GPSLatitude'),
        gps_longitude=info.get('GPSLongitude'),
        gps_time=info.get('GPSDateTime'),
        gps_position_dec=decimals['PositionDec'],
        gps_latitude_dec=decimals['LatitudeDec'],
        gps_longitude_dec=decimals['LongitudeDec'],
    )
