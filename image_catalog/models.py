from dataclasses import dataclass, asdict
from typing import Optional, Tuple, Any, Union

# Column order of the image_data insert statement
COLUMNS = (
    'filename', 'path', 'sha256', 'model', 'vendor', 'create_inode', 'create_orig',
    'gps_position', 'gps_latitude', 'gps_longitude', 'gps_time',
    'gps_position_dec', 'gps_latitude_dec', 'gps_longitude_dec',
)

@dataclass
class ImageRecord:
    """
    Canonical metadata of one image file, keyed by path.
    """
    filename: str
    path: str
    sha256: Optional[str] = None

    # Device identification
    model: Optional[str] = None
    vendor: Optional[str] = None

    # Timestamps, "YYYY-MM-DD HH:MM:SS" (optionally with offset suffix)
    create_inode: Optional[str] = None
    create_orig: Optional[str] = None

    # GPS as reported ("48 deg 51' 29.50\" N") and in signed decimal degrees
    gps_position: Optional[str] = None
    gps_latitude: Optional[str] = None
    gps_longitude: Optional[str] = None
    gps_time: Optional[str] = None
    gps_position_dec: Optional[str] = None
    gps_latitude_dec: Optional[Union[float, str]] = None
    gps_longitude_dec: Optional[Union[float, str]] = None

    def as_row(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, col) for col in COLUMNS)

    def as_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_row(cls, row) -> "ImageRecord":
        return cls(**{col: row[idx] for idx, col in enumerate(COLUMNS)})
