import logging
import os
import subprocess
import json
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, Any, List

from .. import config
from ..exceptions import MetadataExtractionError
from .normalize import decimal_to_sexagesimal

# Optional imports handled gracefully to prevent crashes if libs are missing
try:
    import exifread
except ImportError:
    exifread = None

# Type hint 'Any' prevents Pylance from complaining about "None" having no attribute "parse"
MediaInfo: Any = None
try:
    from pymediainfo import MediaInfo
except ImportError:
    MediaInfo = None


class MetadataExtractor:
    """
    Produces the raw metadata mapping of a file, keyed by exiftool tag names
    (CreateDate, GPSLatitude, FileModifyDate, ...).

    Strategies:
      - 'exiftool' (robust, requires system install): everything in one call.
      - Fallback: 'exifread' for EXIF, 'pymediainfo' for container dates,
        and the filesystem for file dates.

    Values are raw: nothing is normalized here.
    """

    def get_raw_metadata(self, path: Path) -> Dict[str, Any]:
        """
        Returns whatever metadata can be recovered for `path`.
        Never raises; an unsupported or unreadable file gives an empty mapping.
        """
        try:
            return self._extract_exiftool(path)
        except (OSError, subprocess.CalledProcessError, MetadataExtractionError) as e:
            # Only log at debug level to avoid spamming console if tool is missing
            logging.debug(f"ExifTool failed for {path}: {e}")

        info: Dict[str, Any] = {}
        for strategy in (self._extract_exifread, self._extract_mediainfo, self._extract_file_dates):
            try:
                data = strategy(path)
            except Exception as e:
                logging.warning(f"{strategy.__name__} failed for {path}: {e}")
                continue
            for key, val in data.items():
                if val is not None and key not in info:
                    info[key] = val
        return info

    # --- Internal Extraction Helpers ---

    def _extract_exiftool(self, path: Path) -> Dict[str, Any]:
        """
        Wraps the 'exiftool' command line utility.
        Must be installed and on the system PATH.
        """
        # -j = JSON output. No -n: GPS must come back as "48 deg 51' 29.50\" N"
        cmd = ["exiftool", "-j", str(path)]
        out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL)

        # Tag values are not guaranteed to be valid UTF-8 (e.g. Latin-1 file names)
        if isinstance(out, bytes):
            out = out.decode("utf-8", errors="replace")

        try:
            data_list = json.loads(out)
            if not data_list:
                return {}
            tags = dict(data_list[0])
        except (ValueError, TypeError, KeyError, IndexError) as e:
            raise MetadataExtractionError(f"Unreadable exiftool output: {e}") from e

        tags.pop("SourceFile", None)
        return tags

    def _extract_exifread(self, path: Path) -> Dict[str, Any]:
        """Reads embedded EXIF with exifread and maps it to exiftool names."""
        if not exifread:
            logging.warning("exifread module not found. Skipping image metadata.")
            return {}

        with path.open('rb') as f:
            # details=False speeds up processing significantly
            tags = exifread.process_file(f, details=False)

        data: Dict[str, Any] = {}
        for tag, name in config.EXIFREAD_TAG_MAP.items():
            if tag in tags:
                data[name] = str(tags[tag]).strip()

        # exiftool composites: date + sub-seconds (+ offset)
        subsec_pairs = [
            ('SubSecDateTimeOriginal', 'DateTimeOriginal', 'EXIF SubSecTimeOriginal', 'EXIF OffsetTimeOriginal'),
            ('SubSecCreateDate', 'CreateDate', 'EXIF SubSecTimeDigitized', 'EXIF OffsetTimeDigitized'),
        ]
        for name, base, subsec_tag, offset_tag in subsec_pairs:
            if data.get(base) and subsec_tag in tags:
                value = f"{data[base]}.{str(tags[subsec_tag]).strip()}"
                if offset_tag in tags:
                    value += str(tags[offset_tag]).strip()
                data[name] = value

        data.update(self._exifread_gps(tags))
        return data

    def _exifread_gps(self, tags) -> Dict[str, Any]:
        data: Dict[str, Any] = {}

        lat = self._exifread_coordinate(tags, 'GPS GPSLatitude', 'GPS GPSLatitudeRef', 'lat')
        lon = self._exifread_coordinate(tags, 'GPS GPSLongitude', 'GPS GPSLongitudeRef', 'lon')
        if lat:
            data['GPSLatitude'] = lat
        if lon:
            data['GPSLongitude'] = lon
        if lat and lon:
            data['GPSPosition'] = f"{lat}, {lon}"

        if 'GPS GPSDate' in tags and 'GPS GPSTimeStamp' in tags:
            h, m, s = (self._ratio(v) for v in tags['GPS GPSTimeStamp'].values)
            data['GPSDateTime'] = f"{str(tags['GPS GPSDate']).strip()} {int(h):02d}:{int(m):02d}:{int(s):02d}Z"
        return data

    def _exifread_coordinate(self, tags, value_tag: str, ref_tag: str, axis: str) -> Optional[str]:
        if value_tag not in tags:
            return None

        values = tags[value_tag].values
        if len(values) != 3:
            return None
        degrees, minutes, seconds = (self._ratio(v) for v in values)
        decimal = degrees + minutes / 60 + seconds / 3600

        ref = str(tags[ref_tag]).strip().upper() if ref_tag in tags else ''
        if ref in ('S', 'W'):
            decimal = -decimal
        return decimal_to_sexagesimal(decimal, axis)

    @staticmethod
    def _ratio(value) -> float:
        if hasattr(value, 'num') and hasattr(value, 'den'):
            return value.num / value.den if value.den else 0.0
        return float(value)

    def _extract_mediainfo(self, path: Path) -> Dict[str, Any]:
        """Container/track creation dates via pymediainfo."""
        if MediaInfo is None:
            return {}

        mi = MediaInfo.parse(str(path))
        data: Dict[str, Any] = {}

        for track in mi.tracks:
            encoded = self._clean_mediainfo_date(getattr(track, "encoded_date", None))
            if not encoded:
                continue
            if track.track_type == "General":
                data.setdefault('MediaCreateDate', encoded)
            else:
                data.setdefault('TrackCreateDate', encoded)
        return data

    def _clean_mediainfo_date(self, dt_str: Optional[str]) -> Optional[str]:
        """MediaInfo reports 'UTC 2023-01-01 10:00:00' or '2023-01-01 10:00:00 UTC'."""
        if not dt_str:
            return None
        return str(dt_str).replace("UTC", "").strip() or None

    def _extract_file_dates(self, path: Path) -> Dict[str, Any]:
        """Filesystem dates in exiftool's 'YYYY:MM:DD HH:MM:SS+HH:MM' form."""
        st = os.stat(path)
        return {
            'FileModifyDate': self._format_file_date(st.st_mtime),
            'FileInodeChangeDate': self._format_file_date(st.st_ctime),
        }

    @staticmethod
    def _format_file_date(ts: float) -> str:
        stamp = datetime.fromtimestamp(ts).astimezone().isoformat(sep=' ', timespec='seconds')
        return stamp[:10].replace('-', ':') + stamp[10:]


def describe_backends() -> List[str]:
    """Names of the metadata backends available in this environment."""
    backends = []
    try:
        subprocess.check_output(["exiftool", "-ver"], stderr=subprocess.DEVNULL, text=True)
        backends.append("exiftool")
    except (OSError, subprocess.CalledProcessError):
        pass
    if exifread:
        backends.append("exifread")
    if MediaInfo is not None:
        backends.append("pymediainfo")
    return backends
