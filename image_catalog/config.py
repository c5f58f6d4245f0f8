"""
Configuration constants for the image catalog.
"""

# --- CLI Defaults ---
DEFAULT_ROOT = "."
DEFAULT_DB = "./images.db"
DEFAULT_MIME_TYPE = "image/"

# --- Metadata Normalization ---
# Raw fields carrying a timestamp. Each is normalized to "YYYY-MM-DD HH:MM:SS"
# right after extraction, before anything else reads it.
TIMESTAMP_TAGS = [
    'TimeStamp',
    'FileInodeChangeDate',
    'GPSDateTime',
    'TrackCreateDate',
    'MediaCreateDate',
    'FileModifyDate',
    'SubSecDateTimeOriginal',
    'SubSecCreateDate',
    'CreateDate',
    'DateTimeOriginal',
]

# Raw GPS field -> key of its decimal counterpart
GPS_TAGS = {
    'GPSLatitude': 'LatitudeDec',
    'GPSLongitude': 'LongitudeDec',
    'GPSPosition': 'PositionDec',
}

# Camera creation date, merged with this offset when it carries none
CREATE_DATE_TAG = 'CreateDate'
OFFSET_TAG = 'OffsetTimeOriginal'

# Fallbacks for the original creation date, most trusted first.
# Container and filesystem dates come last: they usually reflect copy time.
CREATION_DATE_FALLBACKS = [
    'SubSecDateTimeOriginal',
    'SubSecCreateDate',
    'DateTimeOriginal',
    'TimeStamp',
    'MediaCreateDate',
    'TrackCreateDate',
    'FileModifyDate',
]

# exifread tag name -> exiftool tag name (fallback extractor)
EXIFREAD_TAG_MAP = {
    'Image Make': 'Make',
    'Image Model': 'Model',
    'EXIF DateTimeOriginal': 'DateTimeOriginal',
    'EXIF DateTimeDigitized': 'CreateDate',
    'EXIF OffsetTimeOriginal': 'OffsetTimeOriginal',
}

# --- Hashing ---
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# --- Persistence ---
INSERT_LOG_EVERY = 100
