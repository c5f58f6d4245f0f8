"""
Custom exception hierarchy for the image catalog.

Per-file problems (unreadable content, unsupported formats) are reported and
the file skipped; persistence problems abort the run.
"""


class ImageCatalogError(Exception):
    """Base exception for all image catalog errors."""
    pass


class FileHashError(ImageCatalogError):
    """Raised when file content cannot be read for hashing."""
    pass


class MetadataExtractionError(ImageCatalogError):
    """Raised when a metadata backend fails for a file."""
    pass


class DiscoveryError(ImageCatalogError):
    """Raised when candidate files cannot be classified by MIME type."""
    pass


class DatabaseError(ImageCatalogError):
    """Raised when records cannot be written to the catalog."""
    pass
