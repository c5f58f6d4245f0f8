import os
import logging
from pathlib import Path
from typing import Iterator, Optional, Any

from ..exceptions import DiscoveryError, ImageCatalogError
from ..models import ImageRecord
from ..metadata.extract import MetadataExtractor
from ..metadata.record import build_record
from .hasher import FileHasher

# python-magic needs the libmagic shared library at import time
magic: Any = None
try:
    import magic
except ImportError:
    magic = None


class DiskScanner:
    def __init__(self):
        self.hasher = FileHasher()
        self.metadata = MetadataExtractor()

    def scan(self, root: Path, mime_type: str) -> Iterator[ImageRecord]:
        """
        Generator that yields an ImageRecord for every matching file under root.
        Files that cannot be hashed are reported and skipped.
        """
        for path in self.iter_candidates(root, mime_type):
            logging.info(f"process {path}...")
            record = self._process_single_file(path)
            if record:
                yield record

    def iter_candidates(self, root: Path, mime_type: str) -> Iterator[Path]:
        """Yields files under root whose detected MIME type contains `mime_type`."""
        if magic is None:
            raise DiscoveryError("python-magic (libmagic) is required to filter files by MIME type.")

        wanted = mime_type.lower()
        for path in self._iter_files(root):
            detected = self._detect_mime_type(path)
            if detected is not None and wanted in detected.lower():
                yield path

    def _detect_mime_type(self, path: Path) -> Optional[str]:
        """First ';'-delimited token of the libmagic MIME description."""
        try:
            described = magic.from_file(str(path), mime=True)
        except (OSError, magic.MagicException) as e:
            logging.warning(f"Cannot determine MIME type of {path}: {e}")
            return None
        return described.split(';', 1)[0].strip()

    def _process_single_file(self, path: Path) -> Optional[ImageRecord]:
        """Processes a single file and returns an ImageRecord or None on error."""
        try:
            raw = self.metadata.get_raw_metadata(path)
            sha256 = self.hasher.compute_hash(path)
            return build_record(path, raw, sha256)
        except ImageCatalogError as e:
            logging.error(f"Failed to scan {path}: {e}")
            return None

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """Depth-first walker using os.scandir for speed."""
        stack = [Path(root)]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except (OSError, PermissionError):
                logging.warning(f"Permission denied: {current}")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file():
                    # Symlinked files count, symlinked dirs are not followed
                    files.append(Path(e.path))

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

            for f in files:
                yield f
