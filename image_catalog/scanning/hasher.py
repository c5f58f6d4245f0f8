import hashlib
from pathlib import Path
from .. import config
from ..exceptions import FileHashError

class FileHasher:
    def compute_hash(self, path: Path) -> str:
        """
        Returns the SHA-256 of the file content as lowercase hex.

        Depends on the bytes only, never on name, path or timestamps.
        Raises FileHashError if the file cannot be read; a record without
        a hash is never produced.
        """
        h = hashlib.sha256()
        try:
            with open(path, 'rb') as f:
                while chunk := f.read(config.HASH_CHUNK_SIZE):
                    h.update(chunk)
        except OSError as e:
            # Permissions, or the file was moved/deleted during the scan
            raise FileHashError(f"Cannot hash {path}: {e}") from e
        return h.hexdigest()
