import pytest
import sqlite3
from types import SimpleNamespace
from image_catalog.database.schema import init_schema
from image_catalog.database.ops import DBOperations
from image_catalog.models import ImageRecord

@pytest.fixture
def conn():
    """Returns an in-memory SQLite connection with the schema initialized."""
    c = sqlite3.connect(":memory:")
    c.row_factory = sqlite3.Row
    init_schema(c)
    try:
        yield c
    finally:
        c.close()

@pytest.fixture
def db_ops(conn):
    """Returns a DBOperations instance attached to the in-memory DB."""
    return DBOperations(conn)

@pytest.fixture
def fake_magic(monkeypatch):
    """Replaces libmagic with a suffix lookup so tests need no system library."""
    import image_catalog.scanning.filesystem as fs_module

    types = {
        '.jpg': 'image/jpeg',
        '.jpeg': 'image/jpeg',
        '.png': 'image/png',
        '.mp4': 'video/mp4',
    }

    def from_file(path, mime=False):
        suffix = path[path.rfind('.'):].lower() if '.' in path else ''
        return types.get(suffix, 'text/plain')

    fake = SimpleNamespace(
        from_file=from_file,
        MagicException=type('MagicException', (Exception,), {}),
    )
    monkeypatch.setattr(fs_module, "magic", fake)
    return fake

def make_record(path: str, **kwargs) -> ImageRecord:
    name = path.rsplit('/', 1)[-1]
    kwargs.setdefault('sha256', 'ab' * 32)
    return ImageRecord(filename=name, path=path, **kwargs)
