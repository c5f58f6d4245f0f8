import sqlite3
import logging
from typing import Optional, List, Mapping

from tqdm import tqdm

from .. import config
from ..exceptions import DatabaseError
from ..models import ImageRecord, COLUMNS

INSERT_SQL = f"""
    INSERT INTO image_data (
        {', '.join(COLUMNS)}
    ) VALUES (
        {', '.join('?' for _ in COLUMNS)}
    )
"""

class DBOperations:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def insert_records(self, records: Mapping[str, ImageRecord], progress: bool = True) -> int:
        """
        Inserts the batch in ascending path order, in a single transaction.

        There is no upsert: a path that is already cataloged violates the
        primary key. The whole batch is then rolled back, so rows from earlier
        runs stay as they were, and DatabaseError is raised.
        """
        logging.info("Add images to database...")

        paths = sorted(records)
        insert_counter = 0
        current = None
        try:
            with self.conn:
                for current in tqdm(paths, desc="Adding to database", disable=not progress):
                    self.conn.execute(INSERT_SQL, records[current].as_row())
                    insert_counter += 1
                    if insert_counter % config.INSERT_LOG_EVERY == 0:
                        logging.debug(f"{insert_counter}...")
        except sqlite3.IntegrityError as e:
            raise DatabaseError(f"Cannot insert {current}: {e}") from e

        logging.info(f"Inserted {insert_counter} records.")
        return insert_counter

    def fetch_record(self, path: str) -> Optional[ImageRecord]:
        cur = self.conn.cursor()
        cur.execute(f"SELECT {', '.join(COLUMNS)} FROM image_data WHERE path = ?", (path,))
        row = cur.fetchone()
        return ImageRecord.from_row(row) if row else None

    def fetch_all(self) -> List[ImageRecord]:
        cur = self.conn.cursor()
        cur.execute(f"SELECT {', '.join(COLUMNS)} FROM image_data ORDER BY path")
        return [ImageRecord.from_row(row) for row in cur.fetchall()]

    def count(self) -> int:
        cur = self.conn.cursor()
        cur.execute("SELECT COUNT(*) FROM image_data")
        return cur.fetchone()[0]
