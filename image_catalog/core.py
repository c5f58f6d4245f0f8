import logging
from pathlib import Path
from typing import Dict, Union

from .database.db import DBManager
from .database.ops import DBOperations
from .scanning.filesystem import DiskScanner
from .models import ImageRecord
from . import config

class ImageCatalogApp:
    def __init__(self, db_path: Union[str, Path]):
        self.db_manager = DBManager(db_path)

    def collect(self, root: Path, mime_type: str = config.DEFAULT_MIME_TYPE) -> Dict[str, ImageRecord]:
        """
        Scans root and returns the batch of canonical records, keyed by path.
        Nothing is written to the catalog here.
        """
        logging.info(f"Scanning {root} for '{mime_type}' files...")
        scanner = DiskScanner()

        batch: Dict[str, ImageRecord] = {}
        for record in scanner.scan(root, mime_type):
            if record.path in batch:
                # Last one wins within a run
                logging.warning(f"Duplicate path in scan, replacing earlier record: {record.path}")
            batch[record.path] = record

        logging.info(f"processed {len(batch)} images...")
        return batch

    def ingest(self,
               root: Path,
               mime_type: str = config.DEFAULT_MIME_TYPE,
               progress: bool = True) -> Dict[str, ImageRecord]:
        """
        Executes the ingestion pipeline.
        1. Scan, Extract & Hash (whole tree, in memory)
        2. Flush the batch to the catalog in one go

        A DatabaseError from step 2 is not handled here; a crash before the
        flush loses the run.
        """
        batch = self.collect(root, mime_type)

        with self.db_manager as conn:
            db_ops = DBOperations(conn)
            db_ops.insert_records(batch, progress=progress)

        logging.info("Ingestion complete.")
        return batch
