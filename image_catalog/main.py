import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .core import ImageCatalogApp
from .metadata.extract import describe_backends
from . import config

def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Image Catalog: index image metadata into SQLite")

    p.add_argument("--path", type=Path, default=Path(config.DEFAULT_ROOT), help="Directory to scan (default: .)")
    p.add_argument("--db", type=Path, default=Path(config.DEFAULT_DB), help="SQLite catalog file (default: ./images.db)")
    p.add_argument("--mime-type", default=config.DEFAULT_MIME_TYPE, help="MIME type filter, case-insensitive (default: image/)")

    p.add_argument("--dump", action="store_true", help="Print the collected records as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")

    return p.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)

    setup_logging(args.verbose, args.log_file)

    logging.info("=== Image Catalog Started ===")
    logging.info(f"Source:   {args.path}")
    logging.info(f"Database: {args.db}")
    if args.verbose:
        logging.debug(f"Metadata backends: {', '.join(describe_backends()) or 'none'}")

    app = ImageCatalogApp(args.db)

    try:
        batch = app.ingest(root=args.path, mime_type=args.mime_type)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error during ingestion.")
        sys.exit(1)

    if args.dump:
        print(json.dumps({p: rec.as_dict() for p, rec in sorted(batch.items())}, indent=2))

if __name__ == "__main__":
    main()
