#!/usr/bin/env python

import argparse
import sqlite3
from pathlib import Path

from image_catalog.database.ops import DBOperations
from image_catalog.models import COLUMNS


def connect_db(db_path: Path) -> sqlite3.Connection:
    if not db_path.exists():
        raise SystemExit(f"DB not found: {db_path}")
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def show_image_details(conn: sqlite3.Connection, path: str):
    rec = DBOperations(conn).fetch_record(path)
    if rec is None:
        print(f"No image found for path: {path}")
        return

    print("Image:")
    width = max(len(c) for c in COLUMNS)
    for col, value in zip(COLUMNS, rec.as_row()):
        print(f"  {(col + ':').ljust(width + 1)}  {'' if value is None else value}")


def list_images(conn: sqlite3.Connection):
    records = DBOperations(conn).fetch_all()
    if not records:
        print("Catalog is empty.")
        return

    print("create_orig               | vendor       | model                | lat_dec    | lon_dec    | path")
    print("--------------------------+--------------+----------------------+------------+------------+-----")
    for rec in records:
        lat = '' if rec.gps_latitude_dec is None else f"{float(rec.gps_latitude_dec):.6f}"
        lon = '' if rec.gps_longitude_dec is None else f"{float(rec.gps_longitude_dec):.6f}"
        print(f"{(rec.create_orig or '').ljust(25)} | {(rec.vendor or '').ljust(12)} | {(rec.model or '').ljust(20)} | {lat.rjust(10)} | {lon.rjust(10)} | {rec.path}")


def print_count(conn: sqlite3.Connection):
    print(f"{DBOperations(conn).count()} images in catalog.")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Query helper for the image catalog SQLite DB.")
    p.add_argument("--db", required=True, help="Path to the catalog DB (e.g. ./images.db)")
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--path", help="Show the stored record for an image path (as it was scanned)")
    group.add_argument("--list", action="store_true", help="List all images ordered by path")
    group.add_argument("--count", action="store_true", help="Print the number of cataloged images")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    db_path = Path(args.db).resolve()
    conn = connect_db(db_path)

    try:
        if args.path:
            show_image_details(conn, args.path)
        elif args.list:
            list_images(conn)
        elif args.count:
            print_count(conn)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
