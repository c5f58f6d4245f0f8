"""
Database schema definitions.
"""
import sqlite3
import logging

def init_schema(conn: sqlite3.Connection):
    """
    Creates the image_data table if the catalog does not have it yet.
    Idempotent: safe to run on every startup.

    Columns:
      filename          base name of the file
      path              file path as discovered (PRIMARY KEY)
      sha256            content digest
      model / vendor    device that took the photo
      create_inode      inode change time
      create_orig       best-effort original capture time
      gps_position      lat/lon combined, as reported
      gps_latitude      latitude, as reported
      gps_longitude     longitude, as reported
      gps_time          GPS timestamp
      gps_*_dec         the GPS values in decimal degrees
    """
    with conn:
        conn.execute("""
        CREATE TABLE IF NOT EXISTS image_data (
            filename          VARCHAR(250) NOT NULL,
            path              VARCHAR(800) NOT NULL,
            sha256            VARCHAR(250),
            model             VARCHAR(250),
            vendor            VARCHAR(250),
            create_inode      DATETIME,
            create_orig       DATETIME,
            gps_position      VARCHAR(50),
            gps_latitude      VARCHAR(50),
            gps_longitude     VARCHAR(50),
            gps_position_dec  VARCHAR(50),
            gps_latitude_dec  VARCHAR(50),
            gps_longitude_dec VARCHAR(50),
            gps_time          VARCHAR(50),
            PRIMARY KEY( path )
        );
        """)

    logging.debug("Database schema initialized.")
