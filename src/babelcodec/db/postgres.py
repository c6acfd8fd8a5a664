"""PostgreSQL archive for container records.

Only coordinates are stored; page text is always regenerated from them.

- babel_containers: one row per encoded file (name, extension, byte length)
- babel_pages: one row per page address, ordered by position

The hexagon is kept as base-36 TEXT so its precision is never limited by a
numeric column type.
"""

import json
import os

import psycopg

from babelcodec.core.address import Address, decode_base36, encode_base36
from babelcodec.core.errors import ContainerParseError
from babelcodec.core.layout import DEFAULT_LAYOUT, FORMAT_VERSION
from babelcodec.engine.container import ContainerRecord

DB_CONFIG = {
    "dbname": os.environ.get("BABEL_DB_NAME", "babel"),
    "user": os.environ.get("BABEL_DB_USER", "babel"),
    "password": os.environ.get("BABEL_DB_PASSWORD", "babel_dev"),
    "host": os.environ.get("BABEL_DB_HOST", "localhost"),
    "port": int(os.environ.get("BABEL_DB_PORT", "5432")),
}


def connect():
    """Get a connection to the archive database."""
    return psycopg.connect(**DB_CONFIG)


def init_schema(conn):
    """Create the archive tables if they don't exist."""
    with conn.cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS babel_containers (
                id              SERIAL PRIMARY KEY,
                name            TEXT NOT NULL,
                extension       TEXT NOT NULL DEFAULT '',
                byte_length     BIGINT NOT NULL CHECK (byte_length >= 0),
                format_version  INTEGER NOT NULL,
                created_at      TIMESTAMPTZ NOT NULL DEFAULT now(),
                metadata        JSONB DEFAULT '{}'::jsonb
            );

            CREATE TABLE IF NOT EXISTS babel_pages (
                container_id    INTEGER NOT NULL
                                REFERENCES babel_containers(id) ON DELETE CASCADE,
                position        INTEGER NOT NULL,
                hexagon         TEXT NOT NULL,
                wall            SMALLINT NOT NULL,
                shelf           SMALLINT NOT NULL,
                volume          SMALLINT NOT NULL,
                page            SMALLINT NOT NULL,
                PRIMARY KEY (container_id, position)
            );

            CREATE INDEX IF NOT EXISTS idx_babel_containers_name
                ON babel_containers(name);
        """)
    conn.commit()


def store_container(conn, name, record, metadata=None):
    """Store a container record.

    Args:
        conn: psycopg connection
        name: Human-readable name (usually the original file name)
        record: ContainerRecord from encode()
        metadata: Optional JSONB metadata

    Returns:
        Integer id of the stored container
    """
    with conn.cursor() as cur:
        cur.execute("""
            INSERT INTO babel_containers (name, extension, byte_length,
                                          format_version, metadata)
            VALUES (%s, %s, %s, %s, %s::jsonb)
            RETURNING id
        """, (name, record.extension, record.byte_length, FORMAT_VERSION,
              json.dumps(metadata or {})))
        container_id = cur.fetchone()[0]

        rows = [
            (container_id, position, encode_base36(a.hexagon),
             a.wall, a.shelf, a.volume, a.page)
            for position, a in enumerate(record.addresses)
        ]
        if rows:
            cur.executemany("""
                INSERT INTO babel_pages (container_id, position, hexagon,
                                         wall, shelf, volume, page)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
            """, rows)

    conn.commit()
    return container_id


def load_container(conn, container_id):
    """Load a container record by id, or None if it doesn't exist.

    Raises:
        ContainerParseError: stored rows use another format version or hold
            malformed hexagon text.
    """
    with conn.cursor() as cur:
        cur.execute("""
            SELECT extension, byte_length, format_version
            FROM babel_containers WHERE id = %s
        """, (container_id,))
        row = cur.fetchone()
        if not row:
            return None
        extension, byte_length, version = row
        if version != FORMAT_VERSION:
            raise ContainerParseError(
                f"Container {container_id} uses format version {version}, "
                f"expected {FORMAT_VERSION}"
            )

        cur.execute("""
            SELECT hexagon, wall, shelf, volume, page
            FROM babel_pages
            WHERE container_id = %s
            ORDER BY position
        """, (container_id,))
        rows = cur.fetchall()
    addresses = []
    for position, (h, w, s, v, p) in enumerate(rows):
        try:
            hexagon = decode_base36(h)
        except ValueError as e:
            raise ContainerParseError(
                f"Container {container_id} page {position}: bad hexagon: {e}"
            ) from None
        addresses.append(Address(hexagon, w, s, v, p))
    for a in addresses:
        a.check(DEFAULT_LAYOUT)

    return ContainerRecord(extension=extension, byte_length=byte_length,
                           addresses=tuple(addresses))


def list_containers(conn):
    """List stored containers as (id, name, extension, byte_length, pages, created_at)."""
    with conn.cursor() as cur:
        cur.execute("""
            SELECT c.id, c.name, c.extension, c.byte_length,
                   COUNT(p.position) AS pages, c.created_at
            FROM babel_containers c
            LEFT JOIN babel_pages p ON p.container_id = c.id
            GROUP BY c.id
            ORDER BY c.id
        """)
        return cur.fetchall()


def delete_container(conn, container_id):
    """Delete a container and its pages. Returns True if a row was removed."""
    with conn.cursor() as cur:
        cur.execute("DELETE FROM babel_containers WHERE id = %s", (container_id,))
        deleted = cur.rowcount > 0
    conn.commit()
    return deleted
