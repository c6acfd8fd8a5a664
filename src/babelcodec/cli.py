"""
Command-line interface for babelcodec.

    babelcodec encode <input> [output]      file -> .babel container
    babelcodec decode <input> [output]      .babel container -> file
    babelcodec verify <original> <babel>    check a container against a file
    babelcodec page <address>               print the page at an address
    babelcodec locate <text>                address of a page starting with text
    babelcodec store <babel> [--name N]     archive a container in PostgreSQL
    babelcodec fetch <id> <output>          restore an archived container
    babelcodec list                         list archived containers

Environment:
    BABEL_WORKERS       default worker process count (default: 1)
    BABEL_DB_*          archive database settings (see babelcodec.db.postgres)
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import psycopg

from .core.address import Address
from .core.errors import CodecError
from .core.layout import DEFAULT_LAYOUT
from .core.transform import address_of, block_of
from .engine.container import read_container, write_container
from .engine.pipeline import decode_file, encode_file
from .engine.validate import validate_record
from .logging_config import setup_logging


def default_workers() -> int:
    raw = os.environ.get("BABEL_WORKERS", "1")
    try:
        return max(1, int(raw))
    except ValueError:
        raise SystemExit(f"error: BABEL_WORKERS must be an integer, got {raw!r}")


def cmd_encode(args: argparse.Namespace) -> int:
    """Encode a file into a container."""
    output = encode_file(args.input, args.output, workers=args.workers,
                         verify=args.verify)
    print(output)
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Decode a container back into a file."""
    output = decode_file(args.input, args.output, workers=args.workers)
    print(output)
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Check that a container reproduces the original file."""
    original = Path(args.original).read_bytes()
    record = read_container(args.container)
    result = validate_record(original, record, workers=args.workers)
    print(result)
    return 0 if result.valid else 1


def cmd_page(args: argparse.Namespace) -> int:
    """Print the page stored at an address."""
    address = Address.from_string(args.address.strip())
    print(block_of(address))
    return 0


def cmd_locate(args: argparse.Namespace) -> int:
    """Print the address of the page that starts with the given text."""
    layout = DEFAULT_LAYOUT
    text = args.text
    if len(text) > layout.page_length:
        raise CodecError(
            f"Text is {len(text)} symbols, a page holds {layout.page_length}"
        )
    block = text + layout.alphabet.pad_symbol * (layout.page_length - len(text))
    print(address_of(block).to_string())
    return 0


def cmd_store(args: argparse.Namespace) -> int:
    """Archive a container in the database."""
    from .db.postgres import connect, init_schema, store_container

    record = read_container(args.container)
    name = args.name or Path(args.container).stem
    conn = connect()
    try:
        init_schema(conn)
        container_id = store_container(conn, name, record,
                                       metadata={"source_file": Path(args.container).name})
    finally:
        conn.close()
    print(container_id)
    return 0


def cmd_fetch(args: argparse.Namespace) -> int:
    """Write an archived container back to a .babel file."""
    from .db.postgres import connect, load_container

    conn = connect()
    try:
        record = load_container(conn, args.id)
    finally:
        conn.close()
    if record is None:
        print(f"error: no container with id {args.id}", file=sys.stderr)
        return 1
    print(write_container(record, args.output))
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List archived containers."""
    from .db.postgres import connect, list_containers

    conn = connect()
    try:
        rows = list_containers(conn)
    finally:
        conn.close()
    for cid, name, extension, byte_length, pages, created_at in rows:
        ext = f".{extension}" if extension else ""
        print(f"{cid:>6}  {name}{ext:<8}  {byte_length:>12,} bytes  "
              f"{pages:>6} pages  {created_at:%Y-%m-%d %H:%M}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="babelcodec",
        description="Store files as page coordinates in the Library of Babel",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--log-file", help="Also write the log to this file")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    encode_parser = subparsers.add_parser("encode", help="Encode a file")
    encode_parser.add_argument("input", help="File to encode")
    encode_parser.add_argument("output", nargs="?", help="Container path (default: <input>.babel)")
    encode_parser.add_argument("--workers", type=int, default=default_workers(),
                               help="Worker processes for the page transform")
    encode_parser.add_argument("--verify", action="store_true",
                               help="Regenerate every page before writing")
    encode_parser.set_defaults(func=cmd_encode)

    decode_parser = subparsers.add_parser("decode", help="Decode a container")
    decode_parser.add_argument("input", help="Container to decode")
    decode_parser.add_argument("output", nargs="?",
                               help="Output path (default: container path with stored extension)")
    decode_parser.add_argument("--workers", type=int, default=default_workers(),
                               help="Worker processes for the page transform")
    decode_parser.set_defaults(func=cmd_decode)

    verify_parser = subparsers.add_parser("verify", help="Check a container against a file")
    verify_parser.add_argument("original", help="Original file")
    verify_parser.add_argument("container", help="Container to check")
    verify_parser.add_argument("--workers", type=int, default=default_workers(),
                               help="Worker processes for the page transform")
    verify_parser.set_defaults(func=cmd_verify)

    page_parser = subparsers.add_parser("page", help="Show the page at an address")
    page_parser.add_argument("address", help="HEXAGON:WALL:SHELF:VOLUME:PAGE")
    page_parser.set_defaults(func=cmd_page)

    locate_parser = subparsers.add_parser("locate", help="Find the page starting with text")
    locate_parser.add_argument("text", help="Page text (a-z, comma, space, period)")
    locate_parser.set_defaults(func=cmd_locate)

    store_parser = subparsers.add_parser("store", help="Archive a container in PostgreSQL")
    store_parser.add_argument("container", help="Container to archive")
    store_parser.add_argument("--name", help="Archive name (default: container stem)")
    store_parser.set_defaults(func=cmd_store)

    fetch_parser = subparsers.add_parser("fetch", help="Restore an archived container")
    fetch_parser.add_argument("id", type=int, help="Archive id")
    fetch_parser.add_argument("output", help="Container path to write")
    fetch_parser.set_defaults(func=cmd_fetch)

    list_parser = subparsers.add_parser("list", help="List archived containers")
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        return args.func(args)
    except (CodecError, OSError, psycopg.Error) as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
