"""Codec pipeline: file bytes -> page addresses -> file bytes.

Encode:
1. Bytes to data symbols
2. Split into pages (last page padded with the sentinel)
3. Address of every page
4. Optional verification (every address regenerates its page)
5. Container record with extension and exact byte length

Decode runs the same steps backwards, cutting the joined pages at the symbol
count derived from the stored byte length.

Pages are independent of each other, so with ``workers > 1`` the per-page
transform runs in a process pool; ``Executor.map`` keeps page order.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path

from ..core.chunker import chunk, page_count, unchunk
from ..core.errors import ByteLengthMismatch, CodecError, ContainerParseError
from ..core.layout import DEFAULT_LAYOUT, LibraryLayout
from ..core.symbols import bytes_to_symbols, symbol_count, symbols_to_bytes
from ..core.transform import address_of, block_of
from .container import CONTAINER_SUFFIX, ContainerRecord, read_container, write_container
from .validate import verify_page

logger = logging.getLogger(__name__)


def normalize_extension(extension: str) -> str:
    """Strip one leading dot; reject multi-line extensions."""
    if extension.startswith("."):
        extension = extension[1:]
    if "\n" in extension or "\r" in extension:
        raise ValueError(f"Extension must be a single line, got {extension!r}")
    return extension


def _map_pages(fn, items, layout, workers):
    work = partial(fn, layout=layout)
    if workers <= 1 or len(items) < 2:
        return [work(item) for item in items]
    chunksize = max(1, len(items) // (workers * 4))
    with ProcessPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(work, items, chunksize=chunksize))


def _check_page(pair, layout):
    block, address = pair
    return verify_page(block, address, layout)


def encode(data: bytes, extension: str = "", layout: LibraryLayout = DEFAULT_LAYOUT,
           workers: int = 1, verify: bool = False) -> ContainerRecord:
    """Encode raw bytes into a container record.

    Args:
        data: File contents (bytes, bytearray or memoryview)
        extension: Original file extension, with or without the leading dot
        layout: Library layout (format contract)
        workers: Process count for the per-page transform
        verify: Regenerate every page from its address before returning

    Returns:
        ContainerRecord with one address per page
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected a bytes-like object, got {type(data).__name__}")
    data = bytes(data)
    extension = normalize_extension(extension)

    t0 = time.time()
    symbols = bytes_to_symbols(data, layout.alphabet)
    blocks = chunk(symbols, layout)
    logger.info("Encoding %d bytes as %d symbols in %d pages",
                len(data), len(symbols), len(blocks))

    addresses = _map_pages(address_of, blocks, layout, workers)
    t1 = time.time()
    logger.debug("Addressed %d pages (%.2fs)", len(addresses), t1 - t0)

    if verify:
        checks = _map_pages(_check_page, list(zip(blocks, addresses)), layout, workers)
        failed = [i for i, ok in enumerate(checks) if not ok]
        if failed:
            raise CodecError(f"Page verification failed for pages {failed[:10]}")
        logger.debug("Verified %d pages (%.2fs)", len(blocks), time.time() - t1)

    return ContainerRecord(extension=extension, byte_length=len(data),
                           addresses=tuple(addresses))


def decode(record: ContainerRecord, layout: LibraryLayout = DEFAULT_LAYOUT,
           workers: int = 1) -> tuple[bytes, str]:
    """Decode a container record back into (bytes, extension).

    Raises:
        AddressOutOfRange: an address does not name a page of the library.
        ByteLengthMismatch: page count or padding disagrees with the stored size.
        InvalidSymbolSequence: the pages do not hold a valid byte encoding.
    """
    count = symbol_count(record.byte_length, layout.alphabet)
    expected = page_count(count, layout.page_length)
    if record.page_count != expected:
        raise ByteLengthMismatch(
            f"{record.byte_length} bytes need {expected} pages, "
            f"container has {record.page_count}"
        )

    t0 = time.time()
    logger.info("Decoding %d bytes from %d pages", record.byte_length, record.page_count)
    blocks = _map_pages(block_of, record.addresses, layout, workers)
    logger.debug("Regenerated %d pages (%.2fs)", len(blocks), time.time() - t0)

    symbols = unchunk(blocks, count, layout)
    data = symbols_to_bytes(symbols, record.byte_length, layout.alphabet)
    if len(data) != record.byte_length:
        raise ByteLengthMismatch(
            f"Decoded {len(data)} bytes, container says {record.byte_length}"
        )
    return data, record.extension


def encode_file(input_path, output_path=None, layout: LibraryLayout = DEFAULT_LAYOUT,
                workers: int = 1, verify: bool = False) -> Path:
    """Encode a file; the container defaults to the input path with a .babel suffix."""
    input_path = Path(input_path)
    logger.info("Reading %s", input_path)
    data = input_path.read_bytes()

    record = encode(data, input_path.suffix, layout=layout,
                    workers=workers, verify=verify)

    if output_path is None:
        output_path = input_path.with_suffix(CONTAINER_SUFFIX)
    output_path = write_container(record, output_path, layout)
    logger.info("Wrote %d addresses to %s", record.page_count, output_path)
    return output_path


def decode_file(input_path, output_path=None, layout: LibraryLayout = DEFAULT_LAYOUT,
                workers: int = 1) -> Path:
    """Decode a container file; output defaults to the stored extension.

    Nothing is written unless the whole container decodes.
    """
    input_path = Path(input_path)
    logger.info("Reading %s", input_path)
    record = read_container(input_path, layout)

    data, extension = decode(record, layout=layout, workers=workers)

    if output_path is None:
        try:
            output_path = input_path.with_suffix(f".{extension}" if extension else "")
        except ValueError:
            raise ContainerParseError(
                f"Extension {extension!r} cannot name an output file", line=1
            ) from None
        if output_path == input_path:
            output_path = input_path.with_name(input_path.name + ".decoded")
    output_path = Path(output_path)
    output_path.write_bytes(data)
    logger.info("Wrote %d bytes to %s", len(data), output_path)
    return output_path
