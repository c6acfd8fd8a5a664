"""Validation utilities for the codec pipeline.

Verifies:
1. Page regeneration (an address gives back exactly the page it was made from)
2. Whole-file roundtrip via SHA-256 comparison
"""
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from ..core.address import Address
from ..core.errors import CodecError
from ..core.layout import DEFAULT_LAYOUT, LibraryLayout
from ..core.transform import block_of
from .container import ContainerRecord

logger = logging.getLogger(__name__)


def verify_page(block: str, address: Address,
                layout: LibraryLayout = DEFAULT_LAYOUT) -> bool:
    """Check that ``address`` regenerates ``block`` exactly."""
    try:
        retrieved = block_of(address, layout)
    except CodecError as e:
        logger.debug("Address %r does not resolve: %s", address, e)
        return False
    if retrieved == block:
        return True

    diff_pos = next((i for i, (a, b) in enumerate(zip(block, retrieved)) if a != b),
                    min(len(block), len(retrieved)))
    logger.debug("Page mismatch at position %d: original %r, retrieved %r",
                 diff_pos, block[diff_pos:diff_pos + 10], retrieved[diff_pos:diff_pos + 10])
    return False


@dataclass
class ValidationResult:
    """Result of a roundtrip check."""
    valid: bool
    original_hash: str
    reconstructed_hash: str
    original_length: int
    reconstructed_length: int
    page_count: int
    error_message: str | None = None

    def __str__(self) -> str:
        status = "VALID" if self.valid else "INVALID"
        msg = f"[{status}] "
        if self.valid:
            msg += (f"SHA-256 {self.original_hash[:16]}... "
                    f"({self.original_length} bytes, {self.page_count} pages)")
        else:
            msg += f"Original: {self.original_hash[:16]}..., "
            msg += f"Reconstructed: {self.reconstructed_hash[:16] or '-'}..."
            if self.error_message:
                msg += f" - {self.error_message}"
        return msg


def compute_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def validate_record(original: bytes, record: ContainerRecord,
                    layout: LibraryLayout = DEFAULT_LAYOUT,
                    workers: int = 1) -> ValidationResult:
    """Decode ``record`` and compare it byte-for-byte with ``original``."""
    from .pipeline import decode

    original_hash = compute_hash(original)
    try:
        reconstructed, _ = decode(record, layout=layout, workers=workers)
    except CodecError as e:
        return ValidationResult(
            valid=False,
            original_hash=original_hash,
            reconstructed_hash="",
            original_length=len(original),
            reconstructed_length=0,
            page_count=record.page_count,
            error_message=f"{type(e).__name__}: {e}",
        )

    reconstructed_hash = compute_hash(reconstructed)
    return ValidationResult(
        valid=original_hash == reconstructed_hash,
        original_hash=original_hash,
        reconstructed_hash=reconstructed_hash,
        original_length=len(original),
        reconstructed_length=len(reconstructed),
        page_count=record.page_count,
    )
