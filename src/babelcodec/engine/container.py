"""Container record and its line-oriented text form.

    line 1      original extension, no leading dot (empty if none)
    line 2      original size in bytes, decimal
    line 3...   one page address per line, in page order

Addresses are written in their canonical text form, so the hexagon never
passes through a fixed-width number.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.address import Address
from ..core.errors import AddressOutOfRange, ContainerParseError
from ..core.layout import DEFAULT_LAYOUT, LibraryLayout

CONTAINER_SUFFIX = ".babel"
PATH_SEPARATORS = ("/", "\\", "\0")


@dataclass(frozen=True)
class ContainerRecord:
    extension: str
    byte_length: int
    addresses: tuple[Address, ...] = ()

    def __post_init__(self) -> None:
        if "\n" in self.extension or "\r" in self.extension:
            raise ValueError(f"Extension must be a single line, got {self.extension!r}")
        if self.byte_length < 0:
            raise ValueError(f"Byte length must be non-negative, got {self.byte_length}")
        object.__setattr__(self, "addresses", tuple(self.addresses))

    @property
    def page_count(self) -> int:
        return len(self.addresses)


def dumps(record: ContainerRecord, layout: LibraryLayout = DEFAULT_LAYOUT) -> str:
    """Serialize a record to container text."""
    lines = [record.extension, str(record.byte_length)]
    lines.extend(a.to_string(layout) for a in record.addresses)
    return "\n".join(lines) + "\n"


def loads(text: str, layout: LibraryLayout = DEFAULT_LAYOUT) -> ContainerRecord:
    """Parse container text.

    Raises:
        ContainerParseError: missing or malformed line (line numbers are 1-based).
        AddressOutOfRange: an address line is well formed but out of range.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    # CRLF containers read the same as LF ones
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if not lines:
        raise ContainerParseError("Container is empty", line=1)
    extension = lines[0]
    if any(sep in extension for sep in PATH_SEPARATORS):
        raise ContainerParseError(
            f"Extension must not contain a path separator, got {extension!r}", line=1
        )

    if len(lines) < 2:
        raise ContainerParseError("Missing size line", line=2)
    size = lines[1]
    if not size or not (size.isascii() and size.isdigit()):
        raise ContainerParseError(f"Size must be a non-negative decimal, got {size!r}", line=2)

    addresses = []
    for lineno, line in enumerate(lines[2:], start=3):
        try:
            addresses.append(Address.from_string(line, layout))
        except ContainerParseError as e:
            raise ContainerParseError(str(e), line=lineno) from None
        except AddressOutOfRange as e:
            raise AddressOutOfRange(f"line {lineno}: {e}") from None

    return ContainerRecord(extension=extension, byte_length=int(size),
                           addresses=tuple(addresses))


def read_container(path, layout: LibraryLayout = DEFAULT_LAYOUT) -> ContainerRecord:
    """Read and parse a container file."""
    return loads(Path(path).read_text(encoding="utf-8"), layout)


def write_container(record: ContainerRecord, path,
                    layout: LibraryLayout = DEFAULT_LAYOUT) -> Path:
    """Write a container file and return its path."""
    path = Path(path)
    path.write_text(dumps(record, layout), encoding="utf-8")
    return path
