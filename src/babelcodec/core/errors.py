"""Error kinds raised by the codec.

All of them are deterministic validation failures on caller input; nothing
here is transient, so nothing is ever retried.
"""


class CodecError(ValueError):
    """Base class for every codec failure."""


class MalformedBlock(CodecError):
    """A page has the wrong length or contains a symbol outside the alphabet."""


class AddressOutOfRange(CodecError):
    """An address component lies outside its declared range."""


class ContainerParseError(CodecError):
    """Container or address text could not be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ByteLengthMismatch(CodecError):
    """Reconstructed symbol or byte count disagrees with the stored size."""


class InvalidSymbolSequence(CodecError):
    """Decoded symbols are not the encoding of any byte sequence."""
