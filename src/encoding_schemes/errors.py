"""Exceptions raised while reading the textual Huffman format."""


class HuffmanFormatError(ValueError):
    """Base class for malformed encoded input."""


class CodeTableError(HuffmanFormatError):
    """The serialized code table is corrupt or inconsistent."""


class PayloadError(HuffmanFormatError):
    """The payload after the table cannot be decoded."""


class TruncatedPayloadError(PayloadError):
    """The payload ended in the middle of a codeword."""
