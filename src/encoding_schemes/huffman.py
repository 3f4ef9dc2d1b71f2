from collections import Counter
from dataclasses import dataclass, field
from io import BytesIO
from typing import BinaryIO, Dict, Optional, Union

from src.encoding_schemes.code_table import BITS, export_table, import_table
from src.encoding_schemes.errors import PayloadError, TruncatedPayloadError
from src.encoding_schemes.huffman_tree import (
    DEFAULT_CHUNK_SIZE,
    CodeTable,
    Node,
    ReverseCodeTable,
    build_tree,
    count_frequencies,
    derive_code_tables,
    iter_chunks,
    make_leaves,
    reconstruct_tree,
    tree_depth,
)
from src.utils.debug import dbg

WHITESPACE = frozenset(b" \t\r\n\x0b\x0c")


class HuffmanTree:
    """
    Owns one Huffman tree and its two code tables.

    Every build, reconstruct, encode or decode call starts from scratch and
    replaces whatever the previous call left behind.
    """

    def __init__(self) -> None:
        self.root: Optional[Node] = None
        self.code_table: CodeTable = {}
        self.reverse_code_table: ReverseCodeTable = {}

    def reset(self) -> None:
        self.root = None
        self.code_table = {}
        self.reverse_code_table = {}

    def count_frequencies(self, source: Union[bytes, BinaryIO], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Counter:
        return count_frequencies(source, chunk_size=chunk_size)

    def build(self, frequencies: Dict[int, int]) -> None:
        """Build the tree and code tables from symbol frequencies."""
        self.reset()
        self.root = build_tree(make_leaves(frequencies))
        self.code_table, self.reverse_code_table = derive_code_tables(self.root)

    def reconstruct(self, code_table: CodeTable) -> None:
        """Rebuild the tree from a parsed table; raises CodeTableError if it is inconsistent."""
        self.reset()
        root = reconstruct_tree(code_table)
        self.root = root if code_table else None
        self.code_table = dict(code_table)
        self.reverse_code_table = {codeword: symbol for symbol, codeword in code_table.items()}

    def encode(self, source: BinaryIO, sink: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
        """
        Write the code table and then the payload for `source` to `sink`.

        `source` is read twice (counting, then encoding) and must be seekable.
        Returns the number of payload bits written.
        """
        self.build(self.count_frequencies(source, chunk_size=chunk_size))
        sink.write(export_table(self.code_table))

        codewords = [b""] * 256
        for symbol, codeword in self.code_table.items():
            codewords[symbol] = codeword.encode("ascii")

        source.seek(0)
        written = 0
        for chunk in iter_chunks(source, chunk_size):
            encoded = b"".join(codewords[byte] for byte in chunk)
            sink.write(encoded)
            written += len(encoded)
        dbg(f"encoded {len(self.code_table)} symbols into {written} payload bits")
        return written

    def decode(
        self,
        source: BinaryIO,
        sink: BinaryIO,
        strict: bool = True,
        skip_whitespace: bool = True,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> int:
        """
        Read a table plus payload from `source` and write the original bytes to `sink`.

        Bits are accumulated until they match a codeword. Leftover bits at the
        end raise TruncatedPayloadError when `strict`, otherwise they are dropped.
        Returns the number of bytes written.
        """
        data = source.read()
        table, offset = import_table(data)
        self.reconstruct(table)

        reverse = self.reverse_code_table
        max_len = tree_depth(self.root)
        out = bytearray()
        written = 0
        acc = ""
        for pos in range(offset, len(data)):
            byte = data[pos]
            if byte in WHITESPACE and skip_whitespace:
                continue
            if byte not in BITS:
                raise PayloadError(f"Unexpected byte {byte!r} at offset {pos} in payload.")
            if not reverse:
                raise PayloadError("Payload present but the code table is empty.")

            acc += chr(byte)
            symbol = reverse.get(acc)
            if symbol is not None:
                out.append(symbol)
                acc = ""
                if len(out) >= chunk_size:
                    sink.write(out)
                    written += len(out)
                    out.clear()
            elif len(acc) >= max_len:
                raise PayloadError(f"No codeword matches {acc!r} ending at offset {pos}.")

        if out:
            sink.write(out)
            written += len(out)

        if acc:
            if strict:
                raise TruncatedPayloadError(f"Payload ends with {len(acc)} unmatched bits: {acc!r}")
            dbg(f"dropping {len(acc)} trailing bits: {acc!r}")
        dbg(f"decoded {written} bytes with {len(table)} table entries")
        return written


@dataclass
class HuffmanEncoded:
    """
    Container for Huffman-encoded data.

    - code_table: symbol (byte value) -> codeword
    - bits: payload as a string of '0'/'1' characters
    """
    code_table: CodeTable = field(default_factory=dict)
    bits: str = ""

    def to_bytes(self) -> bytes:
        return export_table(self.code_table) + self.bits.encode("latin-1")

    @classmethod
    def from_bytes(cls, data: bytes) -> "HuffmanEncoded":
        table, offset = import_table(data)
        bits = bytes(b for b in data[offset:] if b not in WHITESPACE)
        return cls(code_table=table, bits=bits.decode("latin-1"))


def huffman_encode(data: bytes) -> HuffmanEncoded:
    """
    Encode raw bytes with Huffman coding.

    """
    tree = HuffmanTree()
    tree.build(tree.count_frequencies(data))
    bits = "".join(tree.code_table[byte] for byte in data)
    return HuffmanEncoded(code_table=tree.code_table, bits=bits)


def huffman_decode(encoded: Union[HuffmanEncoded, bytes], strict: bool = True) -> bytes:
    """
    Decode a HuffmanEncoded (or its serialized bytes) back to the original bytes.

    """
    raw = encoded.to_bytes() if isinstance(encoded, HuffmanEncoded) else encoded
    out = BytesIO()
    HuffmanTree().decode(BytesIO(raw), out, strict=strict)
    return out.getvalue()
