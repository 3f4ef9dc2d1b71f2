"""
Textual code table format.

    <symbol><codeword>\n
    ...
    \n
    <payload>

`symbol` is one raw byte and `codeword` a run of ASCII '0'/'1'. A blank line
ends the table. A raw newline symbol is told apart from the terminator by
lookahead: its line holds at least one bit, ends in '\n' and is followed by
more table data. The payload itself never contains '\n' except trailing
whitespace.
"""

from typing import Tuple

from src.encoding_schemes.errors import CodeTableError
from src.encoding_schemes.huffman_tree import CodeTable

NEWLINE = 0x0A
BITS = frozenset(b"01")


def export_table(code_table: CodeTable) -> bytes:
    """Serialize `code_table` in ascending symbol order, terminator included."""
    lines = []
    for symbol in sorted(code_table):
        codeword = code_table[symbol]
        if not 0 <= symbol <= 0xFF:
            raise ValueError(f"Symbol out of byte range: {symbol!r}")
        lines.append(bytes([symbol]) + codeword.encode("ascii") + b"\n")
    lines.append(b"\n")
    return b"".join(lines)


def _is_newline_entry(data: bytes, pos: int) -> bool:
    end = len(data)
    j = pos + 1
    while j < end and data[j] in BITS:
        j += 1
    return j > pos + 1 and j + 1 < end and data[j] == NEWLINE


def import_table(data: bytes, start: int = 0) -> Tuple[CodeTable, int]:
    """
    Parse a code table from `data[start:]`.

    Returns (symbol -> codeword, offset of the first payload byte). The table
    ends at the blank line or at end of input.
    """
    code_table: CodeTable = {}
    pos = start
    end = len(data)
    while pos < end:
        if data[pos] == NEWLINE and not _is_newline_entry(data, pos):
            return code_table, pos + 1

        symbol = data[pos]
        line_end = data.find(b"\n", pos + 1)
        if line_end == -1:
            raise CodeTableError(f"Unterminated table entry at offset {pos}.")

        raw = data[pos + 1:line_end]
        if not raw:
            raise CodeTableError(f"Empty codeword for symbol {symbol!r} at offset {pos}.")
        if not set(raw) <= BITS:
            raise CodeTableError(f"Codeword for symbol {symbol!r} is not a bitstring: {raw!r}")
        if symbol in code_table:
            raise CodeTableError(f"Duplicate table entry for symbol {symbol!r}.")

        code_table[symbol] = raw.decode("ascii")
        pos = line_end + 1
    return code_table, pos
