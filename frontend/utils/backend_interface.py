"""
Backend interface for connecting the Streamlit frontend to the Huffman coder
"""

import sys
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List

# Add the project root to the path to import src modules
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.encoding_schemes.huffman import HuffmanEncoded, HuffmanTree
from src.pipeline.config import CodecConfig
from src.utils.file_utils import derive_output_path


def _symbol_label(symbol: int) -> str:
    char = chr(symbol)
    if char.isprintable() and not char.isspace():
        return char
    return f"0x{symbol:02X}"


def code_table_rows(code_table: Dict[int, str]) -> List[Dict[str, Any]]:
    """Rows for a table widget, shortest codewords first."""
    rows = [
        {"symbol": _symbol_label(symbol), "byte": symbol, "codeword": codeword, "length": len(codeword)}
        for symbol, codeword in code_table.items()
    ]
    rows.sort(key=lambda row: (row["length"], row["byte"]))
    return rows


def encode_upload(data: bytes, filename: str, cfg: CodecConfig | None = None) -> Dict[str, Any]:
    """
    Encode uploaded bytes.

    Returns the encoded bytes, the download name and the code table rows.
    """
    if cfg is None:
        cfg = CodecConfig()

    tree = HuffmanTree()
    sink = BytesIO()
    payload_bits = tree.encode(BytesIO(data), sink, chunk_size=cfg.chunk_size)
    return {
        "output": sink.getvalue(),
        "output_name": derive_output_path(Path(filename), cfg.encoded_suffix, cfg.output_extension).name,
        "table": code_table_rows(tree.code_table),
        "input_size": len(data),
        "payload_bits": payload_bits,
    }


def decode_upload(data: bytes, filename: str, cfg: CodecConfig | None = None) -> Dict[str, Any]:
    """
    Decode uploaded bytes. Format errors propagate to the caller.
    """
    if cfg is None:
        cfg = CodecConfig()

    tree = HuffmanTree()
    sink = BytesIO()
    tree.decode(
        BytesIO(data),
        sink,
        strict=cfg.strict_trailing_bits,
        skip_whitespace=cfg.skip_payload_whitespace,
        chunk_size=cfg.chunk_size,
    )
    return {
        "output": sink.getvalue(),
        "output_name": derive_output_path(Path(filename), cfg.decoded_suffix, cfg.output_extension).name,
        "table": code_table_rows(tree.code_table),
        "input_size": len(data),
        "payload_bits": len(HuffmanEncoded.from_bytes(data).bits),
    }
