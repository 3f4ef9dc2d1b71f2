from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple

from src.encoding_schemes.huffman import HuffmanTree
from src.pipeline.config import CodecConfig
from src.utils.debug import dbg
from src.utils.file_utils import derive_output_path


def _run_to_file(in_path: Path, out_path: Path, mode: str, cfg: CodecConfig) -> None:
    tree = HuffmanTree()
    with in_path.open("rb") as source:
        sink = out_path.open("wb")
        completed = False
        try:
            with sink:
                if mode == "encode":
                    tree.encode(source, sink, chunk_size=cfg.chunk_size)
                else:
                    tree.decode(
                        source,
                        sink,
                        strict=cfg.strict_trailing_bits,
                        skip_whitespace=cfg.skip_payload_whitespace,
                        chunk_size=cfg.chunk_size,
                    )
            completed = True
        finally:
            # Only a file this call truncated is removed; interrupts included.
            if not completed:
                out_path.unlink(missing_ok=True)


def encode_file(
    in_path: Path,
    cfg: CodecConfig | None = None,
    out_path: Optional[Path] = None,
) -> Path:
    """
    Encode `in_path` into `<stem>_encoded.txt` next to it (or `out_path`).
    Returns the path written.
    """
    if cfg is None:
        cfg = CodecConfig()
    in_path = Path(in_path)
    if out_path is None:
        out_path = derive_output_path(in_path, cfg.encoded_suffix, cfg.output_extension)
    out_path = Path(out_path)

    dbg(f"encode {in_path} -> {out_path}")
    _run_to_file(in_path, out_path, "encode", cfg)
    return out_path


def decode_file(
    in_path: Path,
    cfg: CodecConfig | None = None,
    out_path: Optional[Path] = None,
) -> Path:
    """
    Decode an encoded file into `<stem>_decoded.txt` next to it (or `out_path`).
    Returns the path written.
    """
    if cfg is None:
        cfg = CodecConfig()
    in_path = Path(in_path)
    if out_path is None:
        out_path = derive_output_path(in_path, cfg.decoded_suffix, cfg.output_extension)
    out_path = Path(out_path)

    dbg(f"decode {in_path} -> {out_path}")
    _run_to_file(in_path, out_path, "decode", cfg)
    return out_path


def encode_decode_bytes_huffman(data: bytes, cfg: CodecConfig | None = None) -> Tuple[bytes, bytes]:
    """
    Encode and decode a single in-memory payload.
    Returns (encoded_bytes, decoded_bytes).
    """
    if cfg is None:
        cfg = CodecConfig()

    encoded = BytesIO()
    HuffmanTree().encode(BytesIO(data), encoded, chunk_size=cfg.chunk_size)

    decoded = BytesIO()
    HuffmanTree().decode(
        BytesIO(encoded.getvalue()),
        decoded,
        strict=cfg.strict_trailing_bits,
        skip_whitespace=cfg.skip_payload_whitespace,
        chunk_size=cfg.chunk_size,
    )
    return encoded.getvalue(), decoded.getvalue()
