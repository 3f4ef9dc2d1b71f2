from pathlib import Path

from src.pipeline.config import CodecConfig
from src.pipeline.huffman_runner import decode_file, encode_file


def run_file(path: Path, mode: str, cfg: CodecConfig | None = None) -> Path:
    """
    Dispatch a single file to the encoder or decoder based on `mode`.
    Returns the path of the output file.
    """
    mode = mode.lower()
    if mode == "encode":
        return encode_file(path, cfg)
    if mode == "decode":
        return decode_file(path, cfg)
    raise ValueError(f"Unsupported mode: {mode}")
