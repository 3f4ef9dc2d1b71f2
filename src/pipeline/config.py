from dataclasses import dataclass


@dataclass
class CodecConfig:
    """
    Configuration for the Huffman file coder.
    """
    # Raise on leftover payload bits instead of dropping them silently.
    strict_trailing_bits: bool = True
    skip_payload_whitespace: bool = True
    chunk_size: int = 64 * 1024
    encoded_suffix: str = "_encoded"
    decoded_suffix: str = "_decoded"
    output_extension: str = ".txt"
