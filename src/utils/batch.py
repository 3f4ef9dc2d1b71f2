import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from src.encoding_schemes.errors import HuffmanFormatError
from src.pipeline.config import CodecConfig
from src.pipeline.huffman_runner import decode_file, encode_file
from src.utils.file_utils import add_suffix_to_top_level, derive_output_path, suffix_filename


@dataclass
class BatchResult:
    input_path: Path
    encoded_path: Path
    decoded_path: Optional[Path]
    success: bool
    error: Optional[str] = None


def run_batch_on_folder(
    input_root: Path,
    output_root: Path,
    cfg: CodecConfig | None = None,
) -> List[BatchResult]:
    """
    Encode every file under `input_root`, then decode the encoded copy.

    Outputs mirror the input tree:
        <output_root>/out_encoded/<top>_encoded/.../<stem>_encoded.txt
        <output_root>/out_decoded/<top>_decoded/.../<name>_decoded<ext>
    """
    if cfg is None:
        cfg = CodecConfig()

    input_root = Path(input_root).resolve()
    output_root = Path(output_root).resolve()

    out_encoded_root = output_root / "out_encoded"
    out_decoded_root = output_root / "out_decoded"

    results: List[BatchResult] = []
    for root, dirs, files in os.walk(input_root):
        dirs.sort()
        root_path = Path(root)
        rel_root = root_path.relative_to(input_root)

        for filename in sorted(files):
            in_path = root_path / filename
            print("Processing:", in_path)
            results.append(
                process_file(
                    in_path=in_path,
                    rel_root=rel_root,
                    out_encoded_root=out_encoded_root,
                    out_decoded_root=out_decoded_root,
                    cfg=cfg,
                )
            )
    return results


def process_file(
    in_path: Path,
    rel_root: Path,
    out_encoded_root: Path,
    out_decoded_root: Path,
    cfg: CodecConfig,
) -> BatchResult:
    encoded_out_dir = out_encoded_root / add_suffix_to_top_level(rel_root, "_encoded")
    encoded_out_dir.mkdir(parents=True, exist_ok=True)
    encoded_name = derive_output_path(Path(in_path.name), cfg.encoded_suffix, cfg.output_extension)
    encoded_out_path = encode_file(in_path, cfg, out_path=encoded_out_dir / encoded_name.name)

    decoded_out_dir = out_decoded_root / add_suffix_to_top_level(rel_root, "_decoded")
    decoded_out_dir.mkdir(parents=True, exist_ok=True)
    decoded_name = suffix_filename(Path(in_path.name), cfg.decoded_suffix)
    try:
        decoded_out_path = decode_file(encoded_out_path, cfg, out_path=decoded_out_dir / decoded_name.name)
    except HuffmanFormatError as exc:
        print(f"Decoding failed for {in_path}: {exc}")
        return BatchResult(
            input_path=in_path,
            encoded_path=encoded_out_path,
            decoded_path=None,
            success=False,
            error=str(exc),
        )

    success = decoded_out_path.read_bytes() == in_path.read_bytes()
    return BatchResult(
        input_path=in_path,
        encoded_path=encoded_out_path,
        decoded_path=decoded_out_path,
        success=success,
    )
