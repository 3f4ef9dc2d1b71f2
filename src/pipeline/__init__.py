from src.pipeline.config import CodecConfig
from src.pipeline.huffman_runner import decode_file, encode_file
from src.pipeline.runner import run_file


def run_batch_on_folder(*args, **kwargs):
    # Lazy import so importing `src.pipeline` doesn't pull in the batch walker
    # unless batch execution is actually requested.
    from src.utils.batch import run_batch_on_folder as _run_batch_on_folder

    return _run_batch_on_folder(*args, **kwargs)


__all__ = [
    "CodecConfig",
    "decode_file",
    "encode_file",
    "run_file",
    "run_batch_on_folder",
]
