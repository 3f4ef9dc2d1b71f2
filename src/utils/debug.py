import os
import sys

# Debug logging controlled by environment variable HUFFMAN_DEBUG
_DEBUG = os.environ.get("HUFFMAN_DEBUG", "").lower() in {"1", "true", "yes"}


def set_debug(enabled: bool) -> None:
    global _DEBUG
    _DEBUG = enabled


def debug_enabled() -> bool:
    return _DEBUG


def dbg(msg: str) -> None:
    if _DEBUG:
        print(f"[huffman] {msg}", file=sys.stderr)
