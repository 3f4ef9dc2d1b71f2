"""Utility helpers shared across pipeline components."""

from src.utils.debug import dbg, debug_enabled, set_debug
from src.utils.file_utils import add_suffix_to_top_level, derive_output_path, suffix_filename

__all__ = [
    "add_suffix_to_top_level",
    "derive_output_path",
    "suffix_filename",
    "dbg",
    "debug_enabled",
    "set_debug",
]
