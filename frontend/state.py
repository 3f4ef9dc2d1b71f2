"""Session state and launch options for the Streamlit page."""

import argparse
from typing import List

import streamlit as st


def parse_app_args(argv: List[str]) -> argparse.Namespace:
    """Options passed after `--` by `cli serve`; unknown ones are ignored."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--lenient", action="store_true")
    args, _ = parser.parse_known_args(argv)
    return args


def init_session_state(lenient: bool = False) -> None:
    if "current_result" not in st.session_state:
        st.session_state.current_result = None
    if "current_error" not in st.session_state:
        st.session_state.current_error = None
    # Seeded once; the sidebar checkbox owns it afterwards.
    if "strict_trailing_bits" not in st.session_state:
        st.session_state.strict_trailing_bits = not lenient
