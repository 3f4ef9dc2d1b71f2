"""Streamlit page for encoding and decoding files with the Huffman text code."""

import sys

import streamlit as st

from state import init_session_state, parse_app_args
from utils.backend_interface import decode_upload, encode_upload

from src.encoding_schemes.errors import HuffmanFormatError
from src.pipeline.config import CodecConfig

st.set_page_config(
    page_title="Huffman Coder",
    layout="wide",
    initial_sidebar_state="expanded",
)

init_session_state(lenient=parse_app_args(sys.argv[1:]).lenient)


def render_data_preview(title: str, data: bytes | None, preview_len: int) -> None:
    st.markdown(f"**{title}**")
    if not data:
        st.caption("No data available")
        return

    preview = data[:preview_len]
    st.code(preview.decode("utf-8", errors="replace"), language=None)

    shown = min(len(data), preview_len)
    if len(data) > preview_len:
        st.caption(f"Showing {shown} of {len(data)} bytes")
    else:
        st.caption(f"{shown} bytes")


# Sidebar configuration
with st.sidebar:
    st.markdown("## Configuration")

    mode = st.radio(
        "Operation",
        options=["Encode", "Decode"],
        index=0,
        help="Encode writes the code table followed by '0'/'1' characters; decode reverses it.",
    )
    strict = st.checkbox(
        "Reject truncated payloads",
        key="strict_trailing_bits",
        help="Fail when the payload ends in the middle of a codeword instead of dropping the leftover bits.",
    )
    preview_len = st.slider("Preview length (bytes)", min_value=64, max_value=4096, value=512, step=64)

cfg = CodecConfig(strict_trailing_bits=strict)

st.title("Huffman Coder")

uploaded_file = st.file_uploader("Upload a file:", help="Any file; every byte is one symbol.")

if uploaded_file is not None and st.button(mode, type="primary"):
    uploaded_bytes = uploaded_file.read()
    st.session_state.current_error = None
    try:
        if mode == "Encode":
            st.session_state.current_result = encode_upload(uploaded_bytes, uploaded_file.name, cfg)
        else:
            st.session_state.current_result = decode_upload(uploaded_bytes, uploaded_file.name, cfg)
    except HuffmanFormatError as exc:
        st.session_state.current_result = None
        st.session_state.current_error = str(exc)

if st.session_state.current_error:
    st.error(f"Could not decode file: {st.session_state.current_error}")

result = st.session_state.current_result
if result is not None:
    col1, col2, col3 = st.columns(3)
    col1.metric("Input size", f"{result['input_size']} bytes")
    col2.metric("Output size", f"{len(result['output'])} bytes")
    col3.metric("Payload bits", result["payload_bits"])

    render_data_preview("Output", result["output"], preview_len)
    st.download_button(
        "Download",
        data=result["output"],
        file_name=result["output_name"],
        mime="text/plain",
    )

    st.markdown("**Code table**")
    st.dataframe(result["table"], use_container_width=True)
