"""
Command-line entry point.

    python -m src.pipeline.cli encode lorem.txt      -> lorem_encoded.txt
    python -m src.pipeline.cli decode lorem_encoded.txt
    python -m src.pipeline.cli batch data/ out/
    python -m src.pipeline.cli --lenient serve --port 8502
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from src.encoding_schemes.errors import HuffmanFormatError
from src.pipeline.config import CodecConfig
from src.pipeline.runner import run_file
from src.utils.debug import set_debug

APP_PATH = Path(__file__).resolve().parents[2] / "frontend" / "app.py"


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Encode files into a textual Huffman code and decode them back.",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Drop undecodable trailing payload bits instead of failing.",
    )
    parser.add_argument("--debug", action="store_true", help="Print debug messages to stderr.")
    sub = parser.add_subparsers(dest="command", required=True)

    for mode in ("encode", "decode"):
        cmd = sub.add_parser(mode, help=f"{mode.capitalize()} a single file.")
        cmd.add_argument("path", help="Input file.")

    batch = sub.add_parser("batch", help="Encode and decode every file under a folder.")
    batch.add_argument("input_root", help="Folder with input files.")
    batch.add_argument("output_root", help="Folder for out_encoded/ and out_decoded/.")

    serve = sub.add_parser("serve", help="Launch the Streamlit front end.")
    serve.add_argument("--port", type=int, default=8501, help="Port to serve on (default: 8501).")
    return parser.parse_args(argv)


def build_streamlit_command(port: int, cfg: CodecConfig) -> List[str]:
    """
    Command line that serves the front end. Codec options go after `--`,
    where `frontend/app.py` reads them as its defaults.
    """
    app_args = [] if cfg.strict_trailing_bits else ["--lenient"]
    return [
        "streamlit", "run", str(APP_PATH),
        "--server.headless", "true",
        "--server.port", str(port),
        "--browser.gatherUsageStats", "false",
        "--", *app_args,
    ]


def _serve(port: int, cfg: CodecConfig, debug: bool) -> int:
    env = dict(os.environ)
    if debug:
        env["HUFFMAN_DEBUG"] = "1"
    print(f"Serving {APP_PATH} at http://localhost:{port} (Ctrl+C to stop)")
    try:
        return subprocess.run(build_streamlit_command(port, cfg), env=env).returncode
    except KeyboardInterrupt:
        return 0
    except FileNotFoundError:
        print("Error: streamlit is not installed or not in PATH", file=sys.stderr)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.debug:
        set_debug(True)
    cfg = CodecConfig(strict_trailing_bits=not args.lenient)

    if args.command == "serve":
        return _serve(args.port, cfg, args.debug)

    try:
        if args.command == "batch":
            from src.utils.batch import run_batch_on_folder

            results = run_batch_on_folder(Path(args.input_root), Path(args.output_root), cfg)
            failed = [r for r in results if not r.success]
            print(f"Processed {len(results)} files, {len(failed)} failed.")
            return 1 if failed else 0

        out_path = run_file(Path(args.path), args.command, cfg)
    except (HuffmanFormatError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"{args.command.capitalize()} complete: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
