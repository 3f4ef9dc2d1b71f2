import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from src.pipeline import cli
from src.pipeline.cli import APP_PATH, build_streamlit_command, main
from src.pipeline.config import CodecConfig
from src.utils.debug import debug_enabled, set_debug


def test_cli_encode_decode(tmp_path, capsys):
    src_path = tmp_path / "lorem.txt"
    src_path.write_bytes(b"lorem ipsum")

    assert main(["encode", str(src_path)]) == 0
    assert main(["decode", str(tmp_path / "lorem_encoded.txt")]) == 0

    assert (tmp_path / "lorem_encoded_decoded.txt").read_bytes() == b"lorem ipsum"
    assert "Decode complete" in capsys.readouterr().out


def test_cli_reports_format_errors(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"a1\n\n10")

    assert main(["decode", str(bad)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    assert main(["encode", str(tmp_path / "nope.txt")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_lenient_and_debug(tmp_path, capsys):
    encoded = tmp_path / "t.txt"
    encoded.write_bytes(b"a01\nb1\nc00\n\n0101111000")

    try:
        assert main(["--lenient", "--debug", "decode", str(encoded)]) == 0
        assert debug_enabled()
    finally:
        set_debug(False)

    assert (tmp_path / "t_decoded.txt").read_bytes() == b"aabbbc"
    assert "[huffman]" in capsys.readouterr().err


def test_cli_batch(tmp_path):
    input_root = tmp_path / "in"
    input_root.mkdir()
    (input_root / "x.txt").write_bytes(b"xxyz")

    assert main(["batch", str(input_root), str(tmp_path / "out")]) == 0


def test_streamlit_command_passes_codec_options():
    cmd = build_streamlit_command(8502, CodecConfig(strict_trailing_bits=False))

    assert cmd[:3] == ["streamlit", "run", str(APP_PATH)]
    assert APP_PATH.parts[-2:] == ("frontend", "app.py")
    assert cmd[cmd.index("--server.port") + 1] == "8502"
    assert cmd[-2:] == ["--", "--lenient"]
    assert build_streamlit_command(8501, CodecConfig())[-1] == "--"


def test_cli_serve_runs_streamlit(monkeypatch):
    calls = []

    class Completed:
        returncode = 0

    def fake_run(cmd, env):
        calls.append((cmd, env))
        return Completed()

    monkeypatch.setattr(cli.subprocess, "run", fake_run)
    monkeypatch.delenv("HUFFMAN_DEBUG", raising=False)

    try:
        assert main(["--debug", "--lenient", "serve", "--port", "9000"]) == 0
    finally:
        set_debug(False)

    cmd, env = calls[0]
    assert "9000" in cmd
    assert cmd[-1] == "--lenient"
    assert env["HUFFMAN_DEBUG"] == "1"


def test_cli_serve_without_streamlit(monkeypatch, capsys):
    def missing(cmd, env):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(cli.subprocess, "run", missing)

    assert main(["serve"]) == 1
    assert "streamlit is not installed" in capsys.readouterr().err
