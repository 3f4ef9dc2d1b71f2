import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from src.encoding_schemes.huffman import huffman_encode
from src.pipeline import run_batch_on_folder
from src.reporting.report import _bit_error_count, generate_report, reference_payload_bits


def test_payload_is_never_longer_than_reference():
    for data in (b"a", b"aabbbcc", b"abracadabra", bytes(range(256)) + b"zzzz"):
        assert len(huffman_encode(data).bits) <= reference_payload_bits(data)


def test_reference_payload_bits_empty():
    assert reference_payload_bits(b"") == 0


def test_generate_report(tmp_path):
    input_root = tmp_path / "corpus"
    output_root = tmp_path / "out"
    (input_root / "docs").mkdir(parents=True)
    (input_root / "docs" / "readme.md").write_bytes(b"# title\n\nsome text\n")
    (input_root / "top.txt").write_bytes(b"aabbbcc")
    (input_root / "not_run.txt").write_bytes(b"skipped")

    run_batch_on_folder(input_root, output_root)
    # Simulate a file that was never processed.
    (output_root / "out_decoded" / "not_run_decoded.txt").unlink()
    (output_root / "out_encoded" / "not_run_encoded.txt").unlink()

    report = generate_report(input_root, output_root, tmp_path / "report")
    rows = {row["input_path"]: row for row in report["files"]}

    assert report["summary"]["total_files"] == 3
    assert report["summary"]["success_count"] == 2
    assert rows["top.txt"]["payload_bits"] == 11
    assert rows["top.txt"]["table_entries"] == 3
    assert rows["top.txt"]["bit_errors"] == 0
    assert rows["not_run.txt"]["status"] == "missing_encoded"
    assert rows["not_run.txt"]["success"] is False

    assert (tmp_path / "report" / "report.csv").exists()
    payload = json.loads((tmp_path / "report" / "report.json").read_text(encoding="utf-8"))
    assert payload["summary"]["decoded_present"] == 2


def test_bit_error_count():
    assert _bit_error_count(b"\x00\xff", b"\x01\x0f") == 1 + 4
    assert _bit_error_count(b"abc", b"abc") == 0
    assert _bit_error_count(b"abc", b"a") == 16
