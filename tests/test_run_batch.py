import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from src.pipeline import CodecConfig, run_batch_on_folder


def _make_corpus(root: Path) -> None:
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"aabbbcc\n")
    (root / "sub" / "b.bin").write_bytes(bytes(range(256)))
    (root / "sub" / "empty.dat").write_bytes(b"")


def test_run_batch_roundtrips_every_file(tmp_path):
    input_root = tmp_path / "corpus"
    output_root = tmp_path / "out"
    _make_corpus(input_root)

    results = run_batch_on_folder(input_root, output_root, CodecConfig())

    assert len(results) == 3
    assert all(r.success for r in results)
    assert (output_root / "out_encoded" / "a_encoded.txt").exists()
    assert (output_root / "out_encoded" / "sub_encoded" / "b_encoded.txt").exists()
    assert (output_root / "out_decoded" / "sub_decoded" / "b_decoded.bin").read_bytes() == bytes(range(256))
    assert (output_root / "out_decoded" / "sub_decoded" / "empty_decoded.dat").read_bytes() == b""


def test_run_batch_default_config(tmp_path):
    input_root = tmp_path / "corpus"
    input_root.mkdir()
    (input_root / "one.txt").write_bytes(b"one")

    results = run_batch_on_folder(input_root, tmp_path / "out")

    assert [r.input_path.name for r in results] == ["one.txt"]
    assert results[0].decoded_path.read_bytes() == b"one"
