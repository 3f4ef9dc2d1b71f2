import random
import sys
from io import BytesIO
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from src.encoding_schemes.errors import CodeTableError
from src.encoding_schemes.huffman_tree import (
    InternalNode,
    LeafNode,
    build_tree,
    count_frequencies,
    derive_code_tables,
    make_leaves,
    reconstruct_tree,
    tree_depth,
)


def _codes_for(data: bytes):
    root = build_tree(make_leaves(count_frequencies(data)))
    return root, derive_code_tables(root)


def test_count_frequencies_bytes_and_stream_agree():
    data = b"aabbbcc"
    expected = {ord("a"): 2, ord("b"): 3, ord("c"): 2}

    assert count_frequencies(data) == expected
    assert count_frequencies(BytesIO(data), chunk_size=2) == expected


def test_count_frequencies_empty():
    assert count_frequencies(b"") == {}
    assert count_frequencies(BytesIO(b"")) == {}


def test_empty_input_builds_no_tree():
    assert build_tree([]) is None
    assert derive_code_tables(None) == ({}, {})


def test_aabbbcc_codes():
    root, (codes, reverse) = _codes_for(b"aabbbcc")

    assert root.count == 7
    assert codes == {ord("b"): "1", ord("c"): "00", ord("a"): "01"}
    assert reverse == {"1": ord("b"), "00": ord("c"), "01": ord("a")}


def test_single_symbol_gets_one_bit_codeword():
    root, (codes, _) = _codes_for(b"aaaa")

    assert codes == {ord("a"): "1"}
    assert root.left is None
    assert isinstance(root.right, LeafNode)
    assert root.count == 4


def test_two_symbols_first_popped_goes_right():
    _, (codes, _) = _codes_for(b"ab")
    assert codes == {ord("a"): "1", ord("b"): "0"}


def test_random_data_is_prefix_free_and_ordered_by_frequency():
    rng = random.Random(1234)
    data = bytes(rng.choice(b"abcdefghij\n\x00\xff") for _ in range(5000)) + b"z"
    freqs = count_frequencies(data)
    root, (codes, reverse) = _codes_for(data)

    assert root.count == len(data)
    assert set(codes) == set(freqs)
    assert {cw: s for s, cw in codes.items()} == reverse

    words = list(codes.values())
    for a in words:
        for b in words:
            if a != b:
                assert not b.startswith(a)

    for x in freqs:
        for y in freqs:
            if freqs[x] < freqs[y]:
                assert len(codes[x]) >= len(codes[y])


def test_build_is_deterministic():
    data = b"the quick brown fox jumps over the lazy dog"
    assert _codes_for(data)[1] == _codes_for(data)[1]


def test_reconstruct_matches_derived_table():
    _, (codes, _) = _codes_for(b"mississippi river")
    rebuilt = reconstruct_tree(codes)

    assert derive_code_tables(rebuilt)[0] == codes
    assert tree_depth(rebuilt) == max(len(cw) for cw in codes.values())


def test_tree_depth():
    assert tree_depth(None) == 0
    assert tree_depth(InternalNode(right=LeafNode(symbol=1))) == 1


@pytest.mark.parametrize(
    "table",
    [
        {97: ""},
        {97: "012"},
        {97: "0", 98: "01"},
        {97: "01", 98: "0"},
        {97: "10", 98: "10"},
    ],
)
def test_reconstruct_rejects_inconsistent_tables(table):
    with pytest.raises(CodeTableError):
        reconstruct_tree(table)


def test_leaf_root_is_rejected():
    with pytest.raises(ValueError):
        derive_code_tables(LeafNode(symbol=97, count=1))
