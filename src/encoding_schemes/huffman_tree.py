"""
Huffman tree construction over a single-byte alphabet.

Nodes come in two kinds: `InternalNode` (a count and up to two children) and
`LeafNode` (a count and one byte symbol). Only leaves carry symbols, so every
codeword is a root-to-leaf path and the derived code is prefix-free.
"""

import heapq
import itertools
from collections import Counter
from dataclasses import dataclass
from typing import BinaryIO, Dict, Iterable, Iterator, Optional, Tuple, Union

from src.encoding_schemes.errors import CodeTableError
from src.utils.debug import dbg

DEFAULT_CHUNK_SIZE = 64 * 1024

CodeTable = Dict[int, str]
ReverseCodeTable = Dict[str, int]


@dataclass(eq=False)
class InternalNode:
    count: int = 0
    left: Optional["Node"] = None
    right: Optional["Node"] = None


@dataclass(eq=False)
class LeafNode:
    symbol: int
    count: int = 0


Node = Union[InternalNode, LeafNode]


def iter_chunks(source: Union[bytes, BinaryIO], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the content of `source` (bytes or a binary stream) in chunks."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        if source:
            yield bytes(source)
        return
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            return
        yield chunk


def count_frequencies(source: Union[bytes, BinaryIO], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Counter:
    """
    Count occurrences of every byte value in `source`.

    The Counter keeps first-appearance order, which later fixes the heap
    tie-break. Empty input gives an empty Counter.
    """
    counts: Counter = Counter()
    for chunk in iter_chunks(source, chunk_size):
        counts.update(chunk)
    return counts


def make_leaves(frequencies: Dict[int, int]) -> list:
    return [LeafNode(symbol=symbol, count=freq) for symbol, freq in frequencies.items()]


def build_tree(nodes: Iterable[Node]) -> Optional[InternalNode]:
    """
    Merge nodes pairwise, lowest counts first, until a single root remains.

    The first node popped goes to the right, the second to the left. The root
    is always internal: a single input node hangs off its right side, so a
    one-symbol alphabet still gets the codeword "1". Returns None for no nodes.
    """
    order = itertools.count()
    # (count, sequence) is unique, so the heap never compares nodes.
    heap = [(node.count, next(order), node) for node in nodes]
    if not heap:
        return None
    heapq.heapify(heap)
    leaf_count = len(heap)

    root = InternalNode()
    root.right = heapq.heappop(heap)[2]
    root.count = root.right.count
    if heap:
        root.left = heapq.heappop(heap)[2]
        root.count += root.left.count
    heapq.heappush(heap, (root.count, next(order), root))

    while len(heap) > 1:
        right = heapq.heappop(heap)[2]
        left = heapq.heappop(heap)[2]
        merged = InternalNode(count=left.count + right.count, left=left, right=right)
        heapq.heappush(heap, (merged.count, next(order), merged))

    root = heap[0][2]
    dbg(f"built tree over {leaf_count} symbols, root count {root.count}")
    return root


def derive_code_tables(root: Optional[Node]) -> Tuple[CodeTable, ReverseCodeTable]:
    """
    Walk the tree and return (symbol -> codeword, codeword -> symbol).

    '0' is appended for a left branch and '1' for a right branch.
    """
    code_table: CodeTable = {}
    reverse_code_table: ReverseCodeTable = {}
    if root is None:
        return code_table, reverse_code_table
    if isinstance(root, LeafNode):
        raise ValueError("Tree root must be an internal node.")

    def visit(node: Node, prefix: str) -> None:
        if isinstance(node, LeafNode):
            code_table[node.symbol] = prefix
            reverse_code_table[prefix] = node.symbol
            return
        if node.left is not None:
            visit(node.left, prefix + "0")
        if node.right is not None:
            visit(node.right, prefix + "1")

    visit(root, "")
    return code_table, reverse_code_table


def _child(node: InternalNode, bit: str) -> Optional[Node]:
    return node.left if bit == "0" else node.right


def _attach(node: InternalNode, bit: str, child: Node) -> None:
    if bit == "0":
        node.left = child
    else:
        node.right = child


def reconstruct_tree(code_table: CodeTable) -> InternalNode:
    """
    Rebuild a tree from a symbol -> codeword table.

    Internal nodes are created on demand along each codeword, and the leaf
    goes at the final bit. Counts are unknown here and stay 0.
    Raises CodeTableError if a codeword is empty, contains anything other than
    '0'/'1', or lands on or passes through another symbol's leaf.
    """
    root = InternalNode()
    for symbol, codeword in code_table.items():
        if not codeword:
            raise CodeTableError(f"Empty codeword for symbol {symbol!r}.")
        if not set(codeword) <= {"0", "1"}:
            raise CodeTableError(f"Codeword for symbol {symbol!r} is not a bitstring: {codeword!r}")

        node = root
        for depth, bit in enumerate(codeword[:-1], start=1):
            child = _child(node, bit)
            if child is None:
                child = InternalNode()
                _attach(node, bit, child)
            elif isinstance(child, LeafNode):
                raise CodeTableError(
                    f"Codeword {codeword[:depth]!r} of symbol {child.symbol!r} "
                    f"is a prefix of {codeword!r} (symbol {symbol!r})."
                )
            node = child

        last = codeword[-1]
        if _child(node, last) is not None:
            raise CodeTableError(f"Codeword {codeword!r} for symbol {symbol!r} collides with another entry.")
        _attach(node, last, LeafNode(symbol=symbol))
    return root


def tree_depth(root: Optional[Node]) -> int:
    """Length of the longest root-to-leaf path (0 for no tree)."""
    if root is None or isinstance(root, LeafNode):
        return 0
    depths = [tree_depth(child) + 1 for child in (root.left, root.right) if child is not None]
    return max(depths, default=0)
