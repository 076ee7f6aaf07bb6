"""
Header of a compressed stream -
magic number followed by the preorder bit encoding of the Huffman tree
"""
from huffcodec.bitio.bit_reader import BitReader
from huffcodec.bitio.bit_writer import BitWriter
from huffcodec.errors import FormatError, TruncatedStreamError
from huffcodec.huff_constants import (
    ALPH_SIZE,
    BITS_PER_INT,
    END_OF_STREAM,
    LEAF_SYMBOL_BITS,
    MAGIC_NUMBER,
    PSEUDO_EOF,
)
from huffcodec.huffman_tree import HuffInternal, HuffLeaf, HuffNode

# a tree over ALPH_SIZE + 1 leaves is never deeper than this
MAX_TREE_DEPTH = ALPH_SIZE


def tree_size(node: HuffNode) -> int:
    """
    Number of bits the preorder encoding of a subtree takes:
    1 per internal node, 1 + LEAF_SYMBOL_BITS per leaf.
    """
    if isinstance(node, HuffLeaf):
        return 1 + LEAF_SYMBOL_BITS
    return 1 + tree_size(node.left) + tree_size(node.right)


def header_size(root: HuffNode) -> int:
    """Bits write_header would produce for this tree."""
    return BITS_PER_INT + tree_size(root)


def _write_tree(node: HuffNode, writer: BitWriter) -> int:
    if isinstance(node, HuffLeaf):
        writer.write_bits(1, 1)
        writer.write_bits(node.symbol, LEAF_SYMBOL_BITS)
        return 1 + LEAF_SYMBOL_BITS
    writer.write_bits(0, 1)
    return 1 + _write_tree(node.left, writer) + _write_tree(node.right, writer)


def write_header(root: HuffNode, writer: BitWriter) -> int:
    """
    Writes the magic number and the tree.

    :param root: root of the tree to store
    :param writer: BitWriter of the compressed stream
    :return: int, number of bits written
    """
    writer.write_bits(MAGIC_NUMBER, BITS_PER_INT)
    return BITS_PER_INT + _write_tree(root, writer)


def _read_tree(reader: BitReader, seen: set, depth: int) -> HuffNode:
    if depth > MAX_TREE_DEPTH:
        raise FormatError("Stored tree is deeper than the alphabet allows")

    bit = reader.read_bit()
    if bit == END_OF_STREAM:
        raise TruncatedStreamError("Unexpected end of input while reading the tree")

    if bit == 0:
        left = _read_tree(reader, seen, depth + 1)
        right = _read_tree(reader, seen, depth + 1)
        return HuffInternal(left, right, 0)

    symbol = reader.read_bits(LEAF_SYMBOL_BITS)
    if symbol == END_OF_STREAM:
        raise TruncatedStreamError("Unexpected end of input inside a tree leaf")
    if symbol > PSEUDO_EOF:
        raise FormatError(f"Invalid symbol {symbol} in stored tree")
    if symbol in seen:
        raise FormatError(f"Symbol {symbol} appears twice in stored tree")
    seen.add(symbol)
    return HuffLeaf(symbol, 0)


def read_header(reader: BitReader) -> HuffNode:
    """
    Checks the magic number and rebuilds the tree.
    Weights are not stored, reconstructed nodes carry 0.

    :param reader: BitReader positioned at the start of the stream
    :return: root of the reconstructed tree
    :raises FormatError: magic number mismatch or malformed tree
    :raises TruncatedStreamError: stream ends before the tree is complete
    """
    magic = reader.read_bits(BITS_PER_INT)
    if magic == END_OF_STREAM:
        raise TruncatedStreamError("Input is too short to hold a header")
    if magic != MAGIC_NUMBER:
        raise FormatError(f"Invalid magic number: {magic:#010x}")

    seen: set = set()
    root = _read_tree(reader, seen, 0)
    if PSEUDO_EOF not in seen:
        raise FormatError("Stored tree has no end-of-stream symbol")
    return root
