"""
Huffman compressor -
static per-stream Huffman coding with a self-describing header
"""
import io
from typing import BinaryIO, Iterator, Optional

from huffcodec.bitio.bit_reader import BitReader
from huffcodec.bitio.bit_writer import BitWriter
from huffcodec.char_counter import CHUNK_SIZE, CharCounter
from huffcodec.compressor_ABC import Compressor
from huffcodec.huff_constants import BITS_PER_WORD
from huffcodec.huffman_header import read_header, write_header
from huffcodec.huffman_tree import HuffmanTree
from huffcodec.size_estimator import compression_decision, estimate_compressed_size
from huffcodec.stream_codec import decode_stream, encode_stream


def build_tree_and_table(data: bytes) -> HuffmanTree:
    """
    Counts the bytes of data and builds the tree and code table for them.

    :param data: bytes to build the code for
    :return: HuffmanTree with root, res_codes and char_frequency_dict
    """
    counter = CharCounter()
    counter.count_bytes(data)
    return HuffmanTree.build_from_freq(counter.table)


def _iter_bytes(stream: BinaryIO) -> Iterator[int]:
    while chunk := stream.read(CHUNK_SIZE):
        yield from chunk


class HuffmanCompressor(Compressor):
    """
    Compressor writing the stream format:
    magic number, preorder tree, encoded body, sentinel code, zero padding.

    The tree of the last operation is kept in `tree` for inspection;
    every call builds its own.
    """

    def __init__(self, verbose: bool = False) -> None:
        super().__init__(verbose)
        self.tree: Optional[HuffmanTree] = None
        self.header_bits = 0

    def estimate_compressed_size(self, tree: HuffmanTree) -> int:
        """
        Bits a forced compression with this tree would write.
        Unforced compression only writes when this is below
        the input size in bits, see compression_decision.
        """
        return estimate_compressed_size(tree.root, tree.res_codes, tree.char_frequency_dict)

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO, force: bool = False) -> int:
        self.log.clear()
        self.header_bits = 0
        # two passes over the input: count, then encode
        if not input_stream.seekable():
            input_stream = io.BytesIO(input_stream.read())
        start = input_stream.tell()
        counter = CharCounter()
        input_size = counter.count_all(input_stream)
        self.tree = tree = HuffmanTree.build_from_freq(counter.table)
        self._report(
            f"Compressing {input_size} bytes, {len(tree.char_frequency_dict)} distinct symbols"
        )

        estimate = self.estimate_compressed_size(tree)
        if not compression_decision(input_size, estimate, force):
            self.skipped = True
            self._report(
                f"Compression skipped: {estimate} bits compressed vs "
                f"{input_size * BITS_PER_WORD} bits original"
            )
            return estimate
        self.skipped = False

        with BitWriter(output_stream) as writer:
            self.header_bits = bit_count = write_header(tree.root, writer)
            input_stream.seek(start)
            bit_count += encode_stream(_iter_bytes(input_stream), tree.res_codes, writer)

        final_size = (bit_count + BITS_PER_WORD - 1) // BITS_PER_WORD
        diff = input_size - final_size
        if diff > 0:
            ratio = diff / input_size * 100
            self._report(f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)")
        else:
            self._report(f"Size increased by {-diff} bytes")
        return bit_count

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> int:
        self.log.clear()
        with BitReader(input_stream) as reader:
            root = read_header(reader)
            self.header_bits = reader.bits_read
            self.tree = HuffmanTree(root)
            byte_count = decode_stream(root, reader, output_stream)

        self._report(f"Decompressed {byte_count} bytes")
        return byte_count

    def show_counts(self) -> dict[int, int]:
        """Frequency table of the last compressed input."""
        return dict(self.tree.char_frequency_dict) if self.tree else {}

    def get_code(self, symbol: int) -> Optional[str]:
        """Code of a symbol in the last tree, None when absent."""
        return self.tree.get_code(symbol) if self.tree else None

    def header_size(self) -> int:
        """Bits of the last header written or read."""
        return self.header_bits
