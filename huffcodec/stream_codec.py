"""
Body of a compressed stream -
input bytes encoded with the code table, terminated by the sentinel's code
"""
from typing import BinaryIO, Iterable

from huffcodec.bitio.bit_reader import BitReader
from huffcodec.bitio.bit_writer import BitWriter
from huffcodec.errors import FormatError, TruncatedStreamError, UnencodableSymbolError
from huffcodec.huff_constants import END_OF_STREAM, PSEUDO_EOF
from huffcodec.huffman_tree import HuffLeaf, HuffNode


def encode_stream(data: Iterable[int], codes: dict[int, str], writer: BitWriter) -> int:
    """
    Writes the code of every byte, then the sentinel's code.

    :param data: bytes to encode
    :param codes: dict, {symbol: code} covering every byte of data and PSEUDO_EOF
    :param writer: BitWriter of the compressed stream
    :return: int, number of bits written
    :raises UnencodableSymbolError: a byte (or the sentinel) has no code
    """
    bit_count = 0
    for byte in data:
        code = codes.get(byte)
        if code is None:
            raise UnencodableSymbolError(byte)
        bit_count += writer.write_code(code)

    eof_code = codes.get(PSEUDO_EOF)
    if eof_code is None:
        raise UnencodableSymbolError(PSEUDO_EOF)
    bit_count += writer.write_code(eof_code)
    return bit_count


def decode_stream(root: HuffNode, reader: BitReader, out_stream: BinaryIO) -> int:
    """
    Walks the tree from the root bit by bit; every leaf reached
    emits its byte and restarts the walk, the sentinel ends decoding.
    Bits after the sentinel (padding) are never read. Nothing is
    written to out_stream unless the sentinel is reached.

    :param root: root of the tree read from the header
    :param reader: BitReader positioned right after the header
    :param out_stream: binary stream for the decoded bytes
    :return: int, number of bytes written
    :raises TruncatedStreamError: the bits run out before the sentinel
    """
    if isinstance(root, HuffLeaf):
        if root.symbol == PSEUDO_EOF:
            return 0
        # a lone byte leaf has the empty code and could never reach the sentinel
        raise FormatError("Stored tree has no reachable end-of-stream symbol")

    decoded = bytearray()
    byte_count = 0
    node = root
    while True:
        bit = reader.read_bit()
        if bit == END_OF_STREAM:
            raise TruncatedStreamError("Unexpected end of input before end-of-stream symbol")

        node = node.right if bit else node.left
        if not isinstance(node, HuffLeaf):
            continue

        if node.symbol == PSEUDO_EOF:
            break
        decoded.append(node.symbol)
        byte_count += 1
        node = root

    out_stream.write(decoded)
    return byte_count
