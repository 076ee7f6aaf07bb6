"""
Size of a compressed stream computed without writing it
"""
from huffcodec.errors import UnencodableSymbolError
from huffcodec.huff_constants import BITS_PER_WORD, PSEUDO_EOF
from huffcodec.huffman_header import header_size
from huffcodec.huffman_tree import HuffNode


def estimate_compressed_size(root: HuffNode, codes: dict[int, str], frequencies: dict[int, int]) -> int:
    """
    Exact number of bits compress would write for this tree:
    header, every symbol's code length times its frequency
    and the sentinel's code once.

    :param root: root of the tree
    :param codes: dict, {symbol: code} generated from root
    :param frequencies: dict, {symbol: frequency} the tree was built from
    :return: int, size in bits before padding
    """
    bits = header_size(root)
    for symbol, freq in frequencies.items():
        if freq <= 0:
            continue
        code = codes.get(symbol)
        if code is None:
            raise UnencodableSymbolError(symbol)
        bits += len(code) * freq

    eof_code = codes.get(PSEUDO_EOF)
    if eof_code is None:
        raise UnencodableSymbolError(PSEUDO_EOF)
    return bits + len(eof_code)


def compression_decision(input_size_bytes: int, estimated_bits: int, force: bool = False) -> bool:
    """
    True when compressed output should be written: forced, or
    strictly smaller than the original input.
    """
    return force or estimated_bits < input_size_bytes * BITS_PER_WORD
