"""Exceptions raised by the Huffman codec."""


class HuffmanError(ValueError):
    """Base class for every error the codec raises on bad data."""


class FormatError(HuffmanError):
    """
    The input is not a product of this codec: the magic number
    does not match or the stored tree is malformed.
    """


class TruncatedStreamError(HuffmanError):
    """
    The bit source ran out before a structurally required token
    (magic number, tree leaf, terminator) was read.
    """


class UnencodableSymbolError(HuffmanError):
    """A symbol to be encoded has no entry in the code table."""

    def __init__(self, symbol: int) -> None:
        super().__init__(f"Symbol {symbol} has no code in the current table")
        self.symbol = symbol
