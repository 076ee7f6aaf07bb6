"""
Byte frequency table -
counts how often each byte value occurs in an input
"""
from collections import Counter
from typing import BinaryIO

CHUNK_SIZE = 8192


class CharCounter:
    """
    Class object for the frequency table used to build a Huffman tree.
    Keys are byte values (0-255), values are positive occurrence counts.
    """

    def __init__(self) -> None:
        self._table: Counter = Counter()

    @property
    def table(self) -> dict[int, int]:
        """Snapshot of the frequency table."""
        return dict(self._table)

    def count_all(self, stream: BinaryIO) -> int:
        """
        Reads the stream to its end and adds every byte to the table.

        :param stream: binary stream to read from
        :return: int, number of bytes counted
        """
        byte_count = 0
        while chunk := stream.read(CHUNK_SIZE):
            self._table.update(chunk)
            byte_count += len(chunk)
        return byte_count

    def count_bytes(self, data: bytes) -> int:
        """
        Adds every byte of data to the table.

        :param data: bytes to count
        :return: int, number of bytes counted
        """
        self._table.update(data)
        return len(data)

    def add(self, symbol: int) -> None:
        self._table[symbol] += 1

    def set(self, symbol: int, value: int) -> None:
        """
        Overwrites the count of a symbol that is already in the table.
        Unknown symbols are ignored.
        """
        if symbol in self._table:
            self._table[symbol] = value

    def get_count(self, symbol: int) -> int:
        return self._table.get(symbol, 0)

    def clear(self) -> None:
        self._table.clear()

    def __len__(self) -> int:
        return len(self._table)
