from typing import BinaryIO

from bitarray import bitarray
from bitarray.util import ba2int

from huffcodec.huff_constants import END_OF_STREAM

CHUNK_SIZE = 8192


class BitReader:
    """
    A class for reading bits MSB-first from a byte-oriented input stream.
    The stream is pulled in chunks into a bitarray buffer.
    """

    def __init__(self, stream: BinaryIO) -> None:
        """
        Initialize BitReader on top of a binary stream.

        Args:
            stream: Readable binary stream, owned by the caller
        """
        self.stream = stream
        self.bits = bitarray(endian="big")
        self.pos = 0
        self.bits_read = 0
        self.exhausted = False

    def _fill(self, n: int) -> bool:
        """Make sure at least n unread bits are buffered, if the stream has them."""
        while len(self.bits) - self.pos < n and not self.exhausted:
            chunk = self.stream.read(CHUNK_SIZE)
            if not chunk:
                self.exhausted = True
                break
            del self.bits[: self.pos]
            self.pos = 0
            self.bits.frombytes(chunk)
        return len(self.bits) - self.pos >= n

    def read_bit(self) -> int:
        """
        Read one bit from the stream.

        Returns:
            The bit value (0 or 1), or END_OF_STREAM
        """
        if self.pos >= len(self.bits) and not self._fill(1):
            return END_OF_STREAM
        val = self.bits[self.pos]
        self.pos += 1
        self.bits_read += 1
        return val

    def read_bits(self, n: int) -> int:
        """
        Read n bits in MSB-first order and return them as an integer.

        Args:
            n: Number of bits to read, 1..32

        Returns:
            The value, or END_OF_STREAM if fewer than n bits remain

        Raises:
            ValueError: If n is out of range
        """
        if not 1 <= n <= 32:
            raise ValueError(f"Bit width must be between 1 and 32, got {n}")
        if not self._fill(n):
            return END_OF_STREAM
        val = ba2int(self.bits[self.pos : self.pos + n])
        self.pos += n
        self.bits_read += n
        return val

    def close(self) -> None:
        """Drop the buffered bits. The underlying stream stays open."""
        self.bits.clear()
        self.pos = 0

    def __enter__(self) -> "BitReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
