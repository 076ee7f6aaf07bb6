from typing import BinaryIO, Union

from bitarray import bitarray
from bitarray.util import int2ba

FLUSH_THRESHOLD = 1 << 16


class BitWriter:
    """
    A class for writing bits MSB-first to a byte-oriented output stream.
    Bits are buffered in a bitarray; complete bytes are handed to the
    stream as the buffer grows and the trailing partial byte is zero-padded
    on close.
    """

    def __init__(self, stream: BinaryIO) -> None:
        """
        Initialize a new BitWriter on top of a binary stream.

        Args:
            stream: Writable binary stream, owned by the caller
        """
        self.stream = stream
        self.bits = bitarray(endian="big")
        self.bits_written = 0
        self.closed = False

    def write_bits(self, value: int, length: int) -> None:
        """
        Write the lowest `length` bits of value, most significant bit first.

        Args:
            value: Non-negative integer that fits into `length` bits
            length: Number of bits to write, 1..32

        Raises:
            ValueError: If length is out of range or value does not fit
        """
        if not 1 <= length <= 32:
            raise ValueError(f"Bit width must be between 1 and 32, got {length}")
        if value < 0 or value >> length:
            raise ValueError(f"Value {value} does not fit into {length} bits")
        self.bits.extend(int2ba(value, length=length, endian="big"))
        self.bits_written += length
        self._maybe_flush()

    def write_code(self, code: Union[str, bitarray]) -> int:
        """
        Write a prefix code given as a '0'/'1' string or a bitarray.

        Args:
            code: The code to append

        Returns:
            Number of bits written
        """
        self.bits.extend(code)
        self.bits_written += len(code)
        self._maybe_flush()
        return len(code)

    def _maybe_flush(self) -> None:
        if len(self.bits) >= FLUSH_THRESHOLD:
            self.flush()

    def flush(self) -> None:
        """Hand every complete byte in the buffer to the stream."""
        full = len(self.bits) - len(self.bits) % 8
        if full:
            self.stream.write(self.bits[:full].tobytes())
            del self.bits[:full]

    def byte_align(self) -> None:
        """Add padding bits to achieve byte alignment."""
        self.bits.fill()

    def close(self) -> None:
        """
        Zero-pad the trailing partial byte and flush everything.
        The underlying stream stays open.
        """
        if self.closed:
            return
        self.byte_align()
        self.flush()
        self.closed = True

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
