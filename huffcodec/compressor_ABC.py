from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Interface describing compression and decompression of byte streams,
    with helpers for files and in-memory bytes.
    """

    def __init__(self, verbose: bool = False) -> None:
        """
        Args:
            verbose: Whether to print progress information
        """
        self.verbose = verbose
        self.skipped = False
        self.log: list[str] = []

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO, force: bool = False) -> int:
        """
        Reads all bytes from the input stream and writes their compressed
        form to the output stream. When compression would not make the data
        smaller and force is not set, nothing is written and `skipped` is set.

        Args:
            input_stream: Input stream with the raw data
            output_stream: Output stream for the compressed data
            force: Compress even if the result is not smaller

        Returns:
            Number of bits written, or the number that would have been written
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> int:
        """
        Reads a compressed stream and writes the restored bytes
        to the output stream.

        Args:
            input_stream: Input stream with the compressed data
            output_stream: Output stream for the restored data

        Returns:
            Number of bytes written
        """

    def log_info(self) -> str:
        """Log lines of the last operation joined into one string."""
        return "\n".join(self.log)

    def _report(self, message: str) -> None:
        self.log.append(message)
        if self.verbose:
            print(message)

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, force: bool = False) -> int:
        """
        Helper for compressing a file. The output file is only
        created when compressed data is actually produced.

        Args:
            input_file: Path to the input file
            output_file: Path to the output file
            force: Compress even if the result is not smaller

        Returns:
            Number of bits written, or the number that would have been written
        """
        compressor = cls()
        out_buffer = io.BytesIO()
        with open(input_file, "rb") as in_file:
            bit_count = compressor.compress(in_file, out_buffer, force=force)
        if compressor.skipped:
            return bit_count
        with open(output_file, "wb") as out_file:
            out_file.write(out_buffer.getvalue())
        return bit_count

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str) -> int:
        """
        Helper for decompressing a file. The output file is only
        created when the whole stream decodes successfully.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file

        Returns:
            Number of bytes written
        """
        compressor = cls()
        out_buffer = io.BytesIO()
        with open(input_file, "rb") as in_file:
            byte_count = compressor.decompress(in_file, out_buffer)
        with open(output_file, "wb") as out_file:
            out_file.write(out_buffer.getvalue())
        return byte_count

    @classmethod
    def compress_bytes(cls, data: bytes, force: bool = False) -> Tuple[bytes, int]:
        """
        Helper for compressing bytes.

        Args:
            data: Input data
            force: Compress even if the result is not smaller

        Returns:
            Tuple (compressed data, bit count); the data is empty
            when compression was skipped
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        bit_count = compressor.compress(in_buffer, out_buffer, force=force)
        return out_buffer.getvalue(), bit_count

    @classmethod
    def decompress_bytes(cls, data: bytes) -> Tuple[bytes, int]:
        """
        Helper for decompressing bytes.

        Args:
            data: Compressed data

        Returns:
            Tuple (restored data, byte count)
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        byte_count = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), byte_count
