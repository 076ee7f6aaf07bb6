"""
Constants shared by the Huffman codec:
field widths, alphabet size and the format identifier.
"""

# width of the magic number field
BITS_PER_INT = 32

# width of a raw input symbol
BITS_PER_WORD = 8

# width of the symbol field of a leaf in the header,
# one bit more than a byte so the sentinel fits
LEAF_SYMBOL_BITS = 9

ALPH_SIZE = 1 << BITS_PER_WORD

# pseudo-EOF sentinel, the first value past the byte range
PSEUDO_EOF = ALPH_SIZE

MAGIC_NUMBER = 1234567873  # 0x499602C1

# returned by BitReader.read_bits when the stream has run dry
END_OF_STREAM = -1
