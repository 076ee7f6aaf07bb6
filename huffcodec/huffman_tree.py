"""
Huffman tree -
builds a prefix code from byte frequencies plus the pseudo-EOF sentinel
"""
import heapq
from typing import Optional, Union

from huffcodec.huff_constants import PSEUDO_EOF


class HuffLeaf:
    """
    Leaf of Huffman's tree, holds one symbol
    """

    __slots__ = ("symbol", "weight")

    def __init__(self, symbol: int, weight: int):
        """
        :param symbol: int, byte value 0-255 or PSEUDO_EOF
        :param weight: int, frequency of the symbol (1 for the sentinel)
        """
        self.symbol = symbol
        self.weight = weight

    def __repr__(self):
        return f"HuffLeaf({self.symbol}, {self.weight})"


class HuffInternal:
    """
    Internal node of Huffman's tree, owns exactly two children
    """

    __slots__ = ("left", "right", "weight")

    def __init__(self, left: "HuffNode", right: "HuffNode", weight: Optional[int] = None):
        """
        :param left: subtree reached with bit 0
        :param right: subtree reached with bit 1
        :param weight: int, defaults to the sum of the children's weights
        """
        self.left = left
        self.right = right
        self.weight = left.weight + right.weight if weight is None else weight

    def __repr__(self):
        return f"HuffInternal({self.left!r}, {self.right!r})"


HuffNode = Union[HuffLeaf, HuffInternal]


class HuffmanTree:
    """
    Class object for one coding session: the tree, its code table
    and the frequencies it was built from. Every compress or
    decompress run owns a fresh instance.
    """

    def __init__(self, root: HuffNode, freq_dict: Optional[dict[int, int]] = None):
        self.root = root
        self.char_frequency_dict = dict(freq_dict) if freq_dict else {}
        self.res_codes: dict[int, str] = {}
        self.codes_generation()

    @classmethod
    def build_from_freq(cls, freq_dict: dict[int, int]) -> "HuffmanTree":
        """
        Builds Huffman tree from a frequency dictionary, adding
        the sentinel with weight 1, and generates prefix codes.

        Equal weights are resolved oldest-first: leaves are numbered
        by ascending symbol (sentinel last), every merged node gets
        the next number after all nodes created before it.
        The first node popped becomes the left child.

        :param freq_dict: dict, {symbol: frequency} for symbols 0-255
        :return: HuffmanTree with populated res_codes
        """
        nodes = [
            (val_freq, order, HuffLeaf(val, val_freq))
            for order, (val, val_freq) in enumerate(
                sorted((s, f) for s, f in freq_dict.items() if f > 0)
            )
        ]
        order = len(nodes)
        nodes.append((1, order, HuffLeaf(PSEUDO_EOF, 1)))

        heapq.heapify(nodes)
        while len(nodes) > 1:
            l_freq, _, l = heapq.heappop(nodes)
            r_freq, _, r = heapq.heappop(nodes)
            order += 1
            heapq.heappush(nodes, (l_freq + r_freq, order, HuffInternal(l, r)))

        return cls(nodes[0][2], freq_dict)

    def codes_generation(self):
        """
        Walks the tree depth-first and fills res_codes,
        appending '0' going left and '1' going right.
        A lone leaf at the root gets the empty code.
        """
        self.res_codes = {}
        stack = [(self.root, "")]
        while stack:
            node, curr_code = stack.pop()
            if isinstance(node, HuffLeaf):
                self.res_codes.setdefault(node.symbol, curr_code)
            else:
                stack.append((node.right, curr_code + "1"))
                stack.append((node.left, curr_code + "0"))

    def get_code(self, symbol: int) -> Optional[str]:
        """Code of a symbol, None when the symbol is not in the tree."""
        return self.res_codes.get(symbol)

    def code_lengths(self) -> dict[int, int]:
        return {sym: len(code) for sym, code in self.res_codes.items()}

    @property
    def weight(self) -> int:
        return self.root.weight
