# filename: huffman_core.py

import heapq
import itertools
import logging
from collections import Counter

from huffman_config import DEFAULT_ALPHABET_SIZE
from huffman_errors import EmptyInputError, MalformedBitstreamError

logger = logging.getLogger(__name__)


class HuffmanNode:
    def __init__(self, char, freq, left=None, right=None, order=0):
        self.char = char
        self.freq = freq
        self.left = left
        self.right = right
        # internal nodes sort before leaves of the same frequency; internal
        # nodes by creation order, leaves by code point
        if char is not None:
            self._key = (freq, 1, ord(char))
        else:
            self._key = (freq, 0, order)

    def is_leaf(self):
        return self.left is None and self.right is None

    def __lt__(self, other):
        return self._key < other._key

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode({self.char!r}, {self.freq})"
        return f"HuffmanNode(None, {self.freq})"


class HuffmanLogic:
    def __init__(self, alphabet_size=DEFAULT_ALPHABET_SIZE):
        self.alphabet_size = alphabet_size

    def in_alphabet(self, symbol):
        return 0 <= ord(symbol) < self.alphabet_size

    def count_frequencies(self, data):
        # Absent symbols read as 0 from the Counter
        freqs = Counter()
        skipped = 0
        for char in data:
            if not self.in_alphabet(char):
                skipped += 1
                continue
            freqs[char] += 1
        if skipped:
            logger.debug("skipped %d symbols outside the alphabet of size %d",
                         skipped, self.alphabet_size)
        return freqs

    def build_tree(self, freqs):
        # Build a priority queue for leaf nodes
        priority_queue = [HuffmanNode(char, freq) for char, freq in freqs.items() if freq > 0]
        if not priority_queue:
            raise EmptyInputError("input must contain at least one symbol")
        heapq.heapify(priority_queue)
        sequence = itertools.count()
        logger.debug("seeded tree with %d symbols", len(priority_queue))

        # Iteratively merge nodes to form the binary tree
        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left.freq + right.freq, left, right, next(sequence))
            heapq.heappush(priority_queue, merged)

        root = priority_queue[0]
        logger.debug("built tree, total frequency %d", root.freq)
        return root

    def generate_codes(self, root):
        if root.is_leaf():
            # a lone symbol still needs one bit per occurrence
            return {root.char: "0"}

        codes = {}
        stack = [(root, "")]
        while stack:
            node, current_code = stack.pop()
            if node.is_leaf():
                codes[node.char] = current_code
                continue
            stack.append((node.right, current_code + "1"))
            stack.append((node.left, current_code + "0"))

        logger.debug("generated %d codes, longest %d bits",
                     len(codes), max(len(code) for code in codes.values()))
        return codes

    def encode(self, data, codes):
        parts = []
        skipped = 0
        for char in data:
            code = codes.get(char)
            if code is None:
                skipped += 1
                continue
            parts.append(code)
        if skipped:
            logger.debug("skipped %d symbols without a code", skipped)
        return "".join(parts)

    def decode(self, bits, root):
        """Walk the tree bit by bit and return the list of decoded symbols.

        Raises MalformedBitstreamError on a bit other than '0'/'1' or when
        the bits stop in the middle of a code.
        """
        decoded = []
        if root.is_leaf():
            for position, bit in enumerate(bits):
                if bit != "0":
                    raise MalformedBitstreamError(
                        f"invalid bit {bit!r} at position {position} for a single-symbol tree"
                    )
                decoded.append(root.char)
            return decoded

        current = root
        for position, bit in enumerate(bits):
            if bit == "0":
                current = current.left
            elif bit == "1":
                current = current.right
            else:
                raise MalformedBitstreamError(f"invalid bit {bit!r} at position {position}")

            if current.is_leaf():
                decoded.append(current.char)
                current = root

        if current is not root:
            raise MalformedBitstreamError("bitstream ends in the middle of a code")
        return decoded
