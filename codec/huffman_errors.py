# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every failure raised by the codec."""


class EmptyInputError(HuffmanError, ValueError):
    """The input holds no symbol a tree can be built from."""


class MalformedBitstreamError(HuffmanError, ValueError):
    """A bitstream that cannot be decoded with the given tree."""


class CorruptContainerError(HuffmanError, ValueError):
    """A compressed artifact whose header cannot be read."""
