# filename: huffman_packing.py

import logging

from huffman_config import DEFAULT_GROUP_SIZE, MAX_GROUP_SIZE
from huffman_errors import MalformedBitstreamError

logger = logging.getLogger(__name__)


class BitPacker:
    """Packs a bit-string into bytes of ``group_size`` bits each and back.

    The final group is zero-padded; the number of padding bits is returned by
    ``pack`` and must be handed back to ``unpack``.
    """

    def __init__(self, group_size=DEFAULT_GROUP_SIZE):
        if not 1 <= group_size <= MAX_GROUP_SIZE:
            raise ValueError(f"group_size must be between 1 and {MAX_GROUP_SIZE}, got {group_size}")
        self.group_size = group_size

    def padding_for(self, bit_count):
        return (self.group_size - bit_count % self.group_size) % self.group_size

    def pack(self, bits):
        if bits.strip("01"):
            raise MalformedBitstreamError("bit-string may only contain '0' and '1'")

        # Calculate padding needed for group alignment
        padding = self.padding_for(len(bits))
        padded = bits + "0" * padding

        b = bytearray()
        for i in range(0, len(padded), self.group_size):
            b.append(int(padded[i:i + self.group_size], 2))
        logger.debug("packed %d bits into %d bytes, padding %d",
                     len(bits), len(b), padding)
        return bytes(b), padding

    def unpack(self, data, padding):
        if not 0 <= padding < self.group_size:
            raise MalformedBitstreamError(
                f"padding length {padding} is invalid for {self.group_size}-bit groups"
            )
        limit = 1 << self.group_size
        groups = []
        for byte in data:
            if byte >= limit:
                raise MalformedBitstreamError(
                    f"byte value {byte} does not fit in {self.group_size} bits"
                )
            groups.append(format(byte, f"0{self.group_size}b"))
        bits = "".join(groups)

        if padding > len(bits):
            raise MalformedBitstreamError(
                f"padding length {padding} exceeds the {len(bits)} unpacked bits"
            )
        return bits[:len(bits) - padding]
