# filename: huffman_container.py
#
# Layout (big-endian):
#   magic 'HUFT' | version u8 | group_size u8 | padding u8 | entry count u32
#   entry count x (code point u32, count u64), sorted by code point
#   packed payload

import struct
from dataclasses import dataclass, field

from huffman_config import MAX_GROUP_SIZE
from huffman_errors import CorruptContainerError

MAGIC = b"HUFT"
VERSION = 1

HEADER = struct.Struct(">4sBBBI")
ENTRY = struct.Struct(">IQ")


@dataclass
class HuffmanContainer:
    group_size: int
    padding: int
    frequencies: dict = field(default_factory=dict)
    payload: bytes = b""

    @property
    def symbol_count(self):
        return sum(self.frequencies.values())


def write_container(container):
    entries = sorted((ord(char), count) for char, count in container.frequencies.items() if count > 0)
    out = bytearray(HEADER.pack(MAGIC, VERSION, container.group_size,
                                container.padding, len(entries)))
    for code_point, count in entries:
        out += ENTRY.pack(code_point, count)
    out += container.payload
    return bytes(out)


def read_container(data):
    if len(data) < HEADER.size:
        raise CorruptContainerError(f"artifact too short for a header: {len(data)} bytes")
    magic, version, group_size, padding, entry_count = HEADER.unpack_from(data, 0)
    if magic != MAGIC:
        raise CorruptContainerError(f"bad magic {magic!r}")
    if version != VERSION:
        raise CorruptContainerError(f"unsupported version {version}")
    if not 1 <= group_size <= MAX_GROUP_SIZE:
        raise CorruptContainerError(f"invalid group size {group_size}")
    if padding >= group_size:
        raise CorruptContainerError(f"invalid padding length {padding} for group size {group_size}")

    if entry_count == 0:
        raise CorruptContainerError("artifact declares an empty frequency table")

    table_end = HEADER.size + entry_count * ENTRY.size
    if len(data) < table_end:
        raise CorruptContainerError(
            f"frequency table truncated: expected {entry_count} entries"
        )

    frequencies = {}
    previous = -1
    for code_point, count in ENTRY.iter_unpack(data[HEADER.size:table_end]):
        if code_point <= previous:
            raise CorruptContainerError(f"frequency entries out of order at code point {code_point}")
        if count == 0:
            raise CorruptContainerError(f"zero count stored for code point {code_point}")
        try:
            char = chr(code_point)
        except (ValueError, OverflowError):
            raise CorruptContainerError(f"invalid code point {code_point}") from None
        frequencies[char] = count
        previous = code_point

    return HuffmanContainer(group_size, padding, frequencies, bytes(data[table_end:]))
