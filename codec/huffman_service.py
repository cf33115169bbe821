# filename: huffman_service.py

import logging
from dataclasses import dataclass

from huffman_config import CodecConfig
from huffman_container import HuffmanContainer, read_container, write_container
from huffman_core import HuffmanLogic
from huffman_errors import MalformedBitstreamError
from huffman_packing import BitPacker

logger = logging.getLogger(__name__)


@dataclass
class CompressionStats:
    input_symbols: int
    distinct_symbols: int
    encoded_bits: int
    padding: int
    payload_bytes: int
    artifact_bytes: int

    @property
    def bytes_per_symbol(self):
        if not self.input_symbols:
            return 0.0
        return self.artifact_bytes / self.input_symbols


class HuffmanService:
    def __init__(self, config=None):
        self.config = (config or CodecConfig()).validate()
        self.logic = HuffmanLogic(self.config.alphabet_size)
        self.packer = BitPacker(self.config.group_size)

    def compress(self, data):
        compressed, _ = self.compress_with_stats(data)
        return compressed

    def compress_with_stats(self, data):
        if not isinstance(data, str):
            raise TypeError(f"compress expects text, got {type(data).__name__}")
        freqs = self.logic.count_frequencies(data)
        # raises EmptyInputError before anything is packed
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)

        encoded_str = self.logic.encode(data, codes)
        payload, padding = self.packer.pack(encoded_str)

        container = HuffmanContainer(self.packer.group_size, padding, dict(freqs), payload)
        compressed = write_container(container)

        stats = CompressionStats(
            input_symbols=len(data),
            distinct_symbols=len(freqs),
            encoded_bits=len(encoded_str),
            padding=padding,
            payload_bytes=len(payload),
            artifact_bytes=len(compressed),
        )
        logger.info("compressed %d symbols (%d distinct) into %d bytes",
                    stats.input_symbols, stats.distinct_symbols, stats.artifact_bytes)
        return compressed, stats

    def decompress(self, compressed):
        container = read_container(compressed)
        tree = self.logic.build_tree(container.frequencies)

        # the artifact decides the group size, not the local config
        packer = BitPacker(container.group_size)
        bits = packer.unpack(container.payload, container.padding)
        decoded = self.logic.decode(bits, tree)

        if len(decoded) != container.symbol_count:
            raise MalformedBitstreamError(
                f"decoded {len(decoded)} symbols, artifact declares {container.symbol_count}"
            )
        logger.info("decompressed %d bytes into %d symbols", len(compressed), len(decoded))
        return "".join(decoded)
