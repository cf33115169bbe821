# filename: huffman_config.py

import sys
from dataclasses import dataclass

DEFAULT_GROUP_SIZE = 8
MAX_GROUP_SIZE = 8
DEFAULT_ALPHABET_SIZE = sys.maxunicode + 1


@dataclass(frozen=True)
class CodecConfig:
    group_size: int = DEFAULT_GROUP_SIZE
    alphabet_size: int = DEFAULT_ALPHABET_SIZE

    def validate(self):
        if not 1 <= self.group_size <= MAX_GROUP_SIZE:
            raise ValueError(
                f"group_size must be between 1 and {MAX_GROUP_SIZE}, got {self.group_size}"
            )
        if self.alphabet_size <= 0:
            raise ValueError(f"alphabet_size must be positive, got {self.alphabet_size}")
        return self
