#!/usr/bin/env python3
"""
Command line front end for the Huffman text codec.

Run with:
    huffman-text compress notes.txt notes.huf
    huffman-text decompress notes.huf notes.out.txt
    huffman-text roundtrip notes.txt --group-size 7
"""
import argparse
import logging
import sys

from huffman_config import DEFAULT_ALPHABET_SIZE, DEFAULT_GROUP_SIZE, CodecConfig
from huffman_errors import HuffmanError
from huffman_service import HuffmanService

logger = logging.getLogger(__name__)


def read_text(path, encoding):
    # newline='' keeps line endings byte for byte
    with open(path, "r", encoding=encoding, newline="") as f:
        return f.read()


def write_text(path, text, encoding):
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(text)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huffman-text",
        description="Lossless Huffman compression of text files",
    )
    parser.add_argument("--encoding", default="utf-8", help="Text encoding of input/output files (default: utf-8)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log codec internals")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_codec_options(p):
        p.add_argument("--group-size", type=int, default=DEFAULT_GROUP_SIZE,
                       help=f"Bits stored per byte, 1-8 (default: {DEFAULT_GROUP_SIZE})")
        p.add_argument("--alphabet-size", type=int, default=DEFAULT_ALPHABET_SIZE,
                       help="Symbols with a code point at or above this value are dropped")

    compress = sub.add_parser("compress", help="Compress a text file")
    compress.add_argument("input")
    compress.add_argument("output")
    add_codec_options(compress)

    decompress = sub.add_parser("decompress", help="Decompress an artifact back to text")
    decompress.add_argument("input")
    decompress.add_argument("output")

    roundtrip = sub.add_parser("roundtrip", help="Compress and decompress in memory and compare")
    roundtrip.add_argument("input")
    add_codec_options(roundtrip)

    return parser


def configure_logging(args):
    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")


def run_compress(args):
    service = HuffmanService(CodecConfig(args.group_size, args.alphabet_size))
    text = read_text(args.input, args.encoding)
    compressed, stats = service.compress_with_stats(text)
    with open(args.output, "wb") as f:
        f.write(compressed)
    print(f"File successfully compressed and written to: {args.output}")
    print(f"  {stats.input_symbols} symbols -> {stats.artifact_bytes} bytes "
          f"({stats.distinct_symbols} distinct, padding {stats.padding})")


def run_decompress(args):
    with open(args.input, "rb") as f:
        compressed = f.read()
    text = HuffmanService().decompress(compressed)
    write_text(args.output, text, args.encoding)
    print(f"Decoded data written to file successfully and written to: {args.output}")


def run_roundtrip(args):
    service = HuffmanService(CodecConfig(args.group_size, args.alphabet_size))
    text = read_text(args.input, args.encoding)
    compressed, stats = service.compress_with_stats(text)
    lossless = service.decompress(compressed) == text
    print(f"{args.input}: {stats.input_symbols} symbols -> {stats.artifact_bytes} bytes")
    print(f"Is decompressed data the same as the original data?: {lossless}")
    return lossless


COMMANDS = {
    "compress": run_compress,
    "decompress": run_decompress,
    "roundtrip": run_roundtrip,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args)

    if args.command != "decompress":
        try:
            CodecConfig(args.group_size, args.alphabet_size).validate()
        except ValueError as e:
            parser.error(str(e))

    try:
        result = COMMANDS[args.command](args)
    except (HuffmanError, OSError, UnicodeError) as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0 if result is not False else 1


if __name__ == "__main__":
    sys.exit(main())
