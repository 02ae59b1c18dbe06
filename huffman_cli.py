#!/usr/bin/env python3
# filename: huffman_cli.py

import argparse
import io
import logging
import os
import sys

from bitstream import iter_file_bytes
from huffman_core import HuffmanLogic
from huffman_errors import HuffmanError
from huffman_service import decode, encode, flush_padded

logger = logging.getLogger(__name__)


def format_code_table(codes):
    return "\n".join("%s\t%s" % (chr(symbol), code.to01()) for symbol, code in codes.assigned())


def write_code_table(codes, out):
    # bytes above 0x7f are escaped when the stream cannot encode them
    encoding = getattr(out, "encoding", None) or "utf-8"
    table = format_code_table(codes).encode(encoding, "backslashreplace").decode(encoding)
    print(table, file=out)


def run(input_path, output_path, show_table=True, out=None):
    """Count, build, encode into memory, then decode into ``output_path``."""
    out = out if out is not None else sys.stdout
    logic = HuffmanLogic()

    with open(input_path, "rb") as infile:
        counts = logic.count_symbols(iter_file_bytes(infile))
        tree = logic.build_tree(counts)
        codes = logic.generate_codes(tree)
        if show_table:
            write_code_table(codes, out)

        encoded = io.BytesIO()
        infile.seek(0)
        remainder = encode(iter_file_bytes(infile), encoded, codes)
        padding = flush_padded(remainder, encoded)

    logger.info("encoded %d bytes into %d bytes (%d padding bits)",
                counts.total, encoded.tell(), padding)

    try:
        with open(output_path, "wb") as outfile:
            decoded = decode(encoded.getvalue(), outfile, tree, counts.total)
    except HuffmanError:
        os.remove(output_path)
        raise

    logger.info("decoded %d bytes into %s", decoded, output_path)
    return decoded


def build_parser(prog=None):
    parser = argparse.ArgumentParser(
        prog=prog, description="Huffman encode a file and decode it back out")
    parser.add_argument("input", nargs="?", help="file to compress")
    parser.add_argument("output", nargs="?", help="where the decoded bytes are written")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--no-table", action="store_true", help="do not print the code table")
    return parser


def main(argv=None):
    parser = build_parser()
    # anything past the two file names is ignored
    args, extra = parser.parse_known_args(argv)
    if extra:
        logger.debug("ignoring extra arguments: %s", " ".join(extra))

    if args.input is None or args.output is None:
        print("incorrect arguments")
        print("usage: %s <input-filename> <output-filename>" % parser.prog)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        run(args.input, args.output, show_table=not args.no_table)
    except (HuffmanError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
