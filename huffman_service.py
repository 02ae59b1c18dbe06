# filename: huffman_service.py

import io
import logging
from collections import namedtuple

from bitarray import bitarray

from bitstream import BIT_ENDIAN, DEFAULT_CHUNK_SIZE, BitIter
from huffman_core import HuffmanLogic
from huffman_errors import ConfigurationError, ContractViolation, TruncatedStreamError

logger = logging.getLogger(__name__)


def encode(data, output, codes):
    """Write the packed codes of ``data`` to ``output``.

    Every full byte is written as soon as it is complete. The trailing bits
    that do not fill a byte are returned unpadded; pass them to
    ``flush_padded`` to finish a stream.
    """
    table = codes.codes
    accumulator = bitarray(endian=BIT_ENDIAN)

    for symbol in data:
        code = table[symbol]
        if not code.bits:
            raise ContractViolation(symbol)
        accumulator.extend(code.bits)

        full_bits = len(accumulator) - len(accumulator) % 8
        if full_bits:
            output.write(accumulator[:full_bits].tobytes())
            del accumulator[:full_bits]

    return accumulator


def flush_padded(remainder, output):
    """Zero-pad the leftover bits to a whole byte and write it. Returns the pad size."""
    if len(remainder) >= 8:
        raise ValueError("remainder holds %d bits, expected fewer than 8" % len(remainder))
    if not remainder:
        return 0
    remainder = remainder.copy()
    padding = remainder.fill()
    output.write(remainder.tobytes())
    return padding


def decode(data, output, tree, symbol_count=None):
    """Walk ``tree`` once per bit of ``data`` and write each symbol reached.

    Without ``symbol_count`` every available bit is decoded, so zero padding
    in the last byte can come out as extra symbols. With it, decoding stops
    after exactly that many symbols.
    """
    if tree.is_leaf:
        raise ConfigurationError(1, "must be passed a non-leaf node")
    if symbol_count == 0:
        return 0

    pending = bytearray()
    decoded = 0
    node = tree
    for bit in BitIter(data):
        node = node.one if bit else node.zero
        if not node.is_leaf:
            continue
        pending.append(node.symbol)
        decoded += 1
        node = tree
        if decoded == symbol_count:
            break
        if len(pending) >= DEFAULT_CHUNK_SIZE:
            output.write(bytes(pending))
            pending.clear()

    if pending:
        output.write(bytes(pending))

    if symbol_count is not None and decoded < symbol_count:
        raise TruncatedStreamError(symbol_count, decoded)
    if node is not tree:
        logger.debug("bit stream ended inside a code, trailing bits dropped")
    return decoded


class CompressedPayload(namedtuple("CompressedPayload",
                                   "data symbol_count padding_bits tree codes")):
    __slots__ = ()

    @property
    def bit_length(self):
        return 8 * len(self.data) - self.padding_bits


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def compress(self, data):
        data = bytes(data)
        counts = self.logic.count_symbols(data)
        tree = self.logic.build_tree(counts)
        codes = self.logic.generate_codes(tree)

        out = io.BytesIO()
        remainder = encode(data, out, codes)
        padding = flush_padded(remainder, out)

        payload = CompressedPayload(out.getvalue(), counts.total, padding, tree, codes)
        logger.debug("compressed %d bytes into %d (%d bits, %d padding)",
                     len(data), len(payload.data), payload.bit_length, padding)
        return payload

    def decompress(self, payload):
        out = io.BytesIO()
        decode(payload.data, out, payload.tree, payload.symbol_count)
        return out.getvalue()
