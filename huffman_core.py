# filename: huffman_core.py

import heapq
import itertools
import logging
from collections import Counter

from bitarray import bitarray, frozenbitarray

from bitstream import BIT_ENDIAN
from huffman_errors import ConfigurationError, RepresentationLimitError

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 256
MAX_CODE_BITS = 255


class SymbolCounts:
    """Occurrence count for every possible byte value, unseen bytes at 0."""

    def __init__(self, counts):
        counts = list(counts)
        if len(counts) != ALPHABET_SIZE:
            raise ValueError("expected %d counts, got %d" % (ALPHABET_SIZE, len(counts)))
        self.counts = counts

    def __getitem__(self, symbol):
        return self.counts[symbol]

    @property
    def total(self):
        return sum(self.counts)

    @property
    def distinct(self):
        return sum(1 for count in self.counts if count > 0)

    def symbols(self):
        return [symbol for symbol, count in enumerate(self.counts) if count > 0]

    def __repr__(self):
        seen = ", ".join("%d: %d" % (s, self.counts[s]) for s in self.symbols())
        return "SymbolCounts({%s})" % seen


class HuffLeaf:
    is_leaf = True

    def __init__(self, symbol, weight=0):
        self.symbol = symbol
        self.weight = weight

    def __repr__(self):
        return "HuffLeaf(%d, weight=%d)" % (self.symbol, self.weight)


class HuffParent:
    is_leaf = False

    def __init__(self, zero, one):
        self.zero = zero
        self.one = one
        self.weight = zero.weight + one.weight

    def leaves(self):
        # zero subtree first, so leaves come out in code order
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.append(node.one)
                stack.append(node.zero)

    def depth(self):
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            if node.is_leaf:
                deepest = max(deepest, level)
            else:
                stack.append((node.zero, level + 1))
                stack.append((node.one, level + 1))
        return deepest

    def __repr__(self):
        return "HuffParent(%r, %r)" % (self.zero, self.one)


class SymbolCode:
    """Packed bit string for one symbol. The empty code means no code assigned."""

    __slots__ = ("bits",)

    def __init__(self, bits=None):
        if bits is None:
            bits = []
        self.bits = frozenbitarray(bits, endian=BIT_ENDIAN)

    @classmethod
    def from_bits(cls, bits):
        if not 0 < len(bits) <= MAX_CODE_BITS:
            raise RepresentationLimitError(len(bits), MAX_CODE_BITS)
        return cls(bits)

    def bit_len(self):
        return len(self.bits)

    def get_bit(self, index):
        return self.bits[index]

    def is_prefix_of(self, other):
        return len(self.bits) <= len(other.bits) and other.bits[: len(self.bits)] == self.bits

    def to01(self):
        return self.bits.to01()

    def __len__(self):
        return len(self.bits)

    def __eq__(self, other):
        if not isinstance(other, SymbolCode):
            return NotImplemented
        return self.bits == other.bits

    def __hash__(self):
        return hash(self.bits)

    def __str__(self):
        return self.to01()

    def __repr__(self):
        return "SymbolCode(%r)" % self.to01()


NO_CODE = SymbolCode()


class SymbolCodes:
    def __init__(self, codes=None):
        if codes is None:
            codes = [NO_CODE] * ALPHABET_SIZE
        codes = list(codes)
        if len(codes) != ALPHABET_SIZE:
            raise ValueError("expected %d codes, got %d" % (ALPHABET_SIZE, len(codes)))
        self.codes = codes

    def __getitem__(self, symbol):
        return self.codes[symbol]

    def get(self, symbol):
        return self.codes[symbol]

    def assigned(self):
        for symbol, code in enumerate(self.codes):
            if code.bit_len() > 0:
                yield symbol, code


class HuffmanLogic:
    def count_symbols(self, data):
        # single pass; data may be bytes or any iterable of byte values
        seen = Counter(data)
        counts = [0] * ALPHABET_SIZE
        for symbol, count in seen.items():
            counts[symbol] = count
        return SymbolCounts(counts)

    def build_tree(self, counts, on_merge=None):
        # Equal weights pop in insertion order: leaves by ascending symbol,
        # then merged parents in the order they were created.
        sequence = itertools.count()
        priority_queue = [
            (counts[symbol], next(sequence), HuffLeaf(symbol, counts[symbol]))
            for symbol in counts.symbols()
        ]
        if len(priority_queue) < 2:
            raise ConfigurationError(len(priority_queue))
        heapq.heapify(priority_queue)

        while len(priority_queue) > 1:
            _, _, first = heapq.heappop(priority_queue)
            _, _, second = heapq.heappop(priority_queue)
            merged = HuffParent(first, second)
            if on_merge is not None:
                on_merge(first, second, merged)
            heapq.heappush(priority_queue, (merged.weight, next(sequence), merged))

        root = priority_queue[0][2]
        logger.debug("built Huffman tree: %d leaves, weight %d, depth %d",
                     counts.distinct, root.weight, root.depth())
        return root

    def generate_codes(self, tree):
        if tree.is_leaf:
            raise ConfigurationError(1, "must be passed a non-leaf node")

        codes = [NO_CODE] * ALPHABET_SIZE
        stack = [(tree, bitarray(endian=BIT_ENDIAN))]
        while stack:
            node, path = stack.pop()
            if node.is_leaf:
                codes[node.symbol] = SymbolCode.from_bits(path)
                continue
            if len(path) >= MAX_CODE_BITS:
                raise RepresentationLimitError(len(path) + 1, MAX_CODE_BITS)
            one = path.copy()
            one.append(1)
            zero = path.copy()
            zero.append(0)
            stack.append((node.one, one))
            stack.append((node.zero, zero))

        return SymbolCodes(codes)
