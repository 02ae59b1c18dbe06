# filename: huffman_errors.py


class HuffmanError(Exception):
    pass


class ConfigurationError(HuffmanError):
    """The counted alphabet cannot form a binary tree."""

    def __init__(self, distinct, message=None):
        self.distinct = distinct
        if message is None:
            message = (
                "need at least 2 distinct symbols to build a Huffman tree, got %d"
                % distinct
            )
        super().__init__(message)


class RepresentationLimitError(HuffmanError):
    def __init__(self, length, limit):
        self.length = length
        self.limit = limit
        super().__init__("code length %d outside 1..%d bits" % (length, limit))


class ContractViolation(HuffmanError):
    """Encoder was handed a byte that has no code in the table."""

    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__("no code assigned for symbol 0x%02x" % symbol)


class TruncatedStreamError(HuffmanError):
    def __init__(self, expected, decoded):
        self.expected = expected
        self.decoded = decoded
        super().__init__(
            "bit stream exhausted after %d of %d symbols" % (decoded, expected)
        )
