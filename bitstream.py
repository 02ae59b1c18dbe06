# filename: bitstream.py

# Bits are packed least-significant bit first inside each byte, on both the
# writing and the reading side.
BIT_ENDIAN = "little"

DEFAULT_CHUNK_SIZE = 64 * 1024


class BitIter:
    """Iterate the bits of a byte source, pulling a byte only when needed."""

    def __init__(self, data):
        self.inner = iter(data)
        self.cur = 0
        self.bit_index = 8

    def __iter__(self):
        return self

    def __next__(self):
        if self.bit_index == 8:
            # StopIteration from the byte source ends the bit stream too
            self.cur = next(self.inner)
            self.bit_index = 0

        bit = (self.cur >> self.bit_index) & 1
        self.bit_index += 1
        return bit


def iter_file_bytes(stream, chunk_size=DEFAULT_CHUNK_SIZE):
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield from chunk
