import logging
from typing import BinaryIO, Iterator

from osmpoints.exceptions import InvalidInputError

DEFAULT_CHUNK_SIZE = 4096

logger = logging.getLogger(__name__)


class BoundedReader:
    """Supply fixed-size byte chunks from a binary source.

    ``read`` fills the given buffer as far as the source allows and returns the number of bytes written;
    0 means end of input. Short reads are retried, so only the last chunk of the input can be partial.
    """

    def __init__(self, source: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if not isinstance(chunk_size, int) or chunk_size <= 0:
            raise InvalidInputError(f"Chunk size must be a positive integer, got {chunk_size!r}.")
        self.source = source
        self.chunk_size = chunk_size
        self.bytes_read = 0
        self._eof = False

    def _read_into(self, view: memoryview) -> int:
        readinto = getattr(self.source, 'readinto', None)
        if readinto is not None:
            count = readinto(view)
        else:
            data = self.source.read(len(view))
            count = len(data)
            view[:count] = data
        return count or 0

    def read(self, buffer) -> int:
        if self._eof:
            return 0

        view = memoryview(buffer).cast('B')
        filled = 0
        while filled < len(view):
            count = self._read_into(view[filled:])
            if count == 0:
                self._eof = True
                break
            filled += count

        self.bytes_read += filled
        return filled

    def chunks(self) -> Iterator[bytes]:
        """Yield the input as successive chunks of at most ``chunk_size`` bytes."""
        buffer = bytearray(self.chunk_size)
        while True:
            count = self.read(buffer)
            if count == 0:
                logger.debug("End of input reached after %d bytes", self.bytes_read)
                return
            yield bytes(buffer[:count])
