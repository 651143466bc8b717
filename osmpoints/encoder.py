import logging
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np

from osmpoints.exceptions import InvalidInputError

# little-endian IEEE-754 single precision, independent of the host byte order
COORDINATE_DTYPE = np.dtype('<f4')
RECORD_SIZE = 2 * COORDINATE_DTYPE.itemsize

DEFAULT_BATCH_SIZE = 4096

logger = logging.getLogger(__name__)


class PointWriter:
    """Buffered writer of (lon, lat) records.

    Each record is 8 bytes: longitude then latitude, both as little-endian float32. Records are written
    in the order they were emitted, without any header or separator.
    """

    def __init__(self, sink: BinaryIO, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size <= 0:
            raise InvalidInputError(f"Batch size must be a positive integer, got {batch_size!r}.")
        self.sink = sink
        self._batch = np.empty((batch_size, 2), dtype=COORDINATE_DTYPE)
        self._pending = 0
        self.points_written = 0

    def emit(self, lon, lat):
        self._batch[self._pending] = (lon, lat)
        self._pending += 1
        self.points_written += 1
        if self._pending == len(self._batch):
            self._write_batch()

    def _write_batch(self):
        if self._pending:
            self.sink.write(self._batch[:self._pending].tobytes())
            self._pending = 0

    def flush(self):
        self._write_batch()
        if hasattr(self.sink, 'flush'):
            self.sink.flush()
        logger.debug("Point stream flushed, %d points written", self.points_written)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.flush()


def read_points(source: Union[bytes, str, Path, BinaryIO]) -> np.ndarray:
    """Decode a point stream into an array of shape (n, 2) holding (lon, lat) rows."""
    if isinstance(source, (str, Path)):
        with open(source, 'rb') as f:
            data = f.read()
    elif isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    else:
        data = source.read()

    if len(data) % RECORD_SIZE:
        raise InvalidInputError(
            f"Point stream length {len(data)} is not a multiple of the record size {RECORD_SIZE}.")
    return np.frombuffer(data, dtype=COORDINATE_DTYPE).reshape(-1, 2)
