"""
Metadata record of a point stream.

The record is a JSON object with the fields ``min_lon``, ``max_lon``, ``min_lat`` and ``max_lat``. When no point
was accepted, the minimums are ``Infinity`` and the maximums ``-Infinity`` (the unchanged sentinels of the
bounding box). A box around a single point has equal finite minimum and maximum, so the two cases cannot be
confused. Optionally, ``num_nodes`` and ``num_points`` are added.
"""
import json
import logging
from pathlib import Path
from typing import Optional, TextIO, Union

import numpy as np

from osmpoints.bbox import BoundingBox

logger = logging.getLogger(__name__)


def _shortest_float(value) -> float:
    # shortest decimal that round-trips to the same float32, e.g. -0.12 instead of -0.11999999731779099
    return float(str(np.float32(value)))


def metadata_record(bbox: BoundingBox, counts: Optional[dict] = None) -> dict:
    record = {field: _shortest_float(value) for field, value in bbox.as_dict().items()}
    if counts:
        record.update({key: int(value) for key, value in counts.items()})
    return record


def write_metadata(bbox: BoundingBox, sink: TextIO, counts: Optional[dict] = None, indent: Optional[int] = None):
    """Serialize the bounding box (and optional counters) to the sink in a single write."""
    if bbox.is_empty:
        logger.warning("No points were accepted, the metadata bounding box holds the infinity sentinels.")
    record = metadata_record(bbox, counts)
    sink.write(json.dumps(record, indent=indent))
    logger.debug("Metadata written: %s", record)


def read_metadata(source: Union[str, Path, TextIO]) -> dict:
    if isinstance(source, (str, Path)):
        with open(source, 'r', encoding="UTF-8") as f:
            return json.load(f)
    return json.load(source)
