import logging
import re
from fractions import Fraction
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from osmpoints.bbox import BoundingBox
from osmpoints.encoder import PointWriter

NODE_ELEMENT = "node"
LAT_ATTRIBUTE = "lat"
LON_ATTRIBUTE = "lon"

DECIMAL_REGEX = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')

logger = logging.getLogger(__name__)


def parse_coordinate(text: str) -> Optional[np.float32]:
    """Return the decimal literal as float32, or None if it is not a finite decimal number."""
    if not DECIMAL_REGEX.fullmatch(text):
        return None
    # values beyond the float32 range become inf and are rejected below
    with np.errstate(over='ignore'):
        wide = float(text)
        value = np.float32(wide)
    if not np.isfinite(value):
        return None
    if float(value) == wide:
        return value

    with np.errstate(over='ignore'):
        neighbour = np.nextafter(value, np.float32(np.inf if wide > value else -np.inf))
    if not np.isfinite(neighbour):
        return value

    # the float64 value can sit exactly halfway between two float32 values although the decimal does not;
    # settle such ties with the exact decimal so that the result is rounded only once
    midpoint = (Fraction(float(value)) + Fraction(float(neighbour))) / 2
    if Fraction(wide) != midpoint:
        return value
    exact = Fraction(text)
    if exact == midpoint:
        return value
    if abs(exact - Fraction(float(neighbour))) < abs(exact - Fraction(float(value))):
        return neighbour
    return value


def extract_coordinates(attributes: Iterable[Tuple[str, str]]) -> Optional[Tuple[np.float32, np.float32]]:
    """Return (lon, lat) of a node element, or None if either attribute is missing or invalid.

    Attribute names are matched exactly; when one is repeated, the last occurrence wins.
    """
    lat_text = None
    lon_text = None
    for name, value in attributes:
        if name == LAT_ATTRIBUTE:
            lat_text = value
        elif name == LON_ATTRIBUTE:
            lon_text = value

    if lat_text is None or lon_text is None:
        return None

    lat = parse_coordinate(lat_text)
    lon = parse_coordinate(lon_text)
    if lat is None or lon is None:
        return None
    return lon, lat


class Session:
    """State of one conversion run: the point writer, the bounding box and the node counters."""

    def __init__(self, points_out: PointWriter):
        self.points_out = points_out
        self.bbox = BoundingBox()
        self.num_nodes = 0
        self.num_points = 0

    @property
    def num_skipped(self) -> int:
        return self.num_nodes - self.num_points

    def handle_element(self, name: str, attributes: Sequence[Tuple[str, str]]):
        if name != NODE_ELEMENT:
            return

        self.num_nodes += 1

        coordinates = extract_coordinates(attributes)
        if coordinates is None:
            logger.debug("Skipping node #%d without valid lat/lon: %s", self.num_nodes, attributes)
            return

        lon, lat = coordinates
        self.bbox.update(lon, lat)
        self.points_out.emit(lon, lat)
        self.num_points += 1
