import logging
import xml.etree.ElementTree as ET
from typing import Iterable, Iterator, List, NamedTuple, Tuple

from osmpoints.exceptions import ParseError

logger = logging.getLogger(__name__)


class StartElement(NamedTuple):
    """A recognized open tag: local element name and its attributes in document order."""
    name: str
    attributes: List[Tuple[str, str]]


def local_name(tag: str) -> str:
    """Strip the '{namespace}' prefix ElementTree puts in front of qualified tags."""
    if tag.startswith('{'):
        return tag.rpartition('}')[2]
    return tag


class ElementDecoder:
    """Incremental XML tokenizer that reports element starts.

    Bytes are pushed in with ``feed`` in chunks of any size; a tag split across two chunks is reported once
    the chunk completing it arrives. Finished elements are dropped from the tree right away, so memory use
    does not grow with the document size.
    """

    def __init__(self):
        self._parser = ET.XMLPullParser(events=("start", "end"))
        self._root = None
        self._depth = 0
        self._closed = False
        self.elements_seen = 0

    def _drain(self) -> List[StartElement]:
        starts = []
        try:
            for event, elem in self._parser.read_events():
                if event == "start":
                    if self._root is None:
                        self._root = elem
                    self._depth += 1
                    self.elements_seen += 1
                    starts.append(StartElement(local_name(elem.tag), list(elem.attrib.items())))
                else:
                    self._depth -= 1
                    elem.clear()
                    if self._depth == 1:
                        self._root.clear()
        except ET.ParseError as e:
            raise ParseError(f"Malformed XML: {e}", getattr(e, 'position', None)) from e
        return starts

    def feed(self, chunk: bytes) -> List[StartElement]:
        """Consume one chunk and return the element starts it completed."""
        if self._closed:
            raise ParseError("Data fed to the decoder after the end of input.")
        self._parser.feed(chunk)
        return self._drain()

    def close(self) -> List[StartElement]:
        """Signal end of input and check that the document is complete."""
        if self._closed:
            return []
        self._closed = True
        try:
            self._parser.close()
        except ET.ParseError as e:
            raise ParseError(f"Malformed XML: {e}", getattr(e, 'position', None)) from e
        starts = self._drain()
        logger.debug("Decoder closed after %d elements", self.elements_seen)
        return starts


def iter_start_elements(chunks: Iterable[bytes]) -> Iterator[StartElement]:
    """Lazily decode a sequence of byte chunks into element-start events."""
    decoder = ElementDecoder()
    for chunk in chunks:
        yield from decoder.feed(chunk)
    yield from decoder.close()
