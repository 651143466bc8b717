import logging
import os
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, TextIO, Union

from tqdm import tqdm

from osmpoints.config import parse_config_file
from osmpoints.decoder import iter_start_elements
from osmpoints.encoder import PointWriter
from osmpoints.exceptions import MissingInputError
from osmpoints.metadata import write_metadata
from osmpoints.nodes import Session
from osmpoints.reader import BoundedReader

logger = logging.getLogger(__name__)


def _track_progress(chunks: Iterable[bytes], bar: tqdm) -> Iterator[bytes]:
    for chunk in chunks:
        yield chunk
        bar.update(len(chunk))


def convert(xml_in: BinaryIO, points_out: BinaryIO, metadata_out: TextIO, config=None,
            total_bytes: int | None = None) -> Session:
    """Stream the XML from xml_in, write the node points to points_out and the bounding box to metadata_out.

    Malformed XML raises osmpoints.exceptions.ParseError; in that case the metadata is not written and the
    point stream must be discarded.
    """
    if config is None:
        config = parse_config_file()

    reader = BoundedReader(xml_in, config.reader.chunk_size)
    session = Session(PointWriter(points_out, config.encoder.batch_size))

    with tqdm(total=total_bytes, unit="B", unit_scale=True, desc="Parsing XML", disable=not config.progress) as bar:
        for element in iter_start_elements(_track_progress(reader.chunks(), bar)):
            session.handle_element(element.name, element.attributes)

    session.points_out.flush()

    counts = None
    if config.metadata.include_counts:
        counts = {"num_nodes": session.num_nodes, "num_points": session.num_points}
    write_metadata(session.bbox, metadata_out, counts=counts, indent=config.metadata.indent)

    logger.info("Processed %d bytes: %d nodes, %d points written, %d nodes skipped",
                reader.bytes_read, session.num_nodes, session.num_points, session.num_skipped)
    return session


def _remove_outputs(*paths: Path):
    for path in paths:
        if os.path.exists(path):
            os.remove(path)
            logger.info("Removed incomplete output file: %s", path)


def convert_files(input_file: Union[str, Path], points_file: Union[str, Path], metadata_file: Union[str, Path],
                  config=None) -> Session:
    """Open the three files and run the conversion. All files are closed on every exit path."""
    if config is None:
        config = parse_config_file()

    input_file, points_file, metadata_file = Path(input_file), Path(points_file), Path(metadata_file)
    if not input_file.is_file():
        raise MissingInputError(f"Input file '{input_file}' does not exist.")

    logger.info("Converting %s -> points: %s, metadata: %s", input_file, points_file, metadata_file)
    # only files created by this run are removed on failure
    opened_outputs = []
    try:
        with ExitStack() as stack:
            xml_in = stack.enter_context(open(input_file, 'rb'))
            points_out = stack.enter_context(open(points_file, 'wb'))
            opened_outputs.append(points_file)
            metadata_out = stack.enter_context(open(metadata_file, 'w', encoding="UTF-8"))
            opened_outputs.append(metadata_file)
            return convert(xml_in, points_out, metadata_out, config, total_bytes=input_file.stat().st_size)
    except Exception:
        if config.output.remove_on_error:
            _remove_outputs(*opened_outputs)
        raise
