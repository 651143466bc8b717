import io
import types
from pathlib import Path

import pytest

from osmpoints.config import parse_config_file
from osmpoints.convert import convert
from osmpoints.metadata import read_metadata

TESTS_DIR = Path(__file__).parent / "data"


def read_test_file(name: str) -> bytes:
    with open(TESTS_DIR / name, 'rb') as f:
        return f.read()


def make_config(chunk_size: int = 4096, batch_size: int = 4096, include_counts: bool = False):
    return parse_config_file(overrides={
        'reader': {'chunk_size': chunk_size},
        'encoder': {'batch_size': batch_size},
        'metadata': {'include_counts': include_counts},
    })


def run_conversion(xml: bytes, **config_kwargs):
    """Run the conversion on in-memory streams and return (point bytes, metadata dict, session)."""
    points_out = io.BytesIO()
    metadata_out = io.StringIO()
    session = convert(io.BytesIO(xml), points_out, metadata_out, make_config(**config_kwargs))
    metadata_out.seek(0)
    return types.SimpleNamespace(
        points=points_out.getvalue(),
        metadata=read_metadata(metadata_out),
        session=session,
    )


@pytest.fixture
def london_paris():
    return read_test_file("london_paris.osm")


@pytest.fixture
def mixed_nodes():
    return read_test_file("mixed_nodes.osm")


@pytest.fixture
def bounding_box():
    return read_test_file("bbox_test.osm")


@pytest.fixture
def test_files(tmp_path):
    """Output paths for a conversion run in a temporary directory."""
    return tmp_path / "points.bin", tmp_path / "metadata.json"
