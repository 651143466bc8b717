from pathlib import Path

import pytest

from osmpoints.config import dict2obj, merge_dicts, parse_config_file
from osmpoints.exceptions import InvalidInputError, MissingInputError


def test_defaults():
    config = parse_config_file()

    assert config.log_level == 'INFO'
    assert config.reader.chunk_size == 4096
    assert config.encoder.batch_size == 4096
    assert config.metadata.include_counts is False
    assert config.metadata.indent is None
    assert config.output.remove_on_error is True
    assert config.progress is False


def test_user_file_is_merged_over_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("reader:\n  chunk_size: 65536\nmetadata:\n  indent: 2\nlog_dir: ./logs\n")

    config = parse_config_file(config_file)

    assert config.reader.chunk_size == 65536
    assert config.metadata.indent == 2
    assert config.metadata.include_counts is False
    assert config.encoder.batch_size == 4096
    assert config.log_dir == tmp_path.resolve() / "logs"
    assert config.config_dir == tmp_path.resolve()


def test_overrides_win_over_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("reader:\n  chunk_size: 65536\n")

    config = parse_config_file(config_file, {'reader': {'chunk_size': 10}, 'progress': True})

    assert config.reader.chunk_size == 10
    assert config.progress is True


def test_empty_user_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")

    assert parse_config_file(config_file).reader.chunk_size == 4096


def test_missing_config_file(tmp_path):
    with pytest.raises(MissingInputError, match="does not exist"):
        parse_config_file(tmp_path / "missing.yaml")


@pytest.mark.parametrize("overrides", [
    {'reader': {'chunk_size': 0}},
    {'reader': {'chunk_size': 'big'}},
    {'encoder': {'batch_size': -5}},
    {'encoder': {'batch_size': True}},
    {'metadata': {'indent': -1}},
])
def test_invalid_values(overrides):
    with pytest.raises(InvalidInputError):
        parse_config_file(overrides=overrides)


def test_merge_dicts_is_recursive():
    merged = merge_dicts({'a': {'b': 1, 'c': 2}, 'd': 3}, {'a': {'c': 4}, 'e': 5})
    assert merged == {'a': {'b': 1, 'c': 4}, 'd': 3, 'e': 5}


def test_dict2obj():
    obj = dict2obj({'a': {'b': [{'c': 1}]}, 'path': 'x'})
    assert obj.a.b[0].c == 1
    assert obj.path == 'x'
    assert not isinstance(obj.path, Path)
