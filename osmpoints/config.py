import types
from pathlib import Path
from typing import Union

import yaml

from osmpoints.exceptions import InvalidInputError, MissingInputError

DEFAULT_CONFIG_YAML = Path(__file__).parent / "default_config.yaml"


def dict2obj(data):
    """Convert dictionary to object. Taken from https://stackoverflow.com/questions/66208077"""
    if type(data) is list:
        return list(map(dict2obj, data))
    elif type(data) is dict:
        sns = types.SimpleNamespace()
        for key, value in data.items():
            setattr(sns, key, dict2obj(value))
        return sns
    else:
        return data


def expand_relative_paths(config_object: types.SimpleNamespace, root_dir: Path):
    for key, value in vars(config_object).items():
        if isinstance(value, str):
            if value.startswith('./'):
                setattr(config_object, key, root_dir / value[2:])
        # for objects, call recursively
        elif isinstance(value, types.SimpleNamespace):
            expand_relative_paths(value, root_dir)


def merge_dicts(dict_a, dict_b):
    merged = dict_a.copy()  # Start with a copy of the first dictionary

    for key, value in dict_b.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value

    return merged


def load_yaml(path: Path) -> dict:
    with open(path, 'r', encoding="UTF-8") as file:
        return yaml.safe_load(file) or {}


def validate_config(config):
    """Raise InvalidInputError if a size setting is not a positive integer."""
    for section, key in (('reader', 'chunk_size'), ('encoder', 'batch_size')):
        value = getattr(getattr(config, section), key)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise InvalidInputError(f"{section}.{key} must be a positive integer, got {value!r}.")
    indent = config.metadata.indent
    if indent is not None and (not isinstance(indent, int) or indent < 0):
        raise InvalidInputError(f"metadata.indent must be null or a non-negative integer, got {indent!r}.")


def parse_config_file(config_file: Union[Path, str, None] = None, overrides: dict | None = None):
    """Load the default configuration, merge in the user config file and overrides, and return it as an object.

    Relative paths starting with './' are expanded against the directory of the user config file.
    """
    config_dict = load_yaml(DEFAULT_CONFIG_YAML)
    config_dir = Path.cwd()

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise MissingInputError(f"Config file '{config_file}' does not exist.")
        config_dict = merge_dicts(config_dict, load_yaml(config_file))
        config_dir = config_file.resolve().parent

    if overrides:
        config_dict = merge_dicts(config_dict, overrides)

    config_object = dict2obj(config_dict)
    config_object.config_dir = config_dir
    expand_relative_paths(config_object, config_dir)
    validate_config(config_object)
    return config_object

