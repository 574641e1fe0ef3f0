"""Loading of per-case regression configurations.

Each case lives in its own subdirectory of the catalog root and is described by a ``config.yaml`` such as::

    regbase: basys3_blink             # directory inside the example sources
    sourcedata: working_dir/output.sv # file produced by the command, relative to regbase
    targetdata: output.sv             # expected file, relative to the case directory
    regcommand: make hdl              # shell command run inside regbase
    tags: [default, quick]            # optional, defaults to [default]
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from bmregression.exceptions import CaseMissing, ConfigInvalid, ConfigMissing

yaml = YAML(typ="safe")

CONFIG_FILENAME = "config.yaml"
DEFAULT_TAG = "default"
REQUIRED_KEYS = ("regbase", "sourcedata", "targetdata", "regcommand")
# Joined onto the source root, regbase and the case directory respectively
RELATIVE_PATH_KEYS = ("regbase", "sourcedata", "targetdata")


@dataclass(frozen=True)
class RegressionConfig:
    """Validated configuration of one regression case."""

    regbase: str
    sourcedata: str
    targetdata: str
    regcommand: str
    tags: tuple[str, ...] = (DEFAULT_TAG,)


def extract_tags(raw_config: Any) -> list[str]:
    """Return the tags declared in a raw configuration mapping.

    Falls back to ``["default"]`` when the field is absent or is not a list of strings.
    """
    tags = raw_config.get("tags") if isinstance(raw_config, dict) else None
    if isinstance(tags, list) and all(isinstance(tag, str) for tag in tags):
        return list(tags)
    return [DEFAULT_TAG]


def read_raw_config(catalog_root: Path, case_name: str) -> dict[str, Any]:
    """Parse ``config.yaml`` of *case_name* without validating its fields.

    Raises:
        CaseMissing: the case directory does not exist
        ConfigMissing: the case directory has no config file
        ConfigInvalid: the file is not a YAML mapping
    """
    case_dir = Path(catalog_root) / case_name
    if not case_dir.is_dir():
        raise CaseMissing(f"regression directory not found: {case_dir}")

    config_file = case_dir / CONFIG_FILENAME
    if not config_file.is_file():
        raise ConfigMissing(f"regression configuration file not found: {config_file}")

    try:
        with config_file.open() as f:
            data = yaml.load(f)
    except Exception as e:
        raise ConfigInvalid(f"failed to parse {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigInvalid(f"{config_file} does not contain a mapping")
    return data


def load_config(catalog_root: Path, case_name: str) -> RegressionConfig:
    """Load and validate the configuration of *case_name*.

    Args:
        catalog_root: Directory holding one subdirectory per case
        case_name: Name of the case subdirectory

    Returns:
        The validated configuration

    Raises:
        CaseMissing, ConfigMissing, ConfigInvalid
    """
    data = read_raw_config(catalog_root, case_name)
    logging.debug(f"Regression {case_name} configuration: {data}")

    values = {}
    for key in REQUIRED_KEYS:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise ConfigInvalid(f"'{key}' must be a non-empty string in {case_name}/{CONFIG_FILENAME}")
        if key in RELATIVE_PATH_KEYS and Path(value).is_absolute():
            raise ConfigInvalid(f"'{key}' must be a relative path in {case_name}/{CONFIG_FILENAME}: {value}")
        values[key] = value

    return RegressionConfig(tags=tuple(extract_tags(data)), **values)
