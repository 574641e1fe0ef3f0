"""Enumeration of the regression catalog."""

import logging
from collections.abc import Iterable
from pathlib import Path

from bmregression.config import extract_tags, read_raw_config
from bmregression.exceptions import CatalogUnreadable, RegressionError
from bmregression.tags import matches

RESERVED_ENTRIES = frozenset({".git"})


def discover(catalog_root: Path, name_pattern: str, requested_tags: Iterable[str]) -> list[str]:
    """Return the names of the cases selected by *name_pattern* and *requested_tags*.

    A case is selected when *name_pattern* is a substring of its name and at least one of its tags is requested.
    Entries whose configuration cannot be read are skipped, so one broken case does not hide the others. Names are
    returned sorted.

    Args:
        catalog_root: Directory holding one subdirectory per case
        name_pattern: Substring to look for in case names; empty matches all
        requested_tags: Tags to select

    Raises:
        CatalogUnreadable: *catalog_root* cannot be listed
    """
    requested = frozenset(requested_tags)
    logging.debug(f"Regressions matching: \"{name_pattern}\", tags: {sorted(requested)}")

    try:
        names = sorted(entry.name for entry in Path(catalog_root).iterdir())
    except OSError as e:
        raise CatalogUnreadable(f"cannot read regression catalog {catalog_root}: {e}") from e

    selected = []
    for name in names:
        if name in RESERVED_ENTRIES or name_pattern not in name:
            continue

        try:
            case_tags = extract_tags(read_raw_config(catalog_root, name))
        except RegressionError as e:
            logging.debug(f"Skipping {name}: {e}")
            continue

        logging.debug(f"Regression {name} has tags: {case_tags}")
        if matches(case_tags, requested):
            selected.append(name)

    return selected
