"""Acquisition of the example-source and catalog repositories.

When a root is not given on the command line it is cloned into a temporary directory that lives only as long as the
``resolve_roots`` context. Regression execution itself never clones anything: it works on the two local paths yielded
here.
"""

import logging
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from bmregression.exceptions import ProvisionError

EXAMPLES_URL = "https://github.com/BondMachineHQ/bmexamples.git"
DATA_URL = "https://github.com/BondMachineHQ/bmregressiondata.git"


def clone_repository(url: str, destination: Path) -> Path:
    """Clone *url* into *destination* and return *destination*."""

    logging.info(f"Cloning {url} to {destination}")
    try:
        result = subprocess.run(
            ["git", "clone", url, str(destination)],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise ProvisionError(f"cannot run git to clone {url}: {e}") from e

    if result.returncode != 0:
        raise ProvisionError(f"Error cloning repository {url}: {result.stderr.strip()}")
    return destination


@contextmanager
def resolve_roots(
    examples_dir: str | None,
    data_dir: str | None,
    examples_url: str = EXAMPLES_URL,
    data_url: str = DATA_URL,
) -> Iterator[tuple[Path, Path]]:
    """Yield ``(source_root, catalog_root)``, cloning whichever was not provided.

    Clones go to a temporary directory which is removed when the context exits, on success or error.
    """
    if examples_dir and data_dir:
        yield Path(examples_dir), Path(data_dir)
        return

    with tempfile.TemporaryDirectory(prefix="bmregression_") as temp_dir:
        logging.debug(f"Working directory: {temp_dir}")
        temp_path = Path(temp_dir)
        source_root = Path(examples_dir) if examples_dir else clone_repository(examples_url, temp_path / "examples")
        catalog_root = Path(data_dir) if data_dir else clone_repository(data_url, temp_path / "regressiondata")
        yield source_root, catalog_root
