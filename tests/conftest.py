"""Shared fixtures for bmregression tests.

Provides factory fixtures for building self-contained workspaces (an example-source tree and a regression catalog)
and for invoking the CLI entry point programmatically.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from ruamel.yaml import YAML

from bmregression.cli import main

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Create and return an ``examples/`` directory inside the test's tmp_path."""
    d = tmp_path / "examples"
    d.mkdir()
    return d


@pytest.fixture
def catalog_root(tmp_path: Path) -> Path:
    """Create and return a ``regressiondata/`` directory inside the test's tmp_path."""
    d = tmp_path / "regressiondata"
    d.mkdir()
    return d


@pytest.fixture
def make_case(source_root: Path, catalog_root: Path):
    """Factory fixture: write a regression case into the catalog and create its base directory.

    ``expected`` is written to the case's ``targetdata`` file when given. ``config_text`` replaces the generated
    ``config.yaml`` verbatim, for malformed configurations.
    """

    def _factory(
        name: str,
        regcommand: str = "printf 'A\\n' > out.txt",
        regbase: str = "project",
        sourcedata: str = "out.txt",
        targetdata: str = "expected.txt",
        tags: list[str] | None = None,
        expected: str | bytes | None = None,
        config_text: str | None = None,
    ) -> Path:
        case_dir = catalog_root / name
        case_dir.mkdir()
        (source_root / regbase).mkdir(parents=True, exist_ok=True)

        config_file = case_dir / "config.yaml"
        if config_text is not None:
            config_file.write_text(textwrap.dedent(config_text))
        else:
            data = {
                "regbase": regbase,
                "sourcedata": sourcedata,
                "targetdata": targetdata,
                "regcommand": regcommand,
            }
            if tags is not None:
                data["tags"] = tags
            with config_file.open("w") as f:
                YAML().dump(data, f)

        if expected is not None:
            content = expected.encode() if isinstance(expected, str) else expected
            (case_dir / targetdata).write_bytes(content)
        return case_dir

    return _factory


@pytest.fixture
def run_bmregression(source_root: Path, catalog_root: Path):
    """Factory fixture: invoke ``bmregression.cli.main()`` on the workspace and return its exit code."""

    def _factory(*command: str, extra_args: list[str] | None = None) -> int:
        args = ["--examples-dir", str(source_root), "--data-dir", str(catalog_root)]
        if extra_args:
            args.extend(extra_args)
        args.extend(command)
        return main(args)

    return _factory
