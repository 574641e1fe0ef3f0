"""Run-wide settings, built once from the command line."""

from dataclasses import dataclass, field
from pathlib import Path

from bmregression.config import DEFAULT_TAG


@dataclass(frozen=True)
class Settings:
    """Immutable bundle of options shared by every regression in one invocation.

    Attributes:
        source_root: Checked-out example sources
        catalog_root: Checked-out regression catalog
        tags: Requested tag set
        timeout: Seconds allowed per regression command, ``None`` for no limit
        report_file: Where to write a YAML report, ``None`` for no report
    """

    source_root: Path
    catalog_root: Path
    tags: frozenset[str] = field(default_factory=lambda: frozenset({DEFAULT_TAG}))
    timeout: float | None = None
    report_file: Path | None = None
