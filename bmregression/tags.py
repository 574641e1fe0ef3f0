"""Tag selection for regression cases."""

from collections.abc import Iterable

from bmregression.config import DEFAULT_TAG


def parse_tag_option(text: str) -> frozenset[str]:
    """Turn a comma-separated ``--tag`` value into the requested tag set.

    Items are stripped and empty items dropped; an option with no usable item selects the default tag.

    >>> sorted(parse_tag_option("quick, hdl"))
    ['hdl', 'quick']
    """
    tags = frozenset(item.strip() for item in text.split(",") if item.strip())
    return tags or frozenset({DEFAULT_TAG})


def matches(case_tags: Iterable[str], requested: Iterable[str]) -> bool:
    """Return True when the case shares at least one tag with the request."""
    return not set(case_tags).isdisjoint(requested)
