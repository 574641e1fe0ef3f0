"""Comparison of produced and expected regression outputs."""

import difflib
from itertools import zip_longest

# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


def contents_match(actual: bytes, expected: bytes) -> bool:
    """Byte-for-byte equality; the only criterion for a passing run."""
    return actual == expected


def decode_for_display(data: bytes) -> str:
    """Decode file content for diff display, replacing undecodable bytes."""
    return data.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Side-by-side diff
# ---------------------------------------------------------------------------


def _display(line: str | None, column: int) -> str:
    """Render one line for a diff column; carriage returns show as ``^M``."""
    if line is None:
        return ""
    text = line.rstrip("\n").replace("\r", "^M").expandtabs()
    return text[:column]


def _row(left: str | None, marker: str, right: str | None, column: int) -> str:
    return f"{_display(left, column).ljust(column)} {marker} {_display(right, column)}".rstrip()


def side_by_side_diff(actual: str, expected: str, width: int = 130) -> str:
    """Render the differing lines of two texts side by side, suppressing common lines.

    The layout follows ``sdiff --suppress-common-lines``: the actual output on the left, the expected output on the
    right, and a marker between them:

    - ``|`` the line differs on both sides
    - ``<`` the line only exists in the actual output
    - ``>`` the line only exists in the expected output

    Both columns are cut to the same width.

    Args:
        actual: Content produced by the regression command
        expected: Content stored in the catalog
        width: Total width of a row

    Returns:
        The diff body, empty when both texts are identical.
    """
    column = (width - 3) // 2
    actual_lines = actual.splitlines(keepends=True)
    expected_lines = expected.splitlines(keepends=True)

    rows = []
    matcher = difflib.SequenceMatcher(None, actual_lines, expected_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        if tag == "delete":
            rows.extend(_row(line, "<", None, column) for line in actual_lines[i1:i2])
        elif tag == "insert":
            rows.extend(_row(None, ">", line, column) for line in expected_lines[j1:j2])
        else:
            for left, right in zip_longest(actual_lines[i1:i2], expected_lines[j1:j2]):
                if left is None:
                    rows.append(_row(None, ">", right, column))
                elif right is None:
                    rows.append(_row(left, "<", None, column))
                else:
                    rows.append(_row(left, "|", right, column))

    return "\n".join(rows)
