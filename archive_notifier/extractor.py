"""Detect newly added external_link values in diff text."""

from typing import List

LINK_KEY = '"external_link"'
LINK_PREFIX = '"external_link": "'


def extract_external_link_changes(diff_text: str) -> List[str]:
    """
    Extract external_link additions from a unified diff.

    This is a line-based text scan, not a structural JSON diff: only added
    lines that contain the exact `"external_link": "<value>"` pattern count.
    Order and duplicates are preserved.

    Args:
        diff_text: Raw `git diff` output.

    Returns:
        The added, non-blank external_link values.
    """
    changes = []
    for line in diff_text.split("\n"):
        if not line.startswith("+") or line.strip() == "+" or LINK_KEY not in line:
            continue
        start = line.find(LINK_PREFIX)
        if start == -1:
            continue
        start += len(LINK_PREFIX)
        end = line.find('"', start)
        if end <= start:
            continue
        value = line[start:end]
        if value.strip():
            changes.append(value)
    return changes
