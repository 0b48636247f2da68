"""Archive data loading and lookup."""

import json
import logging
from typing import Iterable, List

from .models import Record

logger = logging.getLogger(__name__)


def load_archive_data(path: str) -> List[Record]:
    """
    Load the archive data file.

    Args:
        path: Path to a UTF-8 JSON file holding a list of records.

    Returns:
        The records in file order, or an empty list if the file cannot be
        read or parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error loading {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.error(f"Error loading {path}: expected a JSON list, got {type(data).__name__}")
        return []

    records = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"Skipping archive entry #{index}: not an object")
            continue
        records.append(Record.from_dict(item))
    logger.debug(f"Loaded {len(records)} records from {path}")
    return records


def find_entries_by_external_link(records: List[Record], external_links: Iterable[str]) -> List[Record]:
    """
    Resolve each link to the first record with exactly that external_link.

    Links without a match are dropped. A link given twice resolves twice.
    """
    found_entries = []
    for external_link in external_links:
        for record in records:
            if record.external_link == external_link:
                found_entries.append(record)
                break
        else:
            logger.debug(f"No archive entry for external_link {external_link!r}")
    return found_entries
