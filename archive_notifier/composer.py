"""Build chat messages for archive records."""

import logging
from typing import Callable, Optional

from .config import DEFAULT_REPLAY_BASE_URL
from .image_fetcher import download_image_as_base64
from .models import MessageSegment, NotificationPayload, Record

logger = logging.getLogger(__name__)

ImageFetcher = Callable[[str], Optional[str]]


def format_message_text(record: Record, replay_base_url: str = DEFAULT_REPLAY_BASE_URL) -> str:
    """Render the text block recipients see."""
    title = record.name if record.name is not None else "Unknown Title"
    description = record.description if record.description is not None else ""
    external_link = record.external_link or ""
    return (
        f"title: {title}\n\n"
        f"description:{description}\n\n"
        f"replay: {replay_base_url}{external_link}"
    )


def create_notification_message(
    record: Record,
    fetch_image: ImageFetcher = download_image_as_base64,
    replay_base_url: str = DEFAULT_REPLAY_BASE_URL,
) -> NotificationPayload:
    """
    Create the notification payload for a record.

    The text segment is always present. An image segment follows only when
    the record has a thumbnail and it could be downloaded.

    Args:
        record: Archive record to announce.
        fetch_image: Returns "base64://..." data for a URL, or None.
        replay_base_url: Origin prepended to the record's external_link.
    """
    payload = NotificationPayload(
        segments=[MessageSegment.text(format_message_text(record, replay_base_url))]
    )

    if record.thumbnail_image_url:
        image = fetch_image(record.thumbnail_image_url)
        if image:
            payload.segments.append(MessageSegment.image(image))
        else:
            logger.warning(f"Sending without thumbnail for: {record.display_name}")

    return payload
