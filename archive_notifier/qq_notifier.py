"""Group message delivery through the QQ bot HTTP API."""

import json
import logging

import requests
import urllib3

from .config import BotConfig
from .deadline import DeadlineExceeded, call_with_deadline
from .models import NotificationPayload

logger = logging.getLogger(__name__)


def build_request_body(payload: NotificationPayload, config: BotConfig) -> dict:
    """Wrap message segments in the send_group_msg envelope."""
    return {
        "group_id": config.group_id,
        "message": payload.to_message(),
    }


def send_notification(
    payload: NotificationPayload,
    config: BotConfig,
    timeout: float = 30.0,
    verify_tls: bool = False,
) -> bool:
    """
    Send a group message via the bot API.

    Args:
        payload: Message segments to send.
        config: Bot endpoint and credentials.
        timeout: Limit in seconds for the whole request, response included.
        verify_tls: Whether to validate the endpoint's TLS certificate.

    Returns:
        True if the bot answered with a 2xx status, False otherwise.
    """
    if not all([config.url, config.host, config.group_id, config.token]):
        logger.error("Error: Missing bot configuration; not sending notification.")
        return False

    if not verify_tls:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    url = f"{config.url}/send_group_msg"
    headers = {
        "Authorization": f"Bearer {config.token}",
        "Content-Type": "application/json",
        "Host": config.host,
    }
    body = build_request_body(payload, config)
    logger.debug(f"POST {url} ({len(json.dumps(body))} bytes)")

    try:
        response = call_with_deadline(
            timeout,
            requests.post,
            url,
            json=body,
            headers=headers,
            timeout=timeout,
            verify=verify_tls,
        )
    except (DeadlineExceeded, requests.Timeout):
        logger.error("Error sending notification: Request timeout")
        return False
    except Exception as e:
        logger.error(f"Error sending notification: {e}")
        return False

    if 200 <= response.status_code < 300:
        logger.info("Notification sent successfully")
        logger.info(f"Response: {response.text}")
        return True

    logger.error(f"Error sending notification: HTTP {response.status_code}")
    logger.error(f"Response: {response.text}")
    return False
