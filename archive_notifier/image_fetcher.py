"""Thumbnail download for image message segments."""

import base64
import logging
from time import monotonic
from typing import Optional

import requests
import urllib3

from .deadline import DeadlineExceeded, call_with_deadline

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _fetch_body(image_url: str, timeout: float, deadline: float, verify_tls: bool) -> Optional[bytes]:
    started = monotonic()
    with requests.get(
        image_url,
        timeout=timeout,
        allow_redirects=True,
        verify=verify_tls,
        stream=True,
    ) as response:
        if not 200 <= response.status_code < 300:
            logger.error(f"Error downloading image: HTTP {response.status_code} for {image_url}")
            return None
        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            # Stops an abandoned download from reading on after the caller gave up.
            if monotonic() - started > deadline:
                return None
            chunks.append(chunk)
    return b"".join(chunks)


def download_image_as_base64(
    image_url: str,
    timeout: float = 10.0,
    deadline: float = 15.0,
    verify_tls: bool = False,
) -> Optional[str]:
    """
    Download an image and encode it for inline sending.

    Redirects are followed. Certificate checks are skipped unless
    verify_tls is set, since thumbnails may live on hosts with broken chains.

    Args:
        image_url: URL of the image.
        timeout: Connect/read timeout in seconds.
        deadline: Maximum seconds for the whole download.
        verify_tls: Whether to validate TLS certificates.

    Returns:
        "base64://<data>" on success, None on any failure.
    """
    if not verify_tls:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    try:
        body = call_with_deadline(deadline, _fetch_body, image_url, timeout, deadline, verify_tls)
    except DeadlineExceeded:
        logger.error(f"Error downloading image {image_url}: exceeded {deadline}s")
        return None
    except requests.Timeout:
        logger.error(f"Error downloading image {image_url}: timed out after {timeout}s")
        return None
    except Exception as e:
        logger.error(f"Error downloading image {image_url}: {e}")
        return None

    if body is None:
        return None
    if not body:
        logger.error(f"Error downloading image: empty response from {image_url}")
        return None

    image_data = base64.b64encode(body).decode("utf-8")
    logger.debug(f"Downloaded {len(body)} bytes from {image_url}")
    return f"base64://{image_data}"
