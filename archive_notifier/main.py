"""Main entry point for the archive notifier."""

import argparse
import dataclasses
import json
import logging
import os
import sys
from functools import partial
from typing import Callable, List, Optional

from .archive import find_entries_by_external_link, load_archive_data
from .composer import ImageFetcher, create_notification_message
from .config import AppConfig, load_config
from .extractor import extract_external_link_changes
from .git_diff import DiffError, get_git_diff
from .image_fetcher import download_image_as_base64
from .models import NotificationPayload
from .qq_notifier import send_notification

logger = logging.getLogger(__name__)

Sender = Callable[[NotificationPayload], bool]

EXIT_OK = 0
EXIT_ERROR = 1


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def run_once(
    config: AppConfig,
    dry_run: bool = False,
    fetch_image: Optional[ImageFetcher] = None,
    send: Optional[Sender] = None,
) -> int:
    """
    Notify the chat group about external links added by the last commit.

    Returns:
        The process exit code. Failed sends are logged but do not change it;
        only a diff or archive load failure returns non-zero.
    """
    if fetch_image is None:
        fetch_image = partial(
            download_image_as_base64,
            timeout=config.image_timeout,
            deadline=config.image_deadline,
            verify_tls=config.verify_tls,
        )
    if send is None:
        send = partial(
            send_notification,
            config=config.bot,
            timeout=config.send_timeout,
            verify_tls=config.verify_tls,
        )

    logger.info(
        f"Analyzing git diff {config.base_revision}..{config.head_revision} "
        f"of {config.data_file} for external_link changes..."
    )
    try:
        diff_text = get_git_diff(
            config.repo_root, config.data_file, config.base_revision, config.head_revision
        )
    except DiffError as e:
        logger.error(f"Error reading git diff: {e}")
        return EXIT_ERROR

    if not diff_text:
        logger.info("No git diff found")
        return EXIT_OK

    external_link_changes = extract_external_link_changes(diff_text)
    if not external_link_changes:
        logger.info("No external_link changes found")
        return EXIT_OK

    logger.info(f"Found {len(external_link_changes)} external_link changes")

    records = load_archive_data(config.data_path)
    if not records:
        logger.error("No archive data found")
        return EXIT_ERROR

    entries_to_notify = find_entries_by_external_link(records, external_link_changes)
    if not entries_to_notify:
        logger.info("No entries found for notification")
        return EXIT_OK

    logger.info(f"Sending notifications for {len(entries_to_notify)} entries")

    failures: List[str] = []
    for entry in entries_to_notify:
        logger.info(f"Processing entry: {entry.display_name}")
        payload = create_notification_message(
            entry, fetch_image=fetch_image, replay_base_url=config.replay_base_url
        )

        if dry_run:
            logger.info(f"Dry run, not sending: {json.dumps(payload.preview(), ensure_ascii=False)}")
            continue

        if send(payload):
            logger.info(f"Successfully sent notification for: {entry.display_name}")
        else:
            logger.error(f"Failed to send notification for: {entry.display_name}")
            failures.append(entry.display_name)

    if failures:
        logger.warning(f"{len(failures)} of {len(entries_to_notify)} notifications failed")
    logger.info("Notification task completed")
    return EXIT_OK


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    overrides = {
        "base_revision": args.base,
        "head_revision": args.head,
        "data_file": args.data_file,
        "repo_root": args.repo_root,
    }
    return dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description="Send chat notifications for external links added to the archive data file"
    )
    parser.add_argument("--base", default=None, help="Older revision to diff from (default: HEAD~1)")
    parser.add_argument("--head", default=None, help="Newer revision to diff to (default: HEAD)")
    parser.add_argument(
        "--data-file",
        default=None,
        help="Data file path relative to the repository root (default: data/archive.json)"
    )
    parser.add_argument("--repo-root", default=None, help="Repository working tree (default: .)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and log messages without sending them"
    )
    args = parser.parse_args(argv)

    _configure_logging()
    logger.info("Starting notification task...")

    try:
        config = load_config()
    except ValueError as e:
        logger.error(f"Error: {e}")
        sys.exit(EXIT_ERROR)

    sys.exit(run_once(_apply_overrides(config, args), dry_run=args.dry_run))


if __name__ == "__main__":
    main()
