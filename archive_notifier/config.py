"""Configuration management."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_FILE = "data/archive.json"
DEFAULT_REPLAY_BASE_URL = "https://assets.link-like-lovelive.app"


@dataclass
class BotConfig:
    """Chat bot endpoint configuration."""
    url: str        # e.g. "https://bot.example.com", without /send_group_msg
    host: str       # value for the Host header
    group_id: str
    token: str      # bearer token


@dataclass
class AppConfig:
    """Complete application configuration."""
    bot: BotConfig
    repo_root: str = "."
    data_file: str = DEFAULT_DATA_FILE  # relative to repo_root
    base_revision: str = "HEAD~1"
    head_revision: str = "HEAD"
    replay_base_url: str = DEFAULT_REPLAY_BASE_URL
    image_timeout: float = 10.0
    image_deadline: float = 15.0  # hard cap on a whole image download
    send_timeout: float = 30.0    # limit for the whole bot request
    verify_tls: bool = False

    @property
    def data_path(self) -> str:
        return os.path.join(self.repo_root, self.data_file)


def _parse_bool_env(key: str, default: bool) -> bool:
    """Parse a true/false environment variable."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> AppConfig:
    """
    Load configuration from environment variables.

    Raises:
        ValueError: If required configuration values are missing.
    """
    bot_url = os.getenv("QQ_BOT_URL")
    bot_host = os.getenv("QQ_BOT_HOST")
    group_id = os.getenv("GROUP_ID")
    auth_token = os.getenv("AUTH_TOKEN")

    # Validate required fields
    missing = []
    if not bot_url:
        missing.append("QQ_BOT_URL")
    if not bot_host:
        missing.append("QQ_BOT_HOST")
    if not group_id:
        missing.append("GROUP_ID")
    if not auth_token:
        missing.append("AUTH_TOKEN")

    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    return AppConfig(
        bot=BotConfig(
            url=bot_url.rstrip("/"),
            host=bot_host,
            group_id=group_id,
            token=auth_token,
        ),
        repo_root=os.getenv("ARCHIVE_REPO_ROOT", "."),
        data_file=os.getenv("ARCHIVE_DATA_FILE", DEFAULT_DATA_FILE),
        base_revision=os.getenv("ARCHIVE_BASE_REVISION", "HEAD~1"),
        head_revision=os.getenv("ARCHIVE_HEAD_REVISION", "HEAD"),
        replay_base_url=os.getenv("REPLAY_BASE_URL", DEFAULT_REPLAY_BASE_URL),
        image_timeout=float(os.getenv("IMAGE_TIMEOUT", "10")),
        image_deadline=float(os.getenv("IMAGE_DEADLINE", "15")),
        send_timeout=float(os.getenv("SEND_TIMEOUT", "30")),
        verify_tls=_parse_bool_env("BOT_VERIFY_TLS", False),
    )
