"""Shared fixtures."""

import json
import shutil
import socket
import subprocess
import threading
import time

import pytest

from archive_notifier.config import AppConfig, BotConfig
from archive_notifier.models import Record


@pytest.fixture
def bot_config() -> BotConfig:
    return BotConfig(
        url="https://bot.example.com",
        host="bot.internal",
        group_id="123456",
        token="test-token",
    )


@pytest.fixture
def app_config(tmp_path, bot_config) -> AppConfig:
    return AppConfig(bot=bot_config, repo_root=str(tmp_path))


@pytest.fixture
def sample_records() -> list:
    return [
        Record(name="Live 1", description="First", external_link="/archive/1"),
        Record(
            name="Live 2",
            description="Second",
            external_link="/archive/2",
            thumbnail_image_url="https://img.example.com/2.png",
        ),
        Record(name="Live 2 (dup)", description="", external_link="/archive/2"),
    ]


def _read_request(conn):
    """Consume one HTTP request (headers and Content-Length body)."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(4096)
        if not chunk:
            return
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = conn.recv(4096)
        if not chunk:
            return
        body += chunk


@pytest.fixture
def http_server(monkeypatch):
    """Start a local HTTP server returning a canned response.

    `http_server(status, body, interval)` returns the base URL. With an
    interval, the body is written one byte at a time with that many seconds
    between bytes.
    """
    for key in ("NO_PROXY", "no_proxy"):
        monkeypatch.setenv(key, "127.0.0.1,localhost")
    stopped = threading.Event()
    listeners = []

    def start(status="200 OK", body=b"", interval=0.0):
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        listener.listen(5)
        listener.settimeout(0.1)
        listeners.append(listener)
        head = (
            f"HTTP/1.1 {status}\r\n"
            f"Content-Type: application/octet-stream\r\n"
            f"Content-Length: {len(body)}\r\n"
            f"Connection: close\r\n\r\n"
        ).encode("ascii")

        def serve():
            while not stopped.is_set():
                try:
                    conn, _ = listener.accept()
                except socket.timeout:
                    continue
                except OSError:
                    return
                with conn:
                    try:
                        _read_request(conn)
                        conn.sendall(head)
                        if not interval:
                            conn.sendall(body)
                            continue
                        for byte in body:
                            if stopped.is_set():
                                break
                            conn.sendall(bytes([byte]))
                            time.sleep(interval)
                    except OSError:
                        pass

        threading.Thread(target=serve, daemon=True).start()
        host, port = listener.getsockname()
        return f"http://{host}:{port}"

    yield start

    stopped.set()
    for listener in listeners:
        listener.close()


def _git(repo, *args):
    subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def git_repo(tmp_path):
    """A repository with one commit containing data/archive.json.

    Returns a `commit(entries)` function that rewrites the file and commits it.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    _git(tmp_path, "init", "-q")
    data_dir = tmp_path / "data"
    data_dir.mkdir()

    def commit(entries):
        (data_dir / "archive.json").write_text(
            json.dumps(entries, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )
        _git(tmp_path, "add", "data/archive.json")
        _git(tmp_path, "commit", "-q", "-m", "update archive")

    commit([{"name": "Old", "description": "", "external_link": "/archive/0"}])
    return commit
