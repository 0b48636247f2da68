"""Wall-clock limits for blocking network calls."""

import threading
from typing import Any, Callable


class DeadlineExceeded(Exception):
    """Raised when a call does not finish within its deadline."""


def call_with_deadline(deadline: float, func: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Run a blocking call in a daemon thread and wait at most `deadline` seconds.

    `requests` timeouts bound each socket read, not the whole transfer, so a
    server trickling bytes can hold a call open indefinitely. The worker is
    abandoned (not killed) once the deadline passes; being a daemon thread it
    never keeps the process alive.

    Raises:
        DeadlineExceeded: If func is still running after `deadline` seconds.
        Exception: Whatever func raised.
    """
    outcome = {}

    def _target():
        try:
            outcome["result"] = func(*args, **kwargs)
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=_target, name=f"deadline-{getattr(func, '__name__', 'call')}", daemon=True)
    worker.start()
    worker.join(deadline)

    if worker.is_alive():
        raise DeadlineExceeded(f"did not finish within {deadline}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome["result"]
