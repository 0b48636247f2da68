"""Git diff access for the archive data file."""

import logging
import subprocess

logger = logging.getLogger(__name__)


class DiffError(Exception):
    """Raised when git cannot produce a diff."""


def get_git_diff(repo_root: str, data_file: str, base: str = "HEAD~1", head: str = "HEAD") -> str:
    """
    Get the git diff of a single file between two revisions.

    Args:
        repo_root: Working tree of the repository.
        data_file: Path of the data file, relative to repo_root.
        base: Older revision.
        head: Newer revision.

    Returns:
        Unified diff text (empty if the file did not change).

    Raises:
        DiffError: If git cannot be run or exits non-zero.
    """
    cmd = ["git", "diff", base, head, "--", data_file]
    logger.debug(f"Running: {' '.join(cmd)} (cwd={repo_root})")
    try:
        result = subprocess.run(
            cmd,
            cwd=repo_root,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )
    except OSError as e:
        raise DiffError(f"could not run git: {e}") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise DiffError(f"git diff exited with code {e.returncode}: {stderr}") from e
    return result.stdout
