"""Background check for a newer release on GitHub.

The check runs on a daemon thread so the network round trip overlaps with
load order generation. Its output is buffered and only printed by the main
thread after join(), keeping it out of the middle of the main output.
"""

import queue
import threading
import time
from dataclasses import dataclass
from typing import Optional

import requests

from .. import __author__, __repo__, __version__
from ..console import ConsoleOutput
from ..logging_config import get_logger

logger = get_logger("update_checker")

GITHUB_API = "https://api.github.com"

# Only releases whose name contains this marker belong to the CLI
RELEASE_MARKER = "CLI"

JOIN_TIMEOUT = 5.0
REQUEST_TIMEOUT = 10


class ReleaseLookupError(Exception):
    """Raised when the latest release cannot be retrieved or understood"""
    pass


@dataclass(frozen=True)
class ReleaseInfo:
    """Latest published release of the project"""
    tag_name: str
    name: str
    html_url: str


def fetch_latest_release(owner: str = __author__, repo: str = __repo__,
                         timeout: float = REQUEST_TIMEOUT) -> ReleaseInfo:
    """Get the latest release from GitHub.

    Raises:
        ReleaseLookupError: On network errors, HTTP errors or an unexpected payload
    """
    api_url = f"{GITHUB_API}/repos/{owner}/{repo}/releases/latest"
    try:
        response = requests.get(
            api_url,
            headers={"Accept": "application/vnd.github+json", "User-Agent": repo},
            timeout=timeout,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise ReleaseLookupError(f"Failed to get latest release: {e}") from e

    if not isinstance(data, dict) or not data.get("tag_name"):
        raise ReleaseLookupError("Invalid release data received from GitHub")

    return ReleaseInfo(
        tag_name=data["tag_name"],
        name=data.get("name") or "",
        html_url=data.get("html_url") or f"https://github.com/{owner}/{repo}/releases",
    )


def build_update_report(release: ReleaseInfo, current_version: str = __version__) -> ConsoleOutput:
    """Describe whether an update is available, as buffered console output."""
    console = ConsoleOutput(buffered=True)

    if RELEASE_MARKER in release.name and release.tag_name != current_version:
        console.write_line("New version detected!\n")
        console.write_line(f"Current version: {current_version}")
        console.write_line(f"New version: {release.tag_name}\n")
        console.write_line(f"Please update by going to {release.html_url}\n")
    else:
        console.write_line("Current version is up to date\n")

    return console


class UpdateChecker:
    """Runs one update check on a background thread.

    Usage::

        checker = UpdateChecker()
        checker.start()
        ...
        report = checker.join(timeout=5.0)
        if report is not None:
            report.flush()

    Args:
        owner: GitHub owner of the project
        repo: GitHub repository name
        current_version: Version string of the running tool
    """

    def __init__(self, owner: str = __author__, repo: str = __repo__,
                 current_version: str = __version__):
        self.owner = owner
        self.repo = repo
        self.current_version = current_version
        self._result: "queue.Queue[Optional[ConsoleOutput]]" = queue.Queue(maxsize=1)
        self._thread: Optional[threading.Thread] = None
        self._joined = False

    @property
    def started(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        """Start the check. Calling start() more than once has no effect."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="update-check", daemon=True)
        self._thread.start()

    def check(self) -> Optional[ConsoleOutput]:
        """Run the check on the calling thread.

        Returns:
            Buffered report, or None if the check failed for any reason
        """
        try:
            release = fetch_latest_release(self.owner, self.repo)
            return build_update_report(release, self.current_version)
        except ReleaseLookupError as e:
            logger.warning(str(e))
        except Exception:
            logger.exception("Unexpected error while checking for updates")
        return None

    def _run(self) -> None:
        self._result.put(self.check())

    def join(self, timeout: float = JOIN_TIMEOUT) -> Optional[ConsoleOutput]:
        """Wait up to ``timeout`` seconds for the report.

        A report that arrives after the wait expired is dropped; later calls
        return None.

        Returns:
            Buffered report, or None if the check failed, timed out or never started
        """
        if self._thread is None or self._joined:
            return None
        self._joined = True

        started = time.monotonic()
        try:
            report = self._result.get(timeout=timeout)
        except queue.Empty:
            logger.info(f"Update check did not finish within {timeout:.1f}s")
            return None

        logger.debug(f"Update check joined after {time.monotonic() - started:.2f}s")
        return report
