"""Fetch per-language line counts for repositories from the GitHub API.

The credential is handed to GitHubClient by the caller (see
collect_languages.py, which reads GITHUB_TOKEN). Requests are spaced out by a
Throttle that also honours the X-RateLimit-* headers GitHub sends back.
"""
import logging
import os
import time
from typing import Callable, Dict, Mapping, Optional

import requests

API_ROOT = os.getenv("GITHUB_API_URL") or "https://api.github.com"
DEFAULT_THROTTLE = 3.0
REQUEST_TIMEOUT = 30

log = logging.getLogger(__name__)


class Throttle:
    """Keep at least `interval` seconds between consecutive API requests.

    When a response reports an exhausted rate limit, the next wait() lasts
    until the advertised reset time instead.
    """

    def __init__(
        self,
        interval: float = DEFAULT_THROTTLE,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        if interval < 0:
            raise ValueError("throttle interval must not be negative")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._wall_clock = wall_clock
        self._last: Optional[float] = None
        self._reset_at: Optional[float] = None

    def wait(self) -> None:
        delay = 0.0
        if self._last is not None:
            delay = self.interval - (self._clock() - self._last)
        if self._reset_at is not None:
            delay = max(delay, self._reset_at - self._wall_clock())
            self._reset_at = None
        if delay > 0:
            log.debug("Throttling for %.2fs", delay)
            self._sleep(delay)
        self._last = self._clock()

    def observe(self, headers: Mapping[str, str]) -> None:
        remaining = headers.get("X-RateLimit-Remaining")
        reset = headers.get("X-RateLimit-Reset")
        if remaining is None or reset is None:
            return
        try:
            if int(remaining) > 0:
                return
            self._reset_at = float(reset)
        except ValueError:
            return
        log.warning("GitHub rate limit exhausted, pausing until %s", int(self._reset_at))


class GitHubClient:
    def __init__(
        self,
        token: str,
        api_root: str = API_ROOT,
        throttle: Optional[Throttle] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.api_root = api_root.rstrip("/")
        self.throttle = throttle if throttle is not None else Throttle()
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "language-stats-collector",
            }
        )

    def list_languages(self, owner: str, repo: str) -> Dict[str, int]:
        """Return {language: line count} as GitHub reports it for owner/repo."""
        url = f"{self.api_root}/repos/{owner}/{repo}/languages"
        self.throttle.wait()
        resp = self.session.get(url, timeout=self.timeout)
        self.throttle.observe(resp.headers)
        if resp.status_code == 204:
            return {}  # Empty repo
        resp.raise_for_status()
        return {lang: int(lines) for lang, lines in resp.json().items()}
