"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

The build pipeline only needs two things from GitHub: the list of releases of the
asset repository and the tarball of the chosen one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from wargo.errors import WargoError

logger = logging.getLogger(__name__)

API_TIMEOUT = 30
DOWNLOAD_TIMEOUT = 120
_CHUNK_SIZE = 64 * 1024


class GitHubError(WargoError):
    pass


@dataclass(frozen=True)
class ReleaseInfo:
    tag_name: str
    tarball_url: str
    name: str = ""
    prerelease: bool = False
    draft: bool = False


class GitHubClient:
    def __init__(
        self,
        token: str | None = None,
        api_base: str = "https://api.github.com",
        user_agent: str = "wargo-agent",
    ) -> None:
        # Anonymous access is enough for public release listings.
        self._token = (token or "").strip() or None
        self._api_base = api_base.rstrip("/")
        self._user_agent = user_agent

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": self._user_agent,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._api_base}{path}"
        try:
            r = requests.request(method, url, headers=self._headers(), params=params, timeout=API_TIMEOUT)
        except requests.RequestException as e:
            raise GitHubError(f"GitHub API request failed {method} {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(f"GitHub API error {r.status_code} {method} {path}: {message}")
        if r.status_code == 204:
            return None
        return r.json()

    def list_releases(self, owner: str, repo: str) -> list[ReleaseInfo]:
        """
        Return the published releases of owner/repo, newest first as GitHub lists them.

        Draft releases are skipped; they have no public tarball.
        """
        data = self._request("GET", f"/repos/{owner}/{repo}/releases", params={"per_page": 100})
        if not isinstance(data, list):
            raise GitHubError(f"Unexpected releases payload for {owner}/{repo}: expected a list.")

        releases: list[ReleaseInfo] = []
        for raw in data:
            if not isinstance(raw, dict):
                logger.debug("Skipping malformed release entry %r", raw)
                continue
            if raw.get("draft"):
                continue
            tarball_url = raw.get("tarball_url")
            if not tarball_url:
                logger.debug("Skipping release %r without a tarball", raw.get("tag_name"))
                continue
            releases.append(
                ReleaseInfo(
                    tag_name=str(raw.get("tag_name") or ""),
                    tarball_url=str(tarball_url),
                    name=str(raw.get("name") or ""),
                    prerelease=bool(raw.get("prerelease")),
                )
            )
        return releases

    def download(self, url: str, dest: str | Path) -> Path:
        """
        Stream `url` into the file `dest` and return its path.
        """
        dest_path = Path(dest)
        try:
            with requests.get(url, headers=self._headers(), stream=True, timeout=DOWNLOAD_TIMEOUT) as r:
                if r.status_code >= 400:
                    raise GitHubError(f"Could not download release tarball, status {r.status_code}: {url}")
                with dest_path.open("wb") as fh:
                    for chunk in r.iter_content(chunk_size=_CHUNK_SIZE):
                        if chunk:
                            fh.write(chunk)
        except requests.RequestException as e:
            raise GitHubError(f"Could not download release tarball, error: {e}") from e
        return dest_path
