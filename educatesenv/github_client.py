"""Access to the release listing of a GitHub repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import requests


class GitHubError(Exception):
    """Raised when release information cannot be obtained."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class Release:
    """A published release and its downloadable assets (name -> URL)."""

    tag_name: str | None
    prerelease: bool = False
    assets: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Release:
        assets = {
            (asset.get("name") or ""): (asset.get("browser_download_url") or "")
            for asset in data.get("assets") or ()
        }
        return cls(
            tag_name=data.get("tag_name"),
            prerelease=bool(data.get("prerelease", False)),
            assets=assets,
        )


class GitHubClient:
    """Reads releases of one repository, optionally authenticated."""

    API_URL = "https://api.github.com"
    TIMEOUT = 30

    def __init__(
        self,
        org: str,
        repository: str,
        token: str = "",
        session: requests.Session | None = None,
    ) -> None:
        self.org = org
        self.repository = repository
        self._session = session if session is not None else requests.Session()
        self._headers = {"Accept": "application/vnd.github+json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    @property
    def _slug(self) -> str:
        return f"{self.org}/{self.repository}"

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.API_URL}/repos/{self.org}/{self.repository}{path}"
        try:
            response = self._session.get(
                url, params=params, headers=self._headers, timeout=self.TIMEOUT
            )
        except requests.RequestException as exc:
            raise GitHubError(f"GET {url}: {exc}") from exc
        if response.status_code >= 400:
            raise GitHubError(
                f"GET {url}: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubError(f"GET {url}: invalid JSON response") from exc

    def _fetch_releases(self, per_page: int) -> list[Release]:
        data = self._get_json("/releases", params={"per_page": per_page})
        return [Release.from_api(item) for item in data]

    def latest_release_version(self) -> str:
        """Return the tag of the newest stable release among the latest ten."""
        try:
            releases = self._fetch_releases(10)
        except GitHubError as exc:
            if exc.status_code == 404:
                raise GitHubError(
                    f"repository {self._slug} not found", status_code=404
                ) from exc
            raise GitHubError(
                f"failed to fetch releases: {exc}", status_code=exc.status_code
            ) from exc

        if not releases:
            raise GitHubError(f"no releases found in {self._slug}")

        for release in releases:
            if release.tag_name is not None and not release.prerelease:
                return release.tag_name
        raise GitHubError(
            f"no stable releases found in {self._slug}. "
            "Try 'educatesenv list-remote --all' to see pre-releases"
        )

    def release_asset_url(self, version: str, asset_name: str) -> str:
        """Return the download URL of an asset of the release tagged ``version``."""
        try:
            data = self._get_json(f"/releases/tags/{quote(version, safe='')}")
        except GitHubError as exc:
            if exc.status_code == 404:
                raise GitHubError(
                    f"version {version} not found. "
                    "Run 'educatesenv list-remote' to see available versions",
                    status_code=404,
                ) from exc
            raise GitHubError(
                f"failed to fetch release info: {exc}", status_code=exc.status_code
            ) from exc

        release = Release.from_api(data)
        try:
            return release.assets[asset_name]
        except KeyError:
            raise GitHubError(
                f"binary for {version} is not available for your platform "
                f"({asset_name}). Please check supported platforms in the documentation"
            ) from None

    def list_releases(self) -> list[Release]:
        """Return up to one hundred releases, newest first as GitHub orders them."""
        try:
            return self._fetch_releases(100)
        except GitHubError as exc:
            raise GitHubError(
                f"failed to fetch releases: {exc}", status_code=exc.status_code
            ) from exc