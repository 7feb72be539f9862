"""Installing, activating and listing educates binaries in a managed directory."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import requests

from educatesenv.github_client import GitHubClient
from educatesenv.platform import (
    BINARY_PREFIX,
    current_platform,
    is_supported_platform,
    platform_binary_name,
)

ACTIVE_LINK_NAME = "educates"
DEVELOP = "develop"
DOWNLOAD_TIMEOUT = 60
_CHUNK_SIZE = 64 * 1024


class VersionError(Exception):
    """Raised when a version cannot be installed, activated or inspected."""


@dataclass
class InstalledVersions:
    """What is installed in the managed directory and which entry is active."""

    versions: list[str] = field(default_factory=list)
    active: str | None = None
    development_enabled: bool = False
    development_binary: str = ""
    development_active: bool = False


class VersionManager:
    """Keeps versioned binaries in ``bin_dir`` and a symlink to the active one."""

    def __init__(
        self,
        bin_dir: str | os.PathLike[str],
        github: GitHubClient | None,
        development_enabled: bool = False,
        development_binary: str = "",
    ) -> None:
        self.bin_dir = Path(bin_dir)
        self.github = github
        self.development_enabled = development_enabled
        self.development_binary = development_binary
        self.platform: tuple[str, str] = current_platform()

    @property
    def _link_path(self) -> Path:
        return self.bin_dir / ACTIVE_LINK_NAME

    def _binary_path(self, version: str) -> Path:
        return self.bin_dir / f"{BINARY_PREFIX}{version}"

    def _is_dev_symlink(self, link: Path) -> bool:
        try:
            target = os.readlink(link)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise VersionError(f"failed to read symlink: {exc}") from exc

        if not os.path.isabs(target):
            target = os.path.join(os.path.dirname(link), target)
        return not target.startswith(str(self.bin_dir)) or not os.path.basename(
            target
        ).startswith(BINARY_PREFIX)

    def validate_development_mode(self) -> None:
        """Remove a leftover link to a development binary when development mode is off.

        Raises VersionError after removing such a link so the caller can warn.
        """
        if self.development_enabled:
            return

        link = self._link_path
        try:
            is_dev = self._is_dev_symlink(link)
        except VersionError as exc:
            raise VersionError(f"failed to validate development mode: {exc}") from exc

        if is_dev:
            try:
                link.unlink()
            except OSError as exc:
                raise VersionError(
                    f"failed to remove development symlink: {exc}"
                ) from exc
            raise VersionError(
                "development mode is disabled; removed symlink to development "
                "binary. Please use 'educatesenv use <version>' to select a version"
            )

    def use_version(self, version: str) -> None:
        """Point the active link at an installed version or at the development binary."""
        if version == DEVELOP:
            if not self.development_enabled:
                raise VersionError(
                    "development mode is not enabled. Enable it in the config file "
                    "by setting development.enabled to true"
                )
            if not self.development_binary:
                raise VersionError(
                    "development binary location is not set. Set "
                    "development.binaryLocation in the config file"
                )
            self._create_symlink(Path(self.development_binary), self._link_path)
            return

        self._create_symlink(self._binary_path(version), self._link_path)

    def platform_binary_name(self) -> str:
        """Return the release asset name for this machine."""
        os_name, arch = self.platform
        if not is_supported_platform(os_name, arch):
            raise VersionError(f"unsupported platform: {os_name}-{arch}")
        return platform_binary_name(os_name, arch)

    def install_version(
        self, version: str, force: bool = False, activate: bool = False
    ) -> None:
        """Download ``version`` unless present (or ``force``), optionally activating it."""
        try:
            self.bin_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise VersionError(
                f"failed to create bin directory {self.bin_dir}: {exc}"
            ) from exc

        binary_path = self._binary_path(version)
        exists = binary_path.exists()

        if exists and not force:
            print(f"Version {version} is already installed.")
        else:
            if exists:
                print(f"Reinstalling version {version}...")
            else:
                print(f"Installing version {version}...")

            try:
                asset_name = self.platform_binary_name()
            except VersionError as exc:
                raise VersionError(
                    f"failed to determine platform binary name: {exc}"
                ) from exc

            if self.github is None:
                raise VersionError("no release source is configured")
            download_url = self.github.release_asset_url(version, asset_name)

            print(f"Downloading {download_url}...")
            try:
                self._download(download_url, binary_path)
            except (VersionError, requests.RequestException, OSError) as exc:
                raise VersionError(
                    "failed to download binary (check your internet connection "
                    f"and try again): {exc}"
                ) from exc
            try:
                binary_path.chmod(0o755)
            except OSError as exc:
                raise VersionError(
                    f"failed to set executable permissions on {binary_path}: {exc}"
                ) from exc
            print(f"educates {version} installed successfully.")

        if activate:
            try:
                self.use_version(version)
            except VersionError as exc:
                raise VersionError(
                    "installation succeeded but failed to set version "
                    f"{version} as active: {exc}"
                ) from exc
            print(f"educates {version} is now active.")

    def installed_versions(self) -> InstalledVersions:
        """Describe the installed versions, creating the directory if it is missing."""
        if not self.bin_dir.is_dir():
            try:
                self.bin_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise VersionError("you should run `educatesenv init` first") from exc

        result = InstalledVersions(
            development_enabled=self.development_enabled,
            development_binary=self.development_binary,
        )

        try:
            target = os.readlink(self._link_path)
        except OSError:
            target = None
        if target is not None:
            resolved = (
                target
                if os.path.isabs(target)
                else os.path.join(str(self.bin_dir), target)
            )
            if self.development_enabled and (
                target == self.development_binary
                or os.path.normpath(resolved)
                == os.path.normpath(self.development_binary or "\0")
            ):
                result.development_active = True
            else:
                name = os.path.basename(target)
                result.active = name.removeprefix(BINARY_PREFIX)

        with os.scandir(self.bin_dir) as entries:
            names = sorted(
                entry.name
                for entry in entries
                if not entry.is_dir() and entry.name != ACTIVE_LINK_NAME
            )
        result.versions = [
            name.removeprefix(BINARY_PREFIX)
            for name in names
            if name.startswith(BINARY_PREFIX)
        ]
        return result

    @staticmethod
    def _create_symlink(source: Path, target: Path) -> None:
        try:
            source.stat()
        except FileNotFoundError:
            raise VersionError(f"binary not found at {source}") from None
        except OSError as exc:
            raise VersionError(f"failed to check binary: {exc}") from exc

        if target.is_symlink():
            try:
                target.unlink()
            except OSError as exc:
                raise VersionError(f"failed to remove existing symlink: {exc}") from exc
        elif os.path.lexists(target):
            raise VersionError(f"{target} exists and is not a symlink")

        try:
            link_value = os.path.relpath(source, os.path.dirname(target))
        except ValueError:
            link_value = str(source)
        try:
            os.symlink(link_value, target)
        except OSError as exc:
            raise VersionError(f"failed to create symlink: {exc}") from exc

    @staticmethod
    def _download(url: str, out_path: Path) -> None:
        with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as response:
            if response.status_code != 200:
                raise VersionError(
                    f"failed to download file: {response.status_code} {response.reason}"
                )
            with open(out_path, "wb") as out:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    out.write(chunk)