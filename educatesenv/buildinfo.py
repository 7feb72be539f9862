"""Version string of this tool."""

from __future__ import annotations

from importlib import metadata

DEFAULT_VERSION = "develop"
DISTRIBUTION_NAME = "educatesenv"


def get_version(override: str | None = None) -> str:
    """Return the tool's version.

    A non-empty ``override`` wins; otherwise the installed distribution's
    version is used, falling back to ``"develop"``.
    """
    if override:
        return override
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return DEFAULT_VERSION


VERSION = get_version()