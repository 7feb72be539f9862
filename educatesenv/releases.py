"""Filtering and ordering of remote release versions."""

from __future__ import annotations

from collections.abc import Iterable

from educatesenv.github_client import Release

PRE_RELEASE_MARKERS = ("-alpha", "-beta", "-rc", ".alpha.", ".beta.", ".rc.")
RECENT_LIMIT = 10


def is_pre_release(version: str) -> bool:
    """Tell whether a version string carries a pre-release marker."""
    lowered = version.lower()
    return any(marker in lowered for marker in PRE_RELEASE_MARKERS)


def select_versions(
    releases: Iterable[Release],
    show_all: bool = False,
    recents_only: bool = False,
) -> list[str]:
    """Return release tags, newest first by string order.

    Pre-releases are dropped unless ``show_all``; ``recents_only`` keeps
    only the first ten.
    """
    versions = []
    for release in releases:
        version = release.tag_name or ""
        if not show_all and (release.prerelease or is_pre_release(version)):
            continue
        versions.append(version)

    versions.sort(reverse=True)
    if recents_only:
        versions = versions[:RECENT_LIMIT]
    return versions