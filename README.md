# educatesenv

A small library for keeping several versions of the `educates` binary side by
side. Release binaries are downloaded from a GitHub repository's releases into
a local bin directory as `educates-<version>`, and a symlink named `educates`
in that directory points at the version currently in use. A locally built
development binary can also be made active.

## Platforms

Release assets are expected for macOS and Linux on `amd64` and `arm64`, named
`educates-<os>-<arch>`:

```python
from educatesenv.platform import current_platform, is_supported_platform, platform_binary_name

print(platform_binary_name("linux", "arm64"))     # educates-linux-arm64
print(is_supported_platform("freebsd", "amd64"))  # False
print(current_platform())                         # e.g. ('linux', 'amd64')
```

`current_platform()` maps the running system and machine to these names
(`x86_64` becomes `amd64`, `aarch64` becomes `arm64`, and so on).

## Looking at releases

```python
from educatesenv.github_client import GitHubClient, GitHubError
from educatesenv.releases import select_versions

client = GitHubClient("educates", "educates-training-platform")

try:
    print("latest stable:", client.latest_release_version())
    releases = client.list_releases()
except GitHubError as exc:
    print("error:", exc)
else:
    # Stable releases only, newest first by string order, at most ten of them.
    for version in select_versions(releases, show_all=False, recents_only=True):
        print("-", version)
```

- `latest_release_version()` looks at the ten most recent releases and returns
  the tag of the first one not marked as a pre-release.
- `list_releases()` returns up to one hundred `Release` objects, each with
  `tag_name`, `prerelease` and `assets` (asset name to download URL).
- `release_asset_url(version, asset_name)` returns the download URL of one
  asset of the release tagged `version`.

All of these raise `GitHubError`; its `status_code` holds the HTTP status when
there was one. Pass a token (`GitHubClient(org, repo, token="token")`) to send
it as a bearer token, and `session=` a `requests.Session` to reuse connections
or configure proxies.

`is_pre_release("3.0.0-rc.1")` tells whether a tag looks like a pre-release
(`-alpha`, `-beta`, `-rc` and the dotted forms `.alpha.`, `.beta.`, `.rc.`,
case-insensitively). `select_versions` drops those, and releases flagged as
pre-releases, unless `show_all=True`.

## Installing and switching versions

```python
from pathlib import Path

from educatesenv.github_client import GitHubError
from educatesenv.manager import VersionError, VersionManager

bin_dir = Path.home() / ".educatesenv" / "bin"
manager = VersionManager(bin_dir, client)

try:
    # Download the release for this platform and make it active.
    manager.install_version("3.2.0", force=False, activate=True)
    # Later, switch to another installed version.
    manager.use_version("3.1.0")
except (VersionError, GitHubError) as exc:
    print("error:", exc)

installed = manager.installed_versions()
print(installed.versions, installed.active)
```

`install_version` creates the bin directory if needed, skips the download when
the version is already present (unless `force=True`), makes the file
executable, and prints its progress to standard output. `use_version` replaces
the `educates` symlink with a relative link to the chosen binary; it refuses to
touch an `educates` entry that is not a symlink.

`installed_versions()` creates the bin directory if it is missing and returns
an `InstalledVersions` with the sorted installed `versions`, the `active`
version, and the development settings with `development_active` telling
whether the symlink points at the development binary.

Add the bin directory to your `PATH` so that `educates` resolves to the active
version.

### Development binary

Construct the manager with `development_enabled=True` and
`development_binary=` the path of a locally built binary, then call
`use_version("develop")` to point the `educates` symlink at it. When
development mode is off, `validate_development_mode()` removes an `educates`
symlink that points outside the bin directory or at a file without the
`educates-` prefix, and then raises `VersionError` saying so, so the caller can
warn that a regular version should be selected.

## Version of this package

`educatesenv.buildinfo.get_version()` reports the version of the installed
distribution, falling back to `develop` when it is not installed; pass a
non-empty string to override it.

## What this package does not do

It is a library only: there is no command-line program, and nothing reads or
writes a configuration file or environment variables. The repository, token,
bin directory and development settings are passed in by the caller, and
printing shell `PATH` instructions is left to the caller as well.