import pytest
import requests
import responses
from responses import matchers

from educatesenv.github_client import GitHubClient, GitHubError, Release

RELEASES_URL = "https://api.github.com/repos/testorg/testrepo/releases"
TAG_URL = "https://api.github.com/repos/testorg/testrepo/releases/tags/"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def client():
    return GitHubClient("testorg", "testrepo")


def _release(tag, prerelease=False, assets=()):
    return {
        "tag_name": tag,
        "prerelease": prerelease,
        "assets": [{"name": n, "browser_download_url": u} for n, u in assets],
    }


def test_list_releases_parses_payload(rsps, client):
    rsps.get(
        RELEASES_URL,
        json=[
            _release("v2.0.0", assets=[("educates-linux-amd64", "https://example.com/a")]),
            _release("v2.1.0-rc.1", prerelease=True),
        ],
        match=[matchers.query_param_matcher({"per_page": "100"})],
    )
    releases = client.list_releases()
    assert [r.tag_name for r in releases] == ["v2.0.0", "v2.1.0-rc.1"]
    assert [r.prerelease for r in releases] == [False, True]
    assert releases[0].assets == {"educates-linux-amd64": "https://example.com/a"}


def test_list_releases_error(rsps, client):
    rsps.get(RELEASES_URL, status=500)
    with pytest.raises(GitHubError, match="failed to fetch releases"):
        client.list_releases()


def test_latest_release_skips_prereleases(rsps, client):
    rsps.get(
        RELEASES_URL,
        json=[
            _release("v3.0.0-beta", prerelease=True),
            _release(None),
            _release("v2.9.0"),
            _release("v2.8.0"),
        ],
        match=[matchers.query_param_matcher({"per_page": "10"})],
    )
    assert client.latest_release_version() == "v2.9.0"


def test_latest_release_none_found(rsps, client):
    rsps.get(RELEASES_URL, json=[])
    with pytest.raises(GitHubError, match="no releases found in testorg/testrepo"):
        client.latest_release_version()


def test_latest_release_only_prereleases(rsps, client):
    rsps.get(RELEASES_URL, json=[_release("v3.0.0-rc.1", prerelease=True)])
    with pytest.raises(GitHubError, match="no stable releases found in testorg/testrepo"):
        client.latest_release_version()


def test_latest_release_repository_missing(rsps, client):
    rsps.get(RELEASES_URL, status=404)
    with pytest.raises(GitHubError, match="repository testorg/testrepo not found") as info:
        client.latest_release_version()
    assert info.value.status_code == 404


def test_latest_release_server_error(rsps, client):
    rsps.get(RELEASES_URL, status=502)
    with pytest.raises(GitHubError, match="failed to fetch releases") as info:
        client.latest_release_version()
    assert info.value.status_code == 502


def test_release_asset_url_found(rsps, client):
    rsps.get(
        TAG_URL + "v2.0.0",
        json=_release(
            "v2.0.0",
            assets=[
                ("educates-darwin-arm64", "https://example.com/darwin"),
                ("educates-linux-amd64", "https://example.com/linux"),
            ],
        ),
    )
    url = client.release_asset_url("v2.0.0", "educates-linux-amd64")
    assert url == "https://example.com/linux"


def test_release_asset_url_missing_asset(rsps, client):
    rsps.get(TAG_URL + "v2.0.0", json=_release("v2.0.0"))
    with pytest.raises(GitHubError, match="is not available for your platform"):
        client.release_asset_url("v2.0.0", "educates-linux-386")


def test_release_asset_url_unknown_version(rsps, client):
    rsps.get(TAG_URL + "v9.9.9", status=404)
    with pytest.raises(GitHubError, match="version v9.9.9 not found"):
        client.release_asset_url("v9.9.9", "educates-linux-amd64")


def test_release_asset_url_other_failure(rsps, client):
    rsps.get(TAG_URL + "v2.0.0", status=500)
    with pytest.raises(GitHubError, match="failed to fetch release info"):
        client.release_asset_url("v2.0.0", "educates-linux-amd64")


def test_token_sent_as_bearer(rsps):
    rsps.get(RELEASES_URL, json=[_release("v1.0.0")])
    releases = GitHubClient("testorg", "testrepo", token="token").list_releases()
    assert [r.tag_name for r in releases] == ["v1.0.0"]
    assert rsps.calls[0].request.headers["Authorization"] == "Bearer token"


def test_no_authorization_without_token(rsps, client):
    rsps.get(RELEASES_URL, json=[_release("v1.0.0")])
    releases = client.list_releases()
    assert [r.tag_name for r in releases] == ["v1.0.0"]
    assert "Authorization" not in rsps.calls[0].request.headers


def test_connection_failure_is_wrapped(rsps, client):
    rsps.get(RELEASES_URL, body=requests.ConnectionError("unreachable"))
    with pytest.raises(GitHubError, match="failed to fetch releases") as info:
        client.list_releases()
    assert info.value.status_code is None


def test_release_from_api_defaults():
    release = Release.from_api({})
    assert release.tag_name is None
    assert release.prerelease is False
    assert release.assets == {}