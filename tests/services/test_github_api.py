import httpx
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from github import GithubException

from treepull.infrastructure.error_handler import (
    AuthenticationError, ContentNotFoundError, RepositoryNotFoundError, TransportError
)
from treepull.models import RepositoryCoordinate, TreeEntry
from treepull.services.github_api import GitHubAPIService


COORD = RepositoryCoordinate(owner="me", name="repo", branch="dev")


# ---- Fixtures --------------------------------------------------------------

@pytest.fixture
def mock_github():
    """Replaces the PyGithub client so no test reaches the network."""

    with patch("treepull.services.github_api.Github") as mock_cls:
        client = MagicMock()
        mock_cls.return_value = client
        yield client


def make_tree(*items):
    return SimpleNamespace(tree=[
        SimpleNamespace(path=path, type=kind, size=size, sha=f"sha-{path}")
        for path, kind, size in items
    ])


# ---- Raw URLs and headers --------------------------------------------------

def test_raw_url_interpolates_coordinate_and_path():
    service = GitHubAPIService("dummy")
    url = service.raw_url(COORD, "src/main.go")
    assert url == "https://raw.githubusercontent.com/me/repo/dev/src/main.go"


def test_raw_url_quotes_special_characters():
    service = GitHubAPIService("dummy")
    url = service.raw_url(COORD, "docs/my notes#1.md")
    assert url == "https://raw.githubusercontent.com/me/repo/dev/docs/my%20notes%231.md"


def test_raw_url_quotes_branch_and_keeps_its_slashes():
    coord = RepositoryCoordinate(owner="me", name="repo", branch="feature/x y#1?")
    url = GitHubAPIService("dummy").raw_url(coord, "a.txt")
    assert url == "https://raw.githubusercontent.com/me/repo/feature/x%20y%231%3F/a.txt"


def test_raw_url_quotes_owner_and_repo():
    coord = RepositoryCoordinate(owner="my org", name="re#po", branch="main")
    url = GitHubAPIService("dummy").raw_url(coord, "a.txt")
    assert url == "https://raw.githubusercontent.com/my%20org/re%23po/main/a.txt"


def test_raw_url_template_is_configurable():
    service = GitHubAPIService("dummy", raw_url_template="https://ghe.local/{owner}/{repo}/raw/{branch}/{path}")
    assert service.raw_url(COORD, "a.txt") == "https://ghe.local/me/repo/raw/dev/a.txt"


def test_default_http_client_carries_bearer_token():
    service = GitHubAPIService("secret-token")
    assert service.http_client.headers["Authorization"] == "Bearer secret-token"
    service.close()


# ---- Tree listing ----------------------------------------------------------

def test_get_repository_tree_maps_entries_in_order(mock_github):
    repository = MagicMock()
    repository.get_git_tree.return_value = make_tree(
        ("README.md", "blob", 10),
        ("src", "tree", None),
        ("src/app.py", "blob", 20),
    )
    mock_github.get_repo.return_value = repository

    entries = GitHubAPIService("dummy").get_repository_tree(COORD)

    mock_github.get_repo.assert_called_once_with("me/repo", lazy=True)
    repository.get_git_tree.assert_called_once_with("dev", recursive=True)
    assert entries == [
        TreeEntry(path="README.md", type="blob", size=10, sha="sha-README.md"),
        TreeEntry(path="src", type="tree", size=None, sha="sha-src"),
        TreeEntry(path="src/app.py", type="blob", size=20, sha="sha-src/app.py"),
    ]


@pytest.mark.parametrize("status, expected", [
    (401, AuthenticationError),
    (404, RepositoryNotFoundError),
    (500, TransportError),
])
def test_get_repository_tree_translates_api_errors(mock_github, status, expected):
    mock_github.get_repo.return_value.get_git_tree.side_effect = GithubException(status, {"message": "nope"}, None)

    with pytest.raises(expected):
        GitHubAPIService("dummy").get_repository_tree(COORD)


# ---- Raw content -----------------------------------------------------------

def test_open_raw_stream_returns_unread_response():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"body")))
    service = GitHubAPIService("dummy", http_client=client)

    response = service.open_raw_stream("https://raw.example/a.txt")
    try:
        service.check_response(response)
        assert response.read() == b"body"
    finally:
        response.close()


def test_check_response_names_missing_file_url():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    service = GitHubAPIService("dummy", http_client=client)

    response = service.open_raw_stream("https://raw.example/missing.txt")
    try:
        with pytest.raises(ContentNotFoundError) as exc_info:
            service.check_response(response)
    finally:
        response.close()

    assert exc_info.value.url == "https://raw.example/missing.txt"
    assert str(exc_info.value).startswith("File not found at https://raw.example/missing.txt")
    assert "Repository or branch" not in str(exc_info.value)


def test_check_response_rejects_other_error_status():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    service = GitHubAPIService("dummy", http_client=client)

    response = service.open_raw_stream("https://raw.example/broken.txt")
    try:
        with pytest.raises(TransportError):
            service.check_response(response)
    finally:
        response.close()
